from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases.reservations import (
    create_reservation,
    list_reservations,
    review_reservation,
)
from src.application.use_cases.reservations.review_reservation import ReservationAction
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.websocket.connection_manager import ConnectionManager
from src.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_connection_manager,
    get_uow,
)
from src.interfaces.http.routers.notifications import publish_notifications
from src.interfaces.http.schemas.reservations import (
    ContractSchema,
    RejectReservationRequest,
    ReservationCreateRequest,
    ReservationListItem,
    ReservationListResponse,
    ReservationResponse,
    ReservationSchema,
)

router = APIRouter(prefix="/property-reservations", tags=["reservations"])


def _list_item(listing: list_reservations.ReservationListing) -> ReservationListItem:
    item = ReservationListItem.model_validate(listing.reservation)
    if listing.contract is not None:
        item.contract = ContractSchema.model_validate(listing.contract)
    return item


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create(
    payload: ReservationCreateRequest,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> ReservationResponse:
    result = await create_reservation.execute(
        uow,
        create_reservation.CreateReservationInput(**payload.model_dump()),
        actor_id=context.user_id,
        strict_targeting=settings.notifications_strict_targeting,
    )
    await publish_notifications(manager, [result.notification])
    return ReservationResponse(
        message=(
            "Reservation submitted successfully! "
            "Our team will review your application and contact you soon."
        ),
        data=ReservationSchema.model_validate(result.reservation),
    )


@router.get("", response_model=ReservationListResponse)
async def list_all(
    user_id: str | None = Query(None, alias="userId"),
    status_filter: str | None = Query(None, alias="status"),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> ReservationListResponse:
    listings = await list_reservations.execute(
        uow,
        actor_id=context.user_id,
        actor_role=context.role,
        user_id=user_id,
        status=status_filter,
    )
    return ReservationListResponse(count=len(listings), data=[_list_item(x) for x in listings])


async def _review(
    reservation_id: UUID,
    action: ReservationAction,
    *,
    context: AuthContext,
    settings: Settings,
    uow: SQLAlchemyUnitOfWork,
    manager: ConnectionManager,
    reason: str | None = None,
) -> ReservationResponse:
    result = await review_reservation.execute(
        uow,
        review_reservation.ReviewReservationInput(
            reservation_id=reservation_id,
            action=action,
            actor_id=context.user_id,
            actor_role=context.role,
            reason=reason,
        ),
        strict_targeting=settings.notifications_strict_targeting,
    )
    await publish_notifications(manager, [result.notification])
    verb = "approved" if action is ReservationAction.APPROVE else "rejected"
    return ReservationResponse(
        message=f"Reservation {verb} successfully!",
        data=ReservationSchema.model_validate(result.reservation),
    )


@router.post("/{reservation_id}/approve", response_model=ReservationResponse)
async def approve(
    reservation_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> ReservationResponse:
    return await _review(
        reservation_id,
        ReservationAction.APPROVE,
        context=context,
        settings=settings,
        uow=uow,
        manager=manager,
    )


@router.post("/{reservation_id}/reject", response_model=ReservationResponse)
async def reject(
    reservation_id: UUID,
    payload: RejectReservationRequest | None = None,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> ReservationResponse:
    return await _review(
        reservation_id,
        ReservationAction.REJECT,
        context=context,
        settings=settings,
        uow=uow,
        manager=manager,
        reason=payload.reason if payload else None,
    )
