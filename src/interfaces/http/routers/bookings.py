from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from src.application.use_cases.bookings import create_booking, list_bookings, transition_booking
from src.application.use_cases.bookings.transition_booking import BookingAction
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.email.mailer import Mailer
from src.infrastructure.websocket.connection_manager import ConnectionManager
from src.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_connection_manager,
    get_mailer,
    get_uow,
)
from src.interfaces.http.routers.notifications import publish_notifications
from src.interfaces.http.schemas.bookings import (
    BookingCreateRequest,
    BookingListResponse,
    BookingResponse,
    BookingSchema,
    RejectBookingRequest,
)

router = APIRouter(prefix="/bookings", tags=["bookings"])

_ACTION_MESSAGES = {
    BookingAction.CS_APPROVE: "Booking approved by Customer Service",
    BookingAction.SALES_APPROVE: "Booking approved by Sales",
    BookingAction.CONFIRM: "Booking confirmed",
    BookingAction.COMPLETE: "Booking marked as completed",
    BookingAction.NO_SHOW: "Booking marked as no-show",
    BookingAction.CANCEL: "Booking cancelled",
    BookingAction.REJECT: "Booking rejected",
}


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create(
    payload: BookingCreateRequest,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> BookingResponse:
    result = await create_booking.execute(
        uow,
        create_booking.CreateBookingInput(**payload.model_dump()),
        actor_id=context.user_id,
        timezone_name=settings.app_timezone,
        strict_targeting=settings.notifications_strict_targeting,
    )
    await publish_notifications(manager, [result.notification])
    return BookingResponse(
        message="Tour booking request submitted successfully",
        data=BookingSchema.model_validate(result.booking),
    )


@router.get("", response_model=BookingListResponse)
async def list_all(
    user_id: str | None = Query(None, alias="userId"),
    status_filter: str | None = Query(None, alias="status"),
    context: AuthContext = Depends(get_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> BookingListResponse:
    items = await list_bookings.execute(
        uow,
        actor_id=context.user_id,
        actor_role=context.role,
        user_id=user_id,
        status=status_filter,
    )
    return BookingListResponse(
        count=len(items), data=[BookingSchema.model_validate(b) for b in items]
    )


async def _transition(
    booking_id: UUID,
    action: BookingAction,
    *,
    context: AuthContext,
    settings: Settings,
    uow: SQLAlchemyUnitOfWork,
    manager: ConnectionManager,
    mailer: Mailer,
    background: BackgroundTasks,
    reason: str | None = None,
) -> BookingResponse:
    result = await transition_booking.execute(
        uow,
        transition_booking.TransitionBookingInput(
            booking_id=booking_id,
            action=action,
            actor_id=context.user_id,
            actor_role=context.role,
            reason=reason,
        ),
        strict_targeting=settings.notifications_strict_targeting,
    )
    await publish_notifications(manager, result.notifications)
    background.add_task(transition_booking.send_status_email, mailer, result.booking)
    return BookingResponse(
        message=_ACTION_MESSAGES[action], data=BookingSchema.model_validate(result.booking)
    )


def _register(action: BookingAction) -> None:
    async def endpoint(
        booking_id: UUID,
        background: BackgroundTasks,
        context: AuthContext = Depends(get_auth_context),
        settings: Settings = Depends(get_app_settings),
        uow: SQLAlchemyUnitOfWork = Depends(get_uow),
        manager: ConnectionManager = Depends(get_connection_manager),
        mailer: Mailer = Depends(get_mailer),
    ) -> BookingResponse:
        return await _transition(
            booking_id,
            action,
            context=context,
            settings=settings,
            uow=uow,
            manager=manager,
            mailer=mailer,
            background=background,
        )

    endpoint.__name__ = f"booking_{action.name.lower()}"
    router.add_api_route(
        f"/{{booking_id}}/{action.value}",
        endpoint,
        methods=["POST"],
        response_model=BookingResponse,
        name=endpoint.__name__,
    )


for _action in (
    BookingAction.CS_APPROVE,
    BookingAction.SALES_APPROVE,
    BookingAction.CONFIRM,
    BookingAction.COMPLETE,
    BookingAction.NO_SHOW,
    BookingAction.CANCEL,
):
    _register(_action)


@router.post("/{booking_id}/reject", response_model=BookingResponse)
async def reject(
    booking_id: UUID,
    payload: RejectBookingRequest,
    background: BackgroundTasks,
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
    mailer: Mailer = Depends(get_mailer),
) -> BookingResponse:
    return await _transition(
        booking_id,
        BookingAction.REJECT,
        context=context,
        settings=settings,
        uow=uow,
        manager=manager,
        mailer=mailer,
        background=background,
        reason=payload.reason,
    )
