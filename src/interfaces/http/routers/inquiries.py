from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases.inquiries import list_inquiries, submit_inquiry
from src.config.settings import Settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.websocket.connection_manager import ConnectionManager
from src.interfaces.http.deps import (
    get_app_settings,
    get_connection_manager,
    get_optional_auth_context,
    get_uow,
)
from src.interfaces.http.routers.notifications import publish_notifications
from src.interfaces.http.schemas.inquiries import (
    InquiryCreateRequest,
    InquiryListResponse,
    InquiryResponse,
    InquirySchema,
)

router = APIRouter(prefix="/inquiries", tags=["inquiries"])


@router.post("", response_model=InquiryResponse, status_code=status.HTTP_201_CREATED)
async def submit(
    payload: InquiryCreateRequest,
    context: AuthContext | None = Depends(get_optional_auth_context),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> InquiryResponse:
    result = await submit_inquiry.execute(
        uow,
        submit_inquiry.SubmitInquiryInput(**payload.model_dump()),
        auth_user_id=context.user_id if context else None,
        verified_ttl_minutes=settings.otp_verified_ttl_minutes,
        strict_targeting=settings.notifications_strict_targeting,
    )
    await publish_notifications(manager, [result.notification])
    return InquiryResponse(
        message="Inquiry submitted successfully",
        data=InquirySchema.model_validate(result.inquiry),
    )


@router.get("", response_model=InquiryListResponse)
async def list_all(
    user_id: str | None = Query(None, alias="userId"),
    client_email: str | None = Query(None, alias="clientEmail"),
    context: AuthContext | None = Depends(get_optional_auth_context),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> InquiryListResponse:
    items = await list_inquiries.execute(
        uow,
        actor_id=context.user_id if context else None,
        actor_role=context.role if context else None,
        user_id=user_id,
        client_email=client_email,
    )
    return InquiryListResponse(
        count=len(items), data=[InquirySchema.model_validate(i) for i in items]
    )
