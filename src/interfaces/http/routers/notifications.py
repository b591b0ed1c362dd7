from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status

from src.application.errors import ValidationError
from src.application.notifications.visibility import VisibilityQuery
from src.application.use_cases.notifications import (
    create_notification,
    delete_notifications,
    list_notifications,
    update_notification,
)
from src.config.settings import Settings
from src.domain.models.notification import Notification
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.websocket.connection_manager import ConnectionManager
from src.interfaces.http.deps import get_app_settings, get_connection_manager, get_uow
from src.interfaces.http.schemas.notifications import (
    MessageResponse,
    NotificationCreateRequest,
    NotificationEnvelope,
    NotificationListResponse,
    NotificationSchema,
    NotificationUpdateRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


async def publish_notifications(
    manager: ConnectionManager | None, notifications: Iterable[Notification]
) -> None:
    """Push freshly committed notifications to matching live subscribers."""
    if manager is None:
        return
    for notification in notifications:
        payload = NotificationSchema.model_validate(notification).model_dump(mode="json")
        await manager.publish(notification, payload)


@router.websocket("/ws")
async def notifications_feed(
    websocket: WebSocket,
    role: str | None = None,
    user_id: str | None = Query(None, alias="userId"),
    client_only: str | None = Query(None, alias="clientOnly"),
) -> None:
    """
    Live feed using the same visibility rules as GET /notifications.
    Query: /ws?role=<role>&userId=<id>&clientOnly=true
    """
    manager: ConnectionManager = websocket.app.state.connection_manager
    query = VisibilityQuery.build(role=role, user_id=user_id, client_only=client_only == "true")
    await manager.connect(websocket, query)
    try:
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected: role=%s user=%s", query.role, query.user_id)
    finally:
        manager.disconnect(websocket)


@router.get("", response_model=NotificationListResponse)
async def list_notifications_endpoint(
    limit: int | None = None,
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = None,
    role: str | None = None,
    user_id: str | None = Query(None, alias="userId"),
    client_only: str | None = Query(None, alias="clientOnly"),
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> NotificationListResponse:
    query = VisibilityQuery.build(
        role=role,
        user_id=user_id,
        client_only=client_only == "true",
        status=status_filter,
        priority=priority,
        limit=limit if limit is not None else settings.notifications_default_limit,
    )
    feed = await list_notifications.execute(
        uow, query, max_limit=settings.notifications_max_limit
    )
    return NotificationListResponse(
        count=feed.count,
        unread_count=feed.unread_count,
        notifications=[NotificationSchema.model_validate(n) for n in feed.notifications],
    )


@router.post("", response_model=NotificationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_notification_endpoint(
    payload: NotificationCreateRequest,
    settings: Settings = Depends(get_app_settings),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> NotificationEnvelope:
    data = payload.model_dump(exclude_none=True)
    if "recipient_role" in payload.model_fields_set:
        # An explicit null role is kept as null rather than defaulting to admin
        data["recipient_role"] = payload.recipient_role
    created = await create_notification.execute(
        uow,
        create_notification.CreateNotificationInput(**data),
        strict_targeting=settings.notifications_strict_targeting,
    )
    await publish_notifications(manager, [created])
    return NotificationEnvelope(
        message="Notification created successfully",
        notification=NotificationSchema.model_validate(created),
    )


@router.put("", response_model=NotificationEnvelope)
async def update_notification_endpoint(
    payload: NotificationUpdateRequest,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> NotificationEnvelope:
    updated = await update_notification.execute(
        uow,
        update_notification.UpdateNotificationInput(
            id=payload.id,
            status=payload.status,
            read_at=payload.read_at,
            read_at_provided="read_at" in payload.model_fields_set,
        ),
    )
    return NotificationEnvelope(
        message="Notification updated successfully",
        notification=NotificationSchema.model_validate(updated),
    )


@router.delete("", response_model=MessageResponse)
async def delete_notifications_endpoint(
    notification_id: str | None = Query(None, alias="id"),
    clear_all: str | None = Query(None, alias="clearAll"),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
) -> MessageResponse:
    if clear_all == "true":
        await delete_notifications.execute(uow, clear_all=True)
        return MessageResponse(message="All notifications cleared successfully")
    parsed: UUID | None = None
    if notification_id:
        try:
            parsed = UUID(notification_id)
        except ValueError as exc:
            raise ValidationError("Invalid notification ID") from exc
    await delete_notifications.execute(uow, parsed)
    return MessageResponse(message="Notification deleted successfully")
