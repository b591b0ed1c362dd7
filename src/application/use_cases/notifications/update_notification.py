from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import InvalidTransition, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.notification import Notification
from src.domain.value_objects.notification_status import NotificationStatus


@dataclass(slots=True)
class UpdateNotificationInput:
    id: UUID | None
    status: str | None = None
    read_at: datetime | None = None
    # Distinguishes an explicit `read_at: null` from an absent field
    read_at_provided: bool = False


async def execute(
    uow: UnitOfWork,
    payload: UpdateNotificationInput,
    *,
    now: datetime | None = None,
) -> Notification:
    if payload.id is None:
        raise ValidationError("Notification ID is required")
    now = now or datetime.now(timezone.utc)

    target: NotificationStatus | None = None
    if payload.status:
        try:
            target = NotificationStatus(payload.status)
        except ValueError as exc:
            raise ValidationError(f"Invalid status '{payload.status}'") from exc

    notification = await uow.notifications.get(payload.id)
    if notification is None:
        raise NotFound("Notification not found")

    if target is not None:
        try:
            notification.change_status(target, now=now)
        except ValueError as exc:
            raise InvalidTransition(str(exc)) from exc

    if payload.read_at_provided and payload.read_at is not None:
        notification.read_at = payload.read_at
    elif target is NotificationStatus.READ:
        notification.read_at = now
    elif payload.read_at_provided:
        notification.read_at = None
    notification.updated_at = now

    updated = await uow.notifications.update(notification)
    await uow.commit()
    return updated
