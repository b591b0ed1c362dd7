from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from src.application.errors import InvalidRecipientTarget, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.notification import Notification
from src.domain.value_objects.notification_status import NotificationPriority, NotificationStatus
from src.domain.value_objects.recipient import (
    ExternalIdentity,
    MalformedRecipient,
    NumericRecipient,
    parse_recipient_id,
)
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateNotificationInput:
    title: str | None
    message: str | None
    icon: str = "📢"
    priority: str = NotificationPriority.NORMAL.value
    status: str = NotificationStatus.UNREAD.value
    notification_type: str = "manual"
    source_table: str = "manual"
    source_table_display_name: str = "Manual Notification"
    source_record_id: str | None = None
    recipient_role: str | None = Role.ADMIN.value
    recipient_id: Any = None
    data: dict | None = None
    action_url: str | None = None


def resolve_recipient_id(
    recipient_role: str | None, raw: Any, *, strict: bool = False
) -> int | None:
    """Return the recipient_id that may be stored, or None.

    UUID-like ids and ids on client notifications are always dropped; other
    values survive only as positive integers. With `strict`, anything dropped
    for being malformed is rejected instead.
    """
    parsed = parse_recipient_id(raw)
    if isinstance(parsed, ExternalIdentity):
        logger.warning("Dropping UUID-like recipient_id=%s (role=%s)", parsed.value, recipient_role)
        if strict:
            raise InvalidRecipientTarget(
                "recipient_id must be a numeric user id", details={"recipient_id": parsed.value}
            )
        return None
    if recipient_role == Role.CLIENT.value:
        if parsed is not None:
            logger.info("Client notification: recipient_id=%s dropped, use data.user_id", raw)
            if strict:
                raise InvalidRecipientTarget(
                    "Client notifications are targeted through data.user_id",
                    details={"recipient_id": raw},
                )
        return None
    if isinstance(parsed, MalformedRecipient):
        logger.warning("Skipping invalid recipient_id=%r", parsed.raw)
        if strict:
            raise InvalidRecipientTarget(
                "recipient_id must be a positive integer", details={"recipient_id": parsed.raw}
            )
        return None
    if isinstance(parsed, NumericRecipient):
        return parsed.value
    return None


def _parse_enum(enum_cls, value: str | None, default, label: str):
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{value}' (expected one of: {allowed})") from exc


def build(
    payload: CreateNotificationInput,
    *,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> Notification:
    """Validate and sanitize a creation request into a Notification (no I/O)."""
    title = (payload.title or "").strip()
    message = (payload.message or "").strip()
    if not title or not message:
        raise ValidationError("Title and message are required")
    if payload.data is not None and not isinstance(payload.data, dict):
        raise ValidationError("data must be a JSON object")

    priority = _parse_enum(
        NotificationPriority, payload.priority, NotificationPriority.NORMAL, "priority"
    )
    status = _parse_enum(NotificationStatus, payload.status, NotificationStatus.UNREAD, "status")
    recipient_id = resolve_recipient_id(
        payload.recipient_role, payload.recipient_id, strict=strict_targeting
    )
    return Notification.create(
        title=title,
        message=message,
        icon=payload.icon or "📢",
        priority=priority,
        status=status,
        notification_type=payload.notification_type or "manual",
        source_table=payload.source_table or "manual",
        source_table_display_name=payload.source_table_display_name or "Manual Notification",
        source_record_id=(
            str(payload.source_record_id) if payload.source_record_id is not None else None
        ),
        recipient_role=payload.recipient_role,
        recipient_id=recipient_id,
        data=payload.data,
        action_url=payload.action_url,
        now=now or datetime.now(timezone.utc),
    )


async def write(
    uow: UnitOfWork,
    payload: CreateNotificationInput,
    *,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> Notification:
    """Insert without committing, for callers that own the transaction."""
    notification = build(payload, strict_targeting=strict_targeting, now=now)
    created = await uow.notifications.add(notification)
    logger.info(
        "Notification created: id=%s type=%s recipient_role=%s recipient_id=%s",
        created.id,
        created.notification_type,
        created.recipient_role,
        created.recipient_id,
    )
    return created


async def execute(
    uow: UnitOfWork,
    payload: CreateNotificationInput,
    *,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> Notification:
    created = await write(uow, payload, strict_targeting=strict_targeting, now=now)
    await uow.commit()
    return created
