from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.visibility import VisibilityQuery, build_visibility_predicate
from src.domain.models.notification import Notification
from src.domain.value_objects.notification_status import NotificationPriority, NotificationStatus


@dataclass(slots=True)
class NotificationFeed:
    notifications: list[Notification]
    count: int
    unread_count: int


def validate_query(query: VisibilityQuery, *, max_limit: int) -> None:
    if query.limit < 1:
        raise ValidationError("limit must be a positive integer")
    if query.limit > max_limit:
        raise ValidationError(f"limit must not exceed {max_limit}")
    if query.status and query.status not in {s.value for s in NotificationStatus}:
        raise ValidationError(f"Invalid status filter '{query.status}'")
    if query.priority and query.priority not in {p.value for p in NotificationPriority}:
        raise ValidationError(f"Invalid priority filter '{query.priority}'")


async def execute(
    uow: UnitOfWork, query: VisibilityQuery, *, max_limit: int = 500
) -> NotificationFeed:
    validate_query(query, max_limit=max_limit)
    predicate = build_visibility_predicate(query)
    items = await uow.notifications.list_matching(predicate, limit=query.limit)
    unread = sum(1 for n in items if n.status is NotificationStatus.UNREAD)
    return NotificationFeed(notifications=items, count=len(items), unread_count=unread)
