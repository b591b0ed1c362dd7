from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    notification_id: UUID | None = None,
    *,
    clear_all: bool = False,
) -> int:
    """Delete one notification, or every notification when `clear_all` is set.

    Clearing is unscoped and irreversible; access control belongs to the caller.
    """
    if clear_all:
        removed = await uow.notifications.delete_all()
        await uow.commit()
        logger.warning("Cleared all notifications: removed=%s", removed)
        return removed
    if notification_id is None:
        raise ValidationError("Notification ID is required")
    deleted = await uow.notifications.delete(notification_id)
    if not deleted:
        raise NotFound("Notification not found")
    await uow.commit()
    logger.info("Notification deleted: id=%s", notification_id)
    return 1
