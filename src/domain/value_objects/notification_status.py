from __future__ import annotations

from enum import Enum


class NotificationStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"
    ARCHIVED = "archived"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def can_move_to(self, target: NotificationStatus) -> bool:
        # Lifecycle only moves forward; unread may skip straight to archived
        return target.rank >= self.rank


_RANKS = {
    NotificationStatus.UNREAD: 0,
    NotificationStatus.READ: 1,
    NotificationStatus.ARCHIVED: 2,
}


class NotificationPriority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"
