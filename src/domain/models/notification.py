from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.notification_status import NotificationPriority, NotificationStatus
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class Notification:
    id: UUID
    title: str
    message: str
    icon: str = "📢"
    priority: NotificationPriority = NotificationPriority.NORMAL
    status: NotificationStatus = NotificationStatus.UNREAD
    notification_type: str = "manual"
    source_table: str = "manual"
    source_table_display_name: str = "Manual Notification"
    source_record_id: str | None = None
    recipient_role: str | None = Role.ADMIN.value
    recipient_id: int | None = None
    data: dict = field(default_factory=dict)
    action_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    read_at: datetime | None = None

    @classmethod
    def create(
        cls,
        *,
        title: str,
        message: str,
        icon: str = "📢",
        priority: NotificationPriority = NotificationPriority.NORMAL,
        status: NotificationStatus = NotificationStatus.UNREAD,
        notification_type: str = "manual",
        source_table: str = "manual",
        source_table_display_name: str = "Manual Notification",
        source_record_id: str | None = None,
        recipient_role: str | None = Role.ADMIN.value,
        recipient_id: int | None = None,
        data: dict | None = None,
        action_url: str | None = None,
        now: datetime | None = None,
    ) -> Notification:
        now = now or datetime.now(timezone.utc)
        if recipient_role == Role.CLIENT.value:
            # Clients are targeted through data.user_id only
            recipient_id = None
        return cls(
            id=uuid4(),
            title=title,
            message=message,
            icon=icon,
            priority=priority,
            status=status,
            notification_type=notification_type,
            source_table=source_table,
            source_table_display_name=source_table_display_name,
            source_record_id=source_record_id,
            recipient_role=recipient_role,
            recipient_id=recipient_id,
            data=dict(data or {}),
            action_url=action_url,
            created_at=now,
            updated_at=now,
            read_at=now if status is NotificationStatus.READ else None,
        )

    def change_status(self, target: NotificationStatus, *, now: datetime) -> None:
        if not self.status.can_move_to(target):
            raise ValueError(
                f"Cannot move notification from {self.status.value} to {target.value}"
            )
        self.status = target
        self.updated_at = now

