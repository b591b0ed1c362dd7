from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.value_objects.notification_status import NotificationPriority, NotificationStatus


class NotificationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    message: str
    icon: str
    priority: NotificationPriority
    status: NotificationStatus
    notification_type: str
    source_table: str
    source_table_display_name: str
    source_record_id: str | None = None
    recipient_role: str | None = None
    recipient_id: int | None = None
    data: dict[str, Any] = Field(default_factory=dict)
    action_url: str | None = None
    created_at: datetime
    updated_at: datetime
    read_at: datetime | None = None


class NotificationListResponse(BaseModel):
    success: bool = True
    count: int
    unread_count: int = Field(serialization_alias="unreadCount")
    notifications: list[NotificationSchema]


class NotificationCreateRequest(BaseModel):
    title: str | None = None
    message: str | None = None
    icon: str | None = None
    priority: str | None = None
    status: str | None = None
    notification_type: str | None = None
    source_table: str | None = None
    source_table_display_name: str | None = None
    source_record_id: str | int | None = None
    recipient_role: str | None = "admin"
    # Validated by the writer, which strips or rejects bad targeting
    recipient_id: Any = None
    data: Any = None
    action_url: str | None = None


class NotificationUpdateRequest(BaseModel):
    id: UUID | None = None
    status: str | None = None
    read_at: datetime | None = None


class NotificationEnvelope(BaseModel):
    success: bool = True
    message: str
    notification: NotificationSchema


class MessageResponse(BaseModel):
    success: bool = True
    message: str
