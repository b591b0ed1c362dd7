from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.notification import Notification
from src.domain.value_objects.predicate import Predicate


class NotificationsRepository(Protocol):
    async def add(self, notification: Notification) -> Notification: ...

    async def get(self, notification_id: UUID) -> Notification | None: ...

    async def list_matching(self, predicate: Predicate, *, limit: int) -> list[Notification]: ...

    async def update(self, notification: Notification) -> Notification: ...

    async def delete(self, notification_id: UUID) -> bool: ...

    async def delete_all(self) -> int: ...
