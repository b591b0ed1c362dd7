from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.notification import Notification
from src.domain.value_objects.notification_status import NotificationPriority, NotificationStatus
from src.domain.value_objects.predicate import Predicate
from src.infrastructure.db.orm.notification import NotificationORM
from src.infrastructure.db.predicates import compile_predicate
from src.utils.datetime_tz import ensure_utc


class NotificationsSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: NotificationORM) -> Notification:
        return Notification(
            id=orm.id,
            title=orm.title,
            message=orm.message,
            icon=orm.icon,
            priority=NotificationPriority(orm.priority),
            status=NotificationStatus(orm.status),
            notification_type=orm.notification_type,
            source_table=orm.source_table,
            source_table_display_name=orm.source_table_display_name,
            source_record_id=orm.source_record_id,
            recipient_role=orm.recipient_role,
            recipient_id=orm.recipient_id,
            data=dict(orm.data or {}),
            action_url=orm.action_url,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            read_at=ensure_utc(orm.read_at),
        )

    def _to_orm(self, notification: Notification) -> NotificationORM:
        return NotificationORM(
            id=notification.id,
            title=notification.title,
            message=notification.message,
            icon=notification.icon,
            priority=notification.priority.value,
            status=notification.status.value,
            notification_type=notification.notification_type,
            source_table=notification.source_table,
            source_table_display_name=notification.source_table_display_name,
            source_record_id=notification.source_record_id,
            recipient_role=notification.recipient_role,
            recipient_id=notification.recipient_id,
            data=notification.data or {},
            action_url=notification.action_url,
            created_at=notification.created_at,
            updated_at=notification.updated_at,
            read_at=notification.read_at,
        )

    async def add(self, notification: Notification) -> Notification:
        orm = self._to_orm(notification)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, notification_id: UUID) -> Notification | None:
        stmt = select(NotificationORM).where(NotificationORM.id == notification_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list_matching(self, predicate: Predicate, *, limit: int) -> list[Notification]:
        stmt = (
            select(NotificationORM)
            .where(compile_predicate(predicate, NotificationORM))
            .order_by(NotificationORM.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def update(self, notification: Notification) -> Notification:
        stmt = (
            update(NotificationORM)
            .where(NotificationORM.id == notification.id)
            .values(
                status=notification.status.value,
                read_at=notification.read_at,
                updated_at=notification.updated_at,
            )
        )
        await self.session.execute(stmt)
        return notification

    async def delete(self, notification_id: UUID) -> bool:
        stmt = delete(NotificationORM).where(NotificationORM.id == notification_id)
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) > 0

    async def delete_all(self) -> int:
        result = await self.session.execute(delete(NotificationORM))
        return result.rowcount or 0
