from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.inquiry import Inquiry, InquiryStatus
from src.infrastructure.db.orm.inquiry import InquiryORM
from src.utils.datetime_tz import ensure_utc


class InquiriesSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: InquiryORM) -> Inquiry:
        return Inquiry(
            id=orm.id,
            property_id=orm.property_id,
            client_firstname=orm.client_firstname,
            client_lastname=orm.client_lastname,
            client_email=orm.client_email,
            message=orm.message,
            property_title=orm.property_title,
            user_id=orm.user_id,
            client_phone=orm.client_phone,
            is_authenticated=orm.is_authenticated,
            status=InquiryStatus(orm.status),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def add(self, inquiry: Inquiry) -> Inquiry:
        orm = InquiryORM(
            id=inquiry.id,
            property_id=inquiry.property_id,
            property_title=inquiry.property_title,
            user_id=inquiry.user_id,
            client_firstname=inquiry.client_firstname,
            client_lastname=inquiry.client_lastname,
            client_email=inquiry.client_email,
            client_phone=inquiry.client_phone,
            message=inquiry.message,
            is_authenticated=inquiry.is_authenticated,
            status=inquiry.status.value,
            created_at=inquiry.created_at,
            updated_at=inquiry.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def list(
        self,
        *,
        user_id: str | None = None,
        client_email: str | None = None,
    ) -> list[Inquiry]:
        stmt = select(InquiryORM)
        if user_id is not None:
            stmt = stmt.where(InquiryORM.user_id == user_id)
        if client_email is not None:
            stmt = stmt.where(InquiryORM.client_email == client_email)
        stmt = stmt.order_by(InquiryORM.created_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]
