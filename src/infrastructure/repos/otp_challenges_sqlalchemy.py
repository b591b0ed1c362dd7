from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.models.otp_challenge import OtpChallenge
from src.infrastructure.db.orm.otp_challenge import OtpChallengeORM
from src.utils.datetime_tz import ensure_utc


class OtpChallengesSQLAlchemyRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: OtpChallengeORM) -> OtpChallenge:
        return OtpChallenge(
            id=orm.id,
            email=orm.email,
            code=orm.code,
            purpose=orm.purpose,
            issued_at=ensure_utc(orm.issued_at),
            expires_at=ensure_utc(orm.expires_at),
            attempts=orm.attempts,
            verified_at=ensure_utc(orm.verified_at),
            consumed_at=ensure_utc(orm.consumed_at),
            created_at=ensure_utc(orm.created_at),
        )

    async def get_by_email(self, email: str) -> OtpChallenge | None:
        stmt = select(OtpChallengeORM).where(OtpChallengeORM.email == email)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def replace(self, challenge: OtpChallenge) -> OtpChallenge:
        """Drop any previous challenge for the address and store this one."""
        await self.session.execute(
            delete(OtpChallengeORM).where(OtpChallengeORM.email == challenge.email)
        )
        orm = OtpChallengeORM(
            id=challenge.id,
            email=challenge.email,
            code=challenge.code,
            purpose=challenge.purpose,
            issued_at=challenge.issued_at,
            expires_at=challenge.expires_at,
            attempts=challenge.attempts,
            verified_at=challenge.verified_at,
            consumed_at=challenge.consumed_at,
            created_at=challenge.created_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def save(self, challenge: OtpChallenge) -> None:
        stmt = (
            update(OtpChallengeORM)
            .where(OtpChallengeORM.id == challenge.id)
            .values(
                attempts=challenge.attempts,
                verified_at=challenge.verified_at,
                consumed_at=challenge.consumed_at,
            )
        )
        await self.session.execute(stmt)

    async def consume(self, challenge_id: UUID, *, now: datetime) -> bool:
        stmt = (
            update(OtpChallengeORM)
            .where(
                OtpChallengeORM.id == challenge_id,
                OtpChallengeORM.verified_at.is_not(None),
                OtpChallengeORM.consumed_at.is_(None),
            )
            .values(consumed_at=now)
        )
        result = await self.session.execute(stmt)
        return (result.rowcount or 0) == 1
