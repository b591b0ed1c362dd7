from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.notifications = None
        self.otp_challenges = None
        self.tour_bookings = None
        self.inquiries = None
        self.property_reservations = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.inquiries_sqlalchemy import InquiriesSQLAlchemyRepository
        from src.infrastructure.repos.notifications_sqlalchemy import (
            NotificationsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.otp_challenges_sqlalchemy import (
            OtpChallengesSQLAlchemyRepository,
        )
        from src.infrastructure.repos.property_reservations_sqlalchemy import (
            PropertyReservationsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.tour_bookings_sqlalchemy import (
            TourBookingsSQLAlchemyRepository,
        )

        self.notifications = NotificationsSQLAlchemyRepository(self.session)
        self.otp_challenges = OtpChallengesSQLAlchemyRepository(self.session)
        self.tour_bookings = TourBookingsSQLAlchemyRepository(self.session)
        self.inquiries = InquiriesSQLAlchemyRepository(self.session)
        self.property_reservations = PropertyReservationsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.notifications = None
            self.otp_challenges = None
            self.tour_bookings = None
            self.inquiries = None
            self.property_reservations = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
