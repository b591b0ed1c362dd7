from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.inquiries import InquiriesRepository
from src.application.interfaces.repositories.notifications import NotificationsRepository
from src.application.interfaces.repositories.otp_challenges import OtpChallengesRepository
from src.application.interfaces.repositories.property_reservations import (
    PropertyReservationsRepository,
)
from src.application.interfaces.repositories.tour_bookings import TourBookingsRepository


class UnitOfWork(Protocol):
    notifications: NotificationsRepository
    otp_challenges: OtpChallengesRepository
    tour_bookings: TourBookingsRepository
    inquiries: InquiriesRepository
    property_reservations: PropertyReservationsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
