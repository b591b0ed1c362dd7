from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.tour_booking import TourBooking
from src.domain.value_objects.booking_status import BookingStatus


class TourBookingsRepository(Protocol):
    async def add(self, booking: TourBooking) -> TourBooking: ...

    async def get(self, booking_id: UUID) -> TourBooking | None: ...

    async def list(
        self,
        *,
        user_id: str | None = None,
        status: BookingStatus | None = None,
    ) -> list[TourBooking]: ...

    async def update(self, booking: TourBooking, *, expected_status: BookingStatus) -> bool: ...
