from __future__ import annotations

from typing import Iterable, Protocol
from uuid import UUID

from src.domain.models.property_reservation import PropertyReservation, ReservationContract
from src.domain.value_objects.reservation_status import ReservationStatus


class PropertyReservationsRepository(Protocol):
    async def add(self, reservation: PropertyReservation) -> PropertyReservation: ...

    async def get(self, reservation_id: UUID) -> PropertyReservation | None: ...

    async def list(
        self,
        *,
        user_id: str | None = None,
        status: ReservationStatus | None = None,
    ) -> list[PropertyReservation]: ...

    async def contracts_for(
        self, reservation_ids: Iterable[UUID]
    ) -> dict[UUID, ReservationContract]: ...

    async def update(
        self, reservation: PropertyReservation, *, expected_status: ReservationStatus
    ) -> bool: ...
