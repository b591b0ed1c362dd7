from __future__ import annotations

from dataclasses import dataclass

from src.application.errors import AuthError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.property_reservation import PropertyReservation, ReservationContract
from src.domain.value_objects.reservation_status import ReservationStatus
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class ReservationListing:
    reservation: PropertyReservation
    contract: ReservationContract | None = None


async def execute(
    uow: UnitOfWork,
    *,
    actor_id: str | None,
    actor_role: Role | None,
    user_id: str | None = None,
    status: str | None = None,
) -> list[ReservationListing]:
    """Newest reservations first, each with the contract drawn up from it, if any."""
    if actor_id is None or actor_role is None:
        raise AuthError("Authentication required")
    if not actor_role.is_staff():
        user_id = actor_id
    parsed_status = None
    if status:
        try:
            parsed_status = ReservationStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Invalid reservation status '{status}'") from exc
    reservations = await uow.property_reservations.list(
        user_id=user_id or None, status=parsed_status
    )
    contracts = await uow.property_reservations.contracts_for(r.id for r in reservations)
    return [ReservationListing(reservation=r, contract=contracts.get(r.id)) for r in reservations]
