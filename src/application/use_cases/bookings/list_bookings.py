from __future__ import annotations

from src.application.errors import AuthError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.tour_booking import TourBooking
from src.domain.value_objects.booking_status import BookingStatus
from src.domain.value_objects.role import Role


async def execute(
    uow: UnitOfWork,
    *,
    actor_id: str | None,
    actor_role: Role | None,
    user_id: str | None = None,
    status: str | None = None,
) -> list[TourBooking]:
    if actor_id is None or actor_role is None:
        raise AuthError("Authentication required")
    if not actor_role.is_staff():
        user_id = actor_id
    parsed_status = None
    if status:
        try:
            parsed_status = BookingStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Invalid booking status '{status}'") from exc
    return await uow.tour_bookings.list(user_id=user_id or None, status=parsed_status)
