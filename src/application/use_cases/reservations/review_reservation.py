from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.application.errors import ConflictError, InvalidTransition, NotFound, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications import factory
from src.application.use_cases.notifications import create_notification
from src.domain.models.notification import Notification
from src.domain.models.property_reservation import PropertyReservation
from src.domain.value_objects.reservation_status import ReservationStatus
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


class ReservationAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


@dataclass(slots=True)
class ReviewReservationInput:
    reservation_id: UUID
    action: ReservationAction
    actor_id: str
    actor_role: Role
    reason: str | None = None


@dataclass(slots=True)
class ReviewReservationResult:
    reservation: PropertyReservation
    previous_status: ReservationStatus
    notification: Notification


async def execute(
    uow: UnitOfWork,
    payload: ReviewReservationInput,
    *,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> ReviewReservationResult:
    if not payload.actor_role.is_staff():
        raise PermissionDenied(
            f"Role '{payload.actor_role.value}' cannot {payload.action.value} reservations"
        )
    reservation = await uow.property_reservations.get(payload.reservation_id)
    if reservation is None:
        raise NotFound("Reservation not found")

    now = now or datetime.now(timezone.utc)
    previous = reservation.status
    try:
        if payload.action is ReservationAction.APPROVE:
            reservation.approve(actor=payload.actor_id, now=now)
        else:
            reservation.reject(payload.reason, actor=payload.actor_id, now=now)
    except ValueError as exc:
        raise InvalidTransition(
            str(exc), details={"status": previous.value, "action": payload.action.value}
        ) from exc

    if not await uow.property_reservations.update(reservation, expected_status=previous):
        await uow.rollback()
        raise ConflictError(
            "Reservation was reviewed by someone else, reload and try again",
            details={"expected_status": previous.value},
        )

    notification = await create_notification.write(
        uow,
        factory.reservation_update_for_client(reservation),
        strict_targeting=strict_targeting,
        now=now,
    )
    await uow.commit()
    logger.info(
        "Reservation %s (%s): %s -> %s by %s",
        reservation.id,
        reservation.tracking_number,
        previous.value,
        reservation.status.value,
        payload.actor_id,
    )
    return ReviewReservationResult(
        reservation=reservation, previous_status=previous, notification=notification
    )
