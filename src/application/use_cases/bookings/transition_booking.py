"""Moves a tour booking through its approval workflow.

Each action is gated by the actor's role, validated by the domain state
machine and written conditionally on the status that was read, so two staff
members acting at once cannot both succeed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID

from src.application.errors import (
    ConflictError,
    InvalidTransition,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications import factory
from src.application.use_cases.notifications import create_notification
from src.domain.models.notification import Notification
from src.domain.models.tour_booking import TourBooking
from src.domain.value_objects.booking_status import BookingStatus
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)


class BookingAction(str, Enum):
    CS_APPROVE = "cs-approve"
    SALES_APPROVE = "sales-approve"
    CONFIRM = "confirm"
    COMPLETE = "complete"
    NO_SHOW = "no-show"
    CANCEL = "cancel"
    REJECT = "reject"


@dataclass(slots=True)
class TransitionBookingInput:
    booking_id: UUID
    action: BookingAction
    actor_id: str
    actor_role: Role
    reason: str | None = None


@dataclass(slots=True)
class TransitionBookingResult:
    booking: TourBooking
    previous_status: BookingStatus
    notifications: list[Notification] = field(default_factory=list)


def _authorize(payload: TransitionBookingInput, booking: TourBooking) -> None:
    role = payload.actor_role
    action = payload.action
    if action is BookingAction.CS_APPROVE:
        allowed = role.can_approve_as_cs()
    elif action is BookingAction.SALES_APPROVE:
        allowed = role.can_approve_as_sales()
    elif action is BookingAction.CANCEL:
        allowed = role.is_staff() or booking.user_id == payload.actor_id
    else:
        allowed = role.is_staff()
    if not allowed:
        verb = action.value.replace("-", " ")
        raise PermissionDenied(f"Role '{role.value}' cannot {verb} bookings")


def _apply(payload: TransitionBookingInput, booking: TourBooking, now: datetime) -> None:
    action = payload.action
    if action is BookingAction.CS_APPROVE:
        booking.approve_as_cs(actor=payload.actor_id, now=now)
    elif action is BookingAction.SALES_APPROVE:
        booking.approve_as_sales(actor=payload.actor_id, now=now)
    elif action is BookingAction.CONFIRM:
        booking.confirm(now=now)
    elif action is BookingAction.COMPLETE:
        booking.complete(now=now)
    elif action is BookingAction.NO_SHOW:
        booking.mark_no_show(now=now)
    elif action is BookingAction.CANCEL:
        booking.cancel(now=now)
    elif action is BookingAction.REJECT:
        booking.reject(payload.reason, now=now)


async def execute(
    uow: UnitOfWork,
    payload: TransitionBookingInput,
    *,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> TransitionBookingResult:
    booking = await uow.tour_bookings.get(payload.booking_id)
    if booking is None:
        raise NotFound("Booking not found")
    _authorize(payload, booking)

    if payload.action is BookingAction.REJECT and not (payload.reason or "").strip():
        raise ValidationError("A rejection reason is required")

    now = now or datetime.now(timezone.utc)
    previous = booking.status
    try:
        _apply(payload, booking, now)
    except ValueError as exc:
        raise InvalidTransition(
            str(exc), details={"status": previous.value, "action": payload.action.value}
        ) from exc

    if not await uow.tour_bookings.update(booking, expected_status=previous):
        await uow.rollback()
        raise ConflictError(
            "Booking was modified by someone else, reload and try again",
            details={"expected_status": previous.value},
        )

    requests = []
    if booking.status is BookingStatus.CS_APPROVED:
        requests.append(factory.booking_awaiting_sales(booking))
    # Owners cancelling their own booking do not need to be told about it
    owner_cancelled = (
        payload.action is BookingAction.CANCEL and booking.user_id == payload.actor_id
    )
    client_update = None if owner_cancelled else factory.booking_update_for_client(booking)
    if client_update is not None:
        requests.append(client_update)

    notifications = [
        await create_notification.write(uow, req, strict_targeting=strict_targeting, now=now)
        for req in requests
    ]
    await uow.commit()
    logger.info(
        "Booking %s: %s -> %s by %s (%s)",
        booking.id,
        previous.value,
        booking.status.value,
        payload.actor_id,
        payload.actor_role.value,
    )
    return TransitionBookingResult(
        booking=booking, previous_status=previous, notifications=notifications
    )


async def send_status_email(mailer, booking: TourBooking) -> bool:
    """E-mail the booking owner about its new status. Never raises."""
    if not booking.client_email or booking.status is BookingStatus.PENDING:
        return False
    try:
        await mailer.send_template(
            "booking_status",
            to=[booking.client_email],
            context={
                "client_name": booking.client_name,
                "property_title": booking.property_title or "the property",
                "appointment_date": booking.appointment_date,
                "appointment_time": booking.appointment_time,
                "status": booking.status.value,
                "status_label": booking.status.value.replace("_", " "),
                "rejection_reason": booking.rejection_reason,
            },
        )
    except Exception as exc:
        logger.warning("Booking status e-mail failed for booking %s: %s", booking.id, exc)
        return False
    logger.info(
        "Booking status e-mail sent: booking=%s status=%s", booking.id, booking.status.value
    )
    return True
