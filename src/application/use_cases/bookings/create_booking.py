from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from src.application.errors import PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications import factory
from src.application.use_cases.notifications import create_notification
from src.domain.models.notification import Notification
from src.domain.models.tour_booking import TourBooking
from src.utils.datetime_tz import local_today

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateBookingInput:
    property_id: str | None
    appointment_date: date | None
    appointment_time: time | None
    property_title: str | None = None
    user_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    message: str | None = None


@dataclass(slots=True)
class CreateBookingResult:
    booking: TourBooking
    notification: Notification


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


async def execute(
    uow: UnitOfWork,
    payload: CreateBookingInput,
    *,
    actor_id: str,
    timezone_name: str | None = None,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> CreateBookingResult:
    property_id = _clean(payload.property_id)
    if not property_id or payload.appointment_date is None or payload.appointment_time is None:
        raise ValidationError("Property, appointment date and time are required")
    if payload.user_id and str(payload.user_id) != actor_id:
        raise PermissionDenied("Bookings can only be requested for your own account")
    now = now or datetime.now(timezone.utc)
    if payload.appointment_date < local_today(now, timezone_name):
        raise ValidationError("Appointment date cannot be in the past")

    booking = TourBooking.create(
        property_id=property_id,
        user_id=actor_id,
        appointment_date=payload.appointment_date,
        appointment_time=payload.appointment_time,
        property_title=_clean(payload.property_title),
        client_name=_clean(payload.client_name),
        client_email=(_clean(payload.client_email) or "").lower() or None,
        client_phone=_clean(payload.client_phone),
        message=_clean(payload.message),
        now=now,
    )
    created = await uow.tour_bookings.add(booking)
    notification = await create_notification.write(
        uow, factory.booking_requested(created), strict_targeting=strict_targeting, now=now
    )
    await uow.commit()
    logger.info(
        "Tour booking requested: id=%s property_id=%s user_id=%s date=%s",
        created.id,
        created.property_id,
        created.user_id,
        created.appointment_date.isoformat(),
    )
    return CreateBookingResult(booking=created, notification=notification)
