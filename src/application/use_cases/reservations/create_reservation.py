from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from src.application.errors import PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications import factory
from src.application.use_cases.notifications import create_notification
from src.domain.models.notification import Notification
from src.domain.models.property_reservation import PropertyReservation

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Please fill in all required fields to submit your reservation"


@dataclass(slots=True)
class CreateReservationInput:
    property_id: str | None
    client_phone: str | None
    client_address: str | None
    occupation: str | None
    employer: str | None
    employment_status: str | None
    years_employed: int | None
    monthly_income: Decimal | None
    property_title: str | None = None
    reservation_fee: Decimal | None = None
    user_id: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    other_income_source: str | None = None
    other_income_amount: Decimal | None = None
    message: str | None = None
    id_type: str | None = None


@dataclass(slots=True)
class CreateReservationResult:
    reservation: PropertyReservation
    notification: Notification


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


async def execute(
    uow: UnitOfWork,
    payload: CreateReservationInput,
    *,
    actor_id: str,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> CreateReservationResult:
    required = {
        "property_id": _clean(payload.property_id),
        "client_phone": _clean(payload.client_phone),
        "client_address": _clean(payload.client_address),
        "occupation": _clean(payload.occupation),
        "employer": _clean(payload.employer),
        "employment_status": _clean(payload.employment_status),
    }
    missing = [name for name, value in required.items() if value is None]
    if payload.years_employed is None:
        missing.append("years_employed")
    if payload.monthly_income is None:
        missing.append("monthly_income")
    if missing:
        raise ValidationError(MISSING_FIELDS, details={"missing": missing})
    if payload.user_id and str(payload.user_id) != actor_id:
        raise PermissionDenied("Reservations can only be submitted for your own account")

    now = now or datetime.now(timezone.utc)
    try:
        reservation = PropertyReservation.create(
            user_id=actor_id,
            years_employed=payload.years_employed,
            monthly_income=payload.monthly_income,
            property_title=_clean(payload.property_title),
            reservation_fee=payload.reservation_fee,
            client_name=_clean(payload.client_name),
            client_email=(_clean(payload.client_email) or "").lower() or None,
            other_income_source=_clean(payload.other_income_source),
            other_income_amount=payload.other_income_amount,
            message=_clean(payload.message),
            id_type=_clean(payload.id_type),
            now=now,
            **required,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    created = await uow.property_reservations.add(reservation)
    notification = await create_notification.write(
        uow, factory.reservation_submitted(created), strict_targeting=strict_targeting, now=now
    )
    await uow.commit()
    logger.info(
        "Property reservation submitted: id=%s tracking=%s property_id=%s user_id=%s",
        created.id,
        created.tracking_number,
        created.property_id,
        created.user_id,
    )
    return CreateReservationResult(reservation=created, notification=notification)
