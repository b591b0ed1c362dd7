from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from src.domain.value_objects.reservation_status import ReservationStatus

TRACKING_PREFIX = "TRK-"
TRACKING_ALPHABET = string.ascii_uppercase + string.digits


def generate_tracking_number(length: int = 8) -> str:
    return TRACKING_PREFIX + "".join(secrets.choice(TRACKING_ALPHABET) for _ in range(length))


@dataclass(slots=True)
class ReservationContract:
    """Contract drawn up from an approved reservation."""

    contract_id: UUID
    reservation_id: UUID
    contract_number: str
    payment_plan_months: int | None = None
    monthly_installment: Decimal | None = None
    contract_status: str | None = None


@dataclass(slots=True)
class PropertyReservation:
    id: UUID
    tracking_number: str
    property_id: str
    user_id: str
    client_phone: str
    client_address: str
    occupation: str
    employer: str
    employment_status: str
    years_employed: int
    monthly_income: Decimal
    property_title: str | None = None
    reservation_fee: Decimal = Decimal("0")
    client_name: str | None = None
    client_email: str | None = None
    other_income_source: str | None = None
    other_income_amount: Decimal | None = None
    total_monthly_income: Decimal | None = None
    message: str | None = None
    id_type: str | None = None
    status: ReservationStatus = ReservationStatus.PENDING
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    rejection_reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        property_id: str,
        user_id: str,
        client_phone: str,
        client_address: str,
        occupation: str,
        employer: str,
        employment_status: str,
        years_employed: int,
        monthly_income: Decimal,
        property_title: str | None = None,
        reservation_fee: Decimal | None = None,
        client_name: str | None = None,
        client_email: str | None = None,
        other_income_source: str | None = None,
        other_income_amount: Decimal | None = None,
        message: str | None = None,
        id_type: str | None = None,
        tracking_number: str | None = None,
        now: datetime | None = None,
    ) -> PropertyReservation:
        if monthly_income <= 0:
            raise ValueError("Monthly income must be greater than zero")
        if years_employed < 0:
            raise ValueError("Years employed cannot be negative")
        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tracking_number=tracking_number or generate_tracking_number(),
            property_id=property_id,
            user_id=user_id,
            client_phone=client_phone,
            client_address=client_address,
            occupation=occupation,
            employer=employer,
            employment_status=employment_status,
            years_employed=years_employed,
            monthly_income=monthly_income,
            property_title=property_title,
            reservation_fee=reservation_fee or Decimal("0"),
            client_name=client_name,
            client_email=client_email,
            other_income_source=other_income_source,
            other_income_amount=other_income_amount,
            total_monthly_income=monthly_income + (other_income_amount or Decimal("0")),
            message=message,
            id_type=id_type,
            status=ReservationStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    def _review(self, target: ReservationStatus, *, actor: str, now: datetime) -> None:
        if not self.status.can_move_to(target):
            raise ValueError(f"Reservation is already {self.status.value}")
        self.status = target
        self.reviewed_by = actor
        self.reviewed_at = now
        self.updated_at = now

    def approve(self, *, actor: str, now: datetime) -> None:
        self._review(ReservationStatus.APPROVED, actor=actor, now=now)

    def reject(self, reason: str | None, *, actor: str, now: datetime) -> None:
        self._review(ReservationStatus.REJECTED, actor=actor, now=now)
        self.rejection_reason = (reason or "").strip() or None
