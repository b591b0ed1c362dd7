from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.booking_status import BookingStatus


@dataclass(slots=True)
class TourBooking:
    id: UUID
    property_id: str
    user_id: str
    appointment_date: date
    appointment_time: time
    property_title: str | None = None
    client_name: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
    message: str | None = None
    status: BookingStatus = BookingStatus.PENDING
    cs_approved_at: datetime | None = None
    cs_approved_by: str | None = None
    sales_approved_at: datetime | None = None
    sales_approved_by: str | None = None
    rejection_reason: str | None = None
    rejected_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        property_id: str,
        user_id: str,
        appointment_date: date,
        appointment_time: time,
        property_title: str | None = None,
        client_name: str | None = None,
        client_email: str | None = None,
        client_phone: str | None = None,
        message: str | None = None,
        now: datetime | None = None,
    ) -> TourBooking:
        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            property_id=property_id,
            user_id=user_id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            property_title=property_title,
            client_name=client_name,
            client_email=client_email,
            client_phone=client_phone,
            message=message,
            status=BookingStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def awaiting_sales_approval(self) -> bool:
        return self.cs_approved_at is not None and self.sales_approved_at is None

    def _move_to(self, target: BookingStatus, now: datetime) -> None:
        if not self.status.can_move_to(target):
            raise ValueError(f"Cannot move booking from {self.status.value} to {target.value}")
        self.status = target
        self.updated_at = now

    def approve_as_cs(self, *, actor: str, now: datetime) -> None:
        self._move_to(BookingStatus.CS_APPROVED, now)
        self.cs_approved_at = now
        self.cs_approved_by = actor

    def approve_as_sales(self, *, actor: str, now: datetime) -> None:
        if self.cs_approved_at is None:
            raise ValueError("Sales approval requires prior customer service approval")
        self._move_to(BookingStatus.SALES_APPROVED, now)
        self.sales_approved_at = now
        self.sales_approved_by = actor

    def reject(self, reason: str | None, *, now: datetime) -> None:
        reason = (reason or "").strip()
        if not reason:
            raise ValueError("A rejection reason is required")
        self._move_to(BookingStatus.REJECTED, now)
        self.rejection_reason = reason
        self.rejected_at = now

    def confirm(self, *, now: datetime) -> None:
        self._move_to(BookingStatus.CONFIRMED, now)

    def complete(self, *, now: datetime) -> None:
        self._move_to(BookingStatus.COMPLETED, now)

    def mark_no_show(self, *, now: datetime) -> None:
        self._move_to(BookingStatus.NO_SHOW, now)

    def cancel(self, *, now: datetime) -> None:
        self._move_to(BookingStatus.CANCELLED, now)
