from __future__ import annotations

from datetime import date, datetime, time, timezone

import pytest

from src.domain.models.tour_booking import TourBooking
from src.domain.value_objects.booking_status import BookingStatus

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


def _booking() -> TourBooking:
    return TourBooking.create(
        property_id="prop-1",
        user_id="user-1",
        appointment_date=date(2026, 10, 25),
        appointment_time=time(10, 30),
        now=NOW,
    )


def test_two_stage_approval():
    booking = _booking()
    booking.approve_as_cs(actor="cs-1", now=NOW)
    assert booking.status is BookingStatus.CS_APPROVED
    assert booking.awaiting_sales_approval
    booking.approve_as_sales(actor="sales-1", now=NOW)
    assert booking.status is BookingStatus.SALES_APPROVED
    assert booking.sales_approved_at == NOW
    assert not booking.awaiting_sales_approval


def test_sales_approval_requires_cs_approval():
    booking = _booking()
    with pytest.raises(ValueError):
        booking.approve_as_sales(actor="sales-1", now=NOW)
    assert booking.sales_approved_at is None
    assert booking.status is BookingStatus.PENDING


def test_rejection_requires_reason():
    booking = _booking()
    with pytest.raises(ValueError):
        booking.reject("   ", now=NOW)
    booking.reject(" Property no longer available ", now=NOW)
    assert booking.status is BookingStatus.REJECTED
    assert booking.rejection_reason == "Property no longer available"


@pytest.mark.parametrize(
    "status",
    [
        BookingStatus.CONFIRMED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
    ],
)
def test_terminal_states_accept_no_transitions(status):
    assert status.is_terminal()
    assert not any(status.can_move_to(target) for target in BookingStatus)


def test_completion_only_after_sales_approval():
    booking = _booking()
    with pytest.raises(ValueError):
        booking.complete(now=NOW)
    booking.approve_as_cs(actor="cs-1", now=NOW)
    with pytest.raises(ValueError):
        booking.confirm(now=NOW)
    booking.approve_as_sales(actor="sales-1", now=NOW)
    booking.complete(now=NOW)
    assert booking.status is BookingStatus.COMPLETED


def test_cancel_from_pending():
    booking = _booking()
    booking.cancel(now=NOW)
    assert booking.status is BookingStatus.CANCELLED
    with pytest.raises(ValueError):
        booking.approve_as_cs(actor="cs-1", now=NOW)
