from __future__ import annotations

from src.application.use_cases.notifications.create_notification import CreateNotificationInput
from src.domain.models.inquiry import Inquiry
from src.domain.models.property_reservation import PropertyReservation
from src.domain.models.tour_booking import TourBooking
from src.domain.value_objects.booking_status import BookingStatus
from src.domain.value_objects.reservation_status import ReservationStatus
from src.domain.value_objects.role import Role
from src.utils.datetime_tz import format_appointment

from .types import NotificationType, SourceTable

STAFF_BOOKINGS_URL = "/reservations"
STAFF_INQUIRIES_URL = "/inquiries"
CLIENT_BOOKINGS_URL = "/client-bookings"
CLIENT_RESERVATIONS_URL = "/reservations"
STAFF_RESERVATIONS_URL = "/property-reservations"


def _short_label(s: str | None, *, max_len: int = 24) -> str | None:
    """Shorten labels like client or property names to a safe length with ellipsis."""
    if not s:
        return s
    s = str(s)
    return s if len(s) <= max_len else (s[: max(0, max_len - 1)] + "…")


def _property_label(record: TourBooking | Inquiry | PropertyReservation) -> str:
    return _short_label(record.property_title) or "the property"


def _booking_source(booking: TourBooking) -> dict:
    table, display = SourceTable.TOUR_BOOKINGS
    return {
        "source_table": table,
        "source_table_display_name": display,
        "source_record_id": str(booking.id),
    }


def booking_requested(booking: TourBooking) -> CreateNotificationInput:
    client = _short_label(booking.client_name or booking.client_email) or "A client"
    when = format_appointment(booking.appointment_date, booking.appointment_time)
    return CreateNotificationInput(
        title="📅 New tour booking request",
        message=f"{client} requested a tour of {_property_label(booking)} on {when}",
        icon="📅",
        priority="high",
        notification_type=NotificationType.BOOKING_REQUESTED,
        recipient_role=Role.CUSTOMER_SERVICE.value,
        data={
            "booking_id": str(booking.id),
            "property_id": booking.property_id,
            "client_user_id": booking.user_id,
        },
        action_url=STAFF_BOOKINGS_URL,
        **_booking_source(booking),
    )


def booking_awaiting_sales(booking: TourBooking) -> CreateNotificationInput:
    when = format_appointment(booking.appointment_date, booking.appointment_time)
    return CreateNotificationInput(
        title="🤝 Tour booking awaiting Sales approval",
        message=(
            f"Customer Service approved the tour of {_property_label(booking)} on {when}"
        ),
        icon="🤝",
        priority="high",
        notification_type=NotificationType.BOOKING_CS_APPROVED,
        recipient_role=Role.SALES.value,
        data={
            "booking_id": str(booking.id),
            "property_id": booking.property_id,
            "client_user_id": booking.user_id,
        },
        action_url=STAFF_BOOKINGS_URL,
        **_booking_source(booking),
    )


_CLIENT_MESSAGES: dict[BookingStatus, tuple[str, str, str]] = {
    BookingStatus.CS_APPROVED: (
        NotificationType.BOOKING_CS_APPROVED,
        "✅ Tour request approved by Customer Service",
        "Your tour of {property} on {when} is now awaiting Sales approval",
    ),
    BookingStatus.SALES_APPROVED: (
        NotificationType.BOOKING_SALES_APPROVED,
        "🎉 Tour fully approved",
        "Your tour of {property} on {when} has been approved",
    ),
    BookingStatus.CONFIRMED: (
        NotificationType.BOOKING_STATUS_CHANGED,
        "📌 Tour confirmed",
        "Your tour of {property} on {when} is confirmed",
    ),
    BookingStatus.COMPLETED: (
        NotificationType.BOOKING_STATUS_CHANGED,
        "🏡 Thanks for visiting",
        "Your tour of {property} on {when} is marked as completed",
    ),
    BookingStatus.NO_SHOW: (
        NotificationType.BOOKING_STATUS_CHANGED,
        "⏰ Missed tour",
        "We missed you at the tour of {property} on {when}",
    ),
    BookingStatus.CANCELLED: (
        NotificationType.BOOKING_STATUS_CHANGED,
        "🚫 Tour cancelled",
        "Your tour of {property} on {when} was cancelled",
    ),
    BookingStatus.REJECTED: (
        NotificationType.BOOKING_REJECTED,
        "❌ Tour request rejected",
        "Your tour request for {property} on {when} was rejected: {reason}",
    ),
}


def booking_update_for_client(booking: TourBooking) -> CreateNotificationInput | None:
    entry = _CLIENT_MESSAGES.get(booking.status)
    if entry is None:
        return None
    ntype, title, template = entry
    message = template.format(
        property=_property_label(booking),
        when=format_appointment(booking.appointment_date, booking.appointment_time),
        reason=booking.rejection_reason or "",
    )
    return CreateNotificationInput(
        title=title,
        message=message,
        icon=title.split(" ", 1)[0],
        priority="high" if booking.status is BookingStatus.REJECTED else "normal",
        notification_type=ntype,
        recipient_role=Role.CLIENT.value,
        data={
            "user_id": booking.user_id,
            "booking_id": str(booking.id),
            "property_id": booking.property_id,
            "status": booking.status.value,
            "rejection_reason": booking.rejection_reason,
        },
        action_url=CLIENT_BOOKINGS_URL,
        **_booking_source(booking),
    )


def inquiry_received(inquiry: Inquiry) -> CreateNotificationInput:
    table, display = SourceTable.CLIENT_INQUIRIES
    verified = "signed-in client" if inquiry.is_authenticated else "verified visitor"
    return CreateNotificationInput(
        title="💬 New property inquiry",
        message=(
            f"{_short_label(inquiry.client_full_name)} ({verified}) asked about "
            f"{_property_label(inquiry)}"
        ),
        icon="💬",
        notification_type=NotificationType.INQUIRY_RECEIVED,
        source_table=table,
        source_table_display_name=display,
        source_record_id=str(inquiry.id),
        recipient_role=Role.CUSTOMER_SERVICE.value,
        data={
            "inquiry_id": str(inquiry.id),
            "property_id": inquiry.property_id,
            "client_email": inquiry.client_email,
        },
        action_url=STAFF_INQUIRIES_URL,
    )


def _reservation_source(reservation: PropertyReservation) -> dict:
    table, display = SourceTable.PROPERTY_RESERVATIONS
    return {
        "source_table": table,
        "source_table_display_name": display,
        "source_record_id": str(reservation.id),
    }


def reservation_submitted(reservation: PropertyReservation) -> CreateNotificationInput:
    client = _short_label(reservation.client_name or reservation.client_email) or "A client"
    return CreateNotificationInput(
        title="🏠 New property reservation",
        message=(
            f"{client} reserved {_property_label(reservation)} "
            f"(tracking {reservation.tracking_number})"
        ),
        icon="🏠",
        priority="high",
        notification_type=NotificationType.RESERVATION_SUBMITTED,
        recipient_role=Role.ADMIN.value,
        data={
            "reservation_id": str(reservation.id),
            "tracking_number": reservation.tracking_number,
            "property_id": reservation.property_id,
            "client_user_id": reservation.user_id,
        },
        action_url=STAFF_RESERVATIONS_URL,
        **_reservation_source(reservation),
    )


def reservation_update_for_client(
    reservation: PropertyReservation,
) -> CreateNotificationInput | None:
    if reservation.status is ReservationStatus.APPROVED:
        ntype = NotificationType.RESERVATION_APPROVED
        title = "🎉 Reservation approved"
        message = f"Your reservation for {_property_label(reservation)} has been approved"
    elif reservation.status is ReservationStatus.REJECTED:
        ntype = NotificationType.RESERVATION_REJECTED
        title = "❌ Reservation not approved"
        message = f"Your reservation for {_property_label(reservation)} was not approved"
        if reservation.rejection_reason:
            message += f": {reservation.rejection_reason}"
    else:
        return None
    return CreateNotificationInput(
        title=title,
        message=f"{message} (tracking {reservation.tracking_number})",
        icon=title.split(" ", 1)[0],
        priority="high",
        notification_type=ntype,
        recipient_role=Role.CLIENT.value,
        data={
            "user_id": reservation.user_id,
            "reservation_id": str(reservation.id),
            "tracking_number": reservation.tracking_number,
            "property_id": reservation.property_id,
            "status": reservation.status.value,
            "rejection_reason": reservation.rejection_reason,
        },
        action_url=CLIENT_RESERVATIONS_URL,
        **_reservation_source(reservation),
    )
