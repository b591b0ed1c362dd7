from __future__ import annotations


class NotificationType:
    """Canonical notification type names used across backend/frontend."""

    MANUAL = "manual"
    BOOKING_REQUESTED = "booking_requested"
    BOOKING_CS_APPROVED = "booking_cs_approved"
    BOOKING_SALES_APPROVED = "booking_sales_approved"
    BOOKING_STATUS_CHANGED = "booking_status_changed"
    BOOKING_REJECTED = "booking_rejected"
    INQUIRY_RECEIVED = "inquiry_received"
    RESERVATION_SUBMITTED = "reservation_submitted"
    RESERVATION_APPROVED = "reservation_approved"
    RESERVATION_REJECTED = "reservation_rejected"


ALL_TYPES = {
    NotificationType.MANUAL,
    NotificationType.BOOKING_REQUESTED,
    NotificationType.BOOKING_CS_APPROVED,
    NotificationType.BOOKING_SALES_APPROVED,
    NotificationType.BOOKING_STATUS_CHANGED,
    NotificationType.BOOKING_REJECTED,
    NotificationType.INQUIRY_RECEIVED,
    NotificationType.RESERVATION_SUBMITTED,
    NotificationType.RESERVATION_APPROVED,
    NotificationType.RESERVATION_REJECTED,
}


class SourceTable:
    TOUR_BOOKINGS = ("tour_bookings", "Tour Bookings")
    CLIENT_INQUIRIES = ("client_inquiries", "Client Inquiries")
    PROPERTY_RESERVATIONS = ("property_reservations", "Property Reservations")
