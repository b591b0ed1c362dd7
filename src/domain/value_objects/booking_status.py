from __future__ import annotations

from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    CS_APPROVED = "cs_approved"
    SALES_APPROVED = "sales_approved"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"

    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    def can_move_to(self, target: BookingStatus) -> bool:
        return target in ALLOWED_TRANSITIONS.get(self, frozenset())


TERMINAL_STATUSES = frozenset(
    {
        BookingStatus.CONFIRMED,
        BookingStatus.REJECTED,
        BookingStatus.CANCELLED,
        BookingStatus.COMPLETED,
        BookingStatus.NO_SHOW,
    }
)

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.CS_APPROVED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CS_APPROVED: frozenset(
        {BookingStatus.SALES_APPROVED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.SALES_APPROVED: frozenset(
        {
            BookingStatus.CONFIRMED,
            BookingStatus.COMPLETED,
            BookingStatus.NO_SHOW,
            BookingStatus.REJECTED,
            BookingStatus.CANCELLED,
        }
    ),
}
