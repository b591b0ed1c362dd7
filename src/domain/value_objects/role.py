from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"
    CUSTOMER_SERVICE = "customer_service"
    SALES = "sales"
    CLIENT = "client"

    @classmethod
    def parse(cls, value: object) -> Role:
        """Map a token claim to a role; anything unknown is treated as a client."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.CLIENT

    def is_staff(self) -> bool:
        return self is not Role.CLIENT

    def can_approve_as_cs(self) -> bool:
        return self in {Role.ADMIN, Role.CUSTOMER_SERVICE}

    def can_approve_as_sales(self) -> bool:
        return self in {Role.ADMIN, Role.SALES}


# Broadcast audience understood by the notification feed
ALL_RECIPIENTS = "all"
