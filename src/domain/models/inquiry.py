from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class InquiryStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


@dataclass(slots=True)
class Inquiry:
    id: UUID
    property_id: str
    client_firstname: str
    client_lastname: str
    client_email: str
    message: str
    property_title: str | None = None
    user_id: str | None = None
    client_phone: str | None = None
    is_authenticated: bool = False
    status: InquiryStatus = InquiryStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        property_id: str,
        client_firstname: str,
        client_lastname: str,
        client_email: str,
        message: str,
        property_title: str | None = None,
        user_id: str | None = None,
        client_phone: str | None = None,
        is_authenticated: bool = False,
        now: datetime | None = None,
    ) -> Inquiry:
        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            property_id=property_id,
            client_firstname=client_firstname.strip(),
            client_lastname=client_lastname.strip(),
            client_email=client_email.strip().lower(),
            message=message.strip(),
            property_title=property_title,
            user_id=user_id,
            client_phone=(client_phone or "").strip() or None,
            is_authenticated=is_authenticated,
            status=InquiryStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def client_full_name(self) -> str:
        return f"{self.client_firstname} {self.client_lastname}".strip()
