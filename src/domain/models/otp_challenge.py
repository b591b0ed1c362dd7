from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from uuid import UUID, uuid4


class OtpState(str, Enum):
    SENT = "sent"
    VERIFIED = "verified"
    EXPIRED = "expired"
    CONSUMED = "consumed"


@dataclass(slots=True)
class OtpChallenge:
    """
    One-time code proving ownership of an e-mail address.
    There is at most one challenge per e-mail; requesting a new code replaces it.
    A verified challenge unlocks exactly one submission and is then consumed.
    """

    id: UUID
    email: str
    code: str
    purpose: str
    issued_at: datetime
    expires_at: datetime
    attempts: int = 0
    verified_at: datetime | None = None
    consumed_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def issue(
        cls,
        *,
        email: str,
        code: str,
        purpose: str,
        ttl_seconds: int,
        now: datetime | None = None,
    ) -> OtpChallenge:
        now = now or datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            email=email,
            code=code,
            purpose=purpose,
            issued_at=now,
            expires_at=now + timedelta(seconds=ttl_seconds),
            attempts=0,
            verified_at=None,
            consumed_at=None,
            created_at=now,
        )

    def state(self, now: datetime) -> OtpState:
        if self.consumed_at is not None:
            return OtpState.CONSUMED
        if self.verified_at is not None:
            return OtpState.VERIFIED
        if self.is_expired(now):
            return OtpState.EXPIRED
        return OtpState.SENT

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def verify(self, code: str, *, now: datetime, max_attempts: int) -> bool:
        """Try to move SENT -> VERIFIED. Returns False for any failure reason."""
        if self.state(now) is not OtpState.SENT:
            return False
        if self.attempts >= max_attempts:
            return False
        if not hmac.compare_digest(self.code, code):
            self.attempts += 1
            return False
        self.verified_at = now
        return True

    def can_unlock(self, purpose: str, *, now: datetime, verified_ttl: timedelta) -> bool:
        """Whether this challenge still vouches for its e-mail for `purpose`."""
        if self.state(now) is not OtpState.VERIFIED or self.purpose != purpose:
            return False
        return now < self.verified_at + verified_ttl

    def consume(self, *, now: datetime) -> None:
        if self.state(now) is not OtpState.VERIFIED:
            raise ValueError("Only a verified challenge can be consumed")
        self.consumed_at = now
