from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.models.otp_challenge import OtpChallenge


class OtpChallengesRepository(Protocol):
    async def get_by_email(self, email: str) -> OtpChallenge | None: ...

    async def replace(self, challenge: OtpChallenge) -> OtpChallenge: ...

    async def save(self, challenge: OtpChallenge) -> None: ...

    async def consume(self, challenge_id: UUID, *, now: datetime) -> bool: ...
