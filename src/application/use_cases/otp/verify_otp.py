from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone

from src.application.errors import OtpVerificationFailed, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.otp.send_otp import normalize_email
from src.domain.models.otp_challenge import OtpChallenge

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Invalid or expired OTP code"


@dataclass(slots=True)
class VerifyOtpInput:
    email: str | None
    otp_code: str | None


async def execute(
    uow: UnitOfWork,
    payload: VerifyOtpInput,
    *,
    length: int = 6,
    max_attempts: int = 5,
    now: datetime | None = None,
) -> OtpChallenge:
    code = (payload.otp_code or "").strip()
    if not re.fullmatch(rf"\d{{{length}}}", code):
        raise ValidationError(f"Please enter a valid {length}-digit OTP code")
    email = normalize_email(payload.email)
    now = now or datetime.now(timezone.utc)

    challenge = await uow.otp_challenges.get_by_email(email)
    if challenge is None:
        raise OtpVerificationFailed(GENERIC_FAILURE)

    if not challenge.verify(code, now=now, max_attempts=max_attempts):
        # Failed attempts are recorded even though the request fails
        await uow.otp_challenges.save(challenge)
        await uow.commit()
        logger.info(
            "OTP verification failed: email=%s state=%s attempts=%s",
            email,
            challenge.state(now).value,
            challenge.attempts,
        )
        raise OtpVerificationFailed(GENERIC_FAILURE)

    await uow.otp_challenges.save(challenge)
    await uow.commit()
    logger.info("OTP verified: email=%s purpose=%s", email, challenge.purpose)
    return challenge
