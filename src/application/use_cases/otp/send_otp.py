from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone

from email_validator import EmailNotValidError, validate_email

from src.application.errors import InfrastructureError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.otp_challenge import OtpChallenge

logger = logging.getLogger(__name__)

INQUIRY_PURPOSE = "inquiry verification"


@dataclass(slots=True)
class SendOtpInput:
    email: str | None
    purpose: str | None = INQUIRY_PURPOSE


def normalize_email(value: str | None) -> str:
    email = (value or "").strip()
    if not email:
        raise ValidationError("Please enter your email address")
    try:
        validated = validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError("Please enter a valid email address") from exc
    return validated.normalized.lower()


def generate_code(length: int) -> str:
    return f"{secrets.randbelow(10**length):0{length}d}"


async def execute(
    uow: UnitOfWork,
    payload: SendOtpInput,
    *,
    mailer,
    length: int = 6,
    ttl_seconds: int = 300,
    now: datetime | None = None,
) -> OtpChallenge:
    email = normalize_email(payload.email)
    purpose = (payload.purpose or "").strip() or INQUIRY_PURPOSE
    if purpose != INQUIRY_PURPOSE:
        # Only inquiries are gated by e-mail verification
        raise ValidationError(f"Unsupported verification purpose: {purpose}")
    now = now or datetime.now(timezone.utc)

    # Any previous challenge for this e-mail is replaced, restarting the window
    challenge = OtpChallenge.issue(
        email=email,
        code=generate_code(length),
        purpose=purpose,
        ttl_seconds=ttl_seconds,
        now=now,
    )
    saved = await uow.otp_challenges.replace(challenge)

    # The replacement is kept only once the code has reached the visitor
    try:
        await mailer.send_template(
            "otp_code",
            to=[email],
            context={
                "code": saved.code,
                "purpose": purpose,
                "expires_minutes": max(1, ttl_seconds // 60),
            },
        )
    except Exception as exc:
        await uow.rollback()
        logger.error("OTP delivery failed for %s: %s", email, exc, exc_info=True)
        raise InfrastructureError("Failed to send OTP. Please try again.") from exc
    await uow.commit()
    logger.info("OTP issued: email=%s purpose=%s expires_at=%s", email, purpose, saved.expires_at)
    return saved
