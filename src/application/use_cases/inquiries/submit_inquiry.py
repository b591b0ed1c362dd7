from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from src.application.errors import AuthError, ValidationError, VerificationRequired
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications import factory
from src.application.use_cases.notifications import create_notification
from src.application.use_cases.otp.send_otp import INQUIRY_PURPOSE, normalize_email
from src.domain.models.inquiry import Inquiry
from src.domain.models.notification import Notification

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SubmitInquiryInput:
    property_id: str | None
    client_firstname: str | None
    client_lastname: str | None
    client_email: str | None
    message: str | None
    property_title: str | None = None
    user_id: str | None = None
    client_phone: str | None = None
    is_authenticated: bool = False


@dataclass(slots=True)
class SubmitInquiryResult:
    inquiry: Inquiry
    notification: Notification


def _required(value: str | None) -> str:
    return (value or "").strip()


async def execute(
    uow: UnitOfWork,
    payload: SubmitInquiryInput,
    *,
    auth_user_id: str | None = None,
    verified_ttl_minutes: int = 30,
    strict_targeting: bool = False,
    now: datetime | None = None,
) -> SubmitInquiryResult:
    """Accept an inquiry from a signed-in client or an OTP-verified visitor.

    The caller is authenticated only when a verified token identity is passed
    as `auth_user_id`; the `is_authenticated` body flag alone proves nothing.
    """
    property_id = _required(payload.property_id)
    firstname = _required(payload.client_firstname)
    lastname = _required(payload.client_lastname)
    message = _required(payload.message)
    if not (property_id and firstname and lastname and message and _required(payload.client_email)):
        raise ValidationError("Property, client details, and message are required")
    email = normalize_email(payload.client_email)
    now = now or datetime.now(timezone.utc)

    if payload.is_authenticated and auth_user_id is None:
        raise AuthError("Sign in again to send an inquiry as a registered client")

    if auth_user_id is None:
        challenge = await uow.otp_challenges.get_by_email(email)
        if challenge is None or not challenge.can_unlock(
            INQUIRY_PURPOSE, now=now, verified_ttl=timedelta(minutes=verified_ttl_minutes)
        ):
            raise VerificationRequired("Please verify your email address before sending an inquiry")
        # One verification unlocks one inquiry; a concurrent submission may have spent it
        if not await uow.otp_challenges.consume(challenge.id, now=now):
            raise VerificationRequired("Please verify your email address before sending an inquiry")

    inquiry = Inquiry.create(
        property_id=property_id,
        client_firstname=firstname,
        client_lastname=lastname,
        client_email=email,
        message=message,
        property_title=payload.property_title,
        user_id=auth_user_id,
        client_phone=payload.client_phone,
        is_authenticated=auth_user_id is not None,
        now=now,
    )
    created = await uow.inquiries.add(inquiry)
    notification = await create_notification.write(
        uow, factory.inquiry_received(created), strict_targeting=strict_targeting, now=now
    )
    await uow.commit()
    logger.info(
        "Inquiry received: id=%s property_id=%s authenticated=%s",
        created.id,
        created.property_id,
        created.is_authenticated,
    )
    return SubmitInquiryResult(inquiry=created, notification=notification)
