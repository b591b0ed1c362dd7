from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select, update

from src.infrastructure.db.orm.inquiry import InquiryORM
from src.infrastructure.db.orm.otp_challenge import OtpChallengeORM

EMAIL = "Visitor@Example.com"


def _inquiry(**overrides) -> dict:
    body = {
        "property_id": "prop-1",
        "property_title": "Model House A",
        "client_firstname": "Ana",
        "client_lastname": "Reyes",
        "client_email": EMAIL,
        "client_phone": "+63 900 000 0000",
        "message": "Is this unit still available?",
    }
    body.update(overrides)
    return body


async def _send_and_verify(client, email_service, email: str = EMAIL) -> None:
    resp = await client.post("/api/v1/otp/send", json={"email": email})
    assert resp.status_code == 200, resp.text
    resp = await client.post(
        "/api/v1/otp/verify", json={"email": email, "otp_code": email_service.last_code()}
    )
    assert resp.status_code == 200, resp.text


@pytest.mark.asyncio
async def test_send_otp_emails_a_code(client, email_service):
    resp = await client.post("/api/v1/otp/send", json={"email": EMAIL})
    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "message": "OTP sent successfully. Please check your email.",
    }
    (message,) = email_service.sent
    assert message.to == ["visitor@example.com"]
    assert message.template_key == "otp_code"
    assert len(email_service.last_code()) == 6


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("email", "expected"),
    [
        ("", "Please enter your email address"),
        ("not-an-email", "Please enter a valid email address"),
    ],
)
async def test_send_otp_validates_email(client, email_service, email, expected):
    resp = await client.post("/api/v1/otp/send", json={"email": email})
    assert resp.status_code == 400
    assert resp.json()["message"] == expected
    assert email_service.sent == []


@pytest.mark.asyncio
async def test_send_otp_reports_delivery_failure(client, email_service):
    email_service.fail = True
    resp = await client.post("/api/v1/otp/send", json={"email": EMAIL})
    assert resp.status_code == 500
    assert resp.json()["message"] == "Failed to send OTP. Please try again."


@pytest.mark.asyncio
async def test_failed_resend_keeps_previous_code(client, email_service):
    await client.post("/api/v1/otp/send", json={"email": EMAIL})
    code = email_service.last_code()

    email_service.fail = True
    resp = await client.post("/api/v1/otp/send", json={"email": EMAIL})
    assert resp.status_code == 500
    email_service.fail = False

    resp = await client.post("/api/v1/otp/verify", json={"email": EMAIL, "otp_code": code})
    assert resp.status_code == 200, resp.text


@pytest.mark.asyncio
async def test_send_otp_rejects_unknown_purpose(client, email_service):
    resp = await client.post(
        "/api/v1/otp/send", json={"email": EMAIL, "purpose": "newsletter signup"}
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Unsupported verification purpose: newsletter signup"
    assert email_service.sent == []


@pytest.mark.asyncio
async def test_verify_rejects_wrong_and_malformed_codes(client, email_service):
    await client.post("/api/v1/otp/send", json={"email": EMAIL})
    code = email_service.last_code()
    wrong = "000000" if code != "000000" else "111111"

    resp = await client.post("/api/v1/otp/verify", json={"email": EMAIL, "otp_code": wrong})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid or expired OTP code"

    resp = await client.post("/api/v1/otp/verify", json={"email": EMAIL, "otp_code": "12ab"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Please enter a valid 6-digit OTP code"

    resp = await client.post("/api/v1/otp/verify", json={"email": EMAIL, "otp_code": code})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Email verified successfully"


@pytest.mark.asyncio
async def test_verify_fails_after_expiry(app, client, email_service):
    await client.post("/api/v1/otp/send", json={"email": EMAIL})
    async with app.state.session_factory() as session:
        await session.execute(
            update(OtpChallengeORM).values(
                expires_at=datetime.now(timezone.utc) - timedelta(seconds=1)
            )
        )
        await session.commit()
    resp = await client.post(
        "/api/v1/otp/verify", json={"email": EMAIL, "otp_code": email_service.last_code()}
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "otp_invalid"


@pytest.mark.asyncio
async def test_resend_invalidates_previous_code(client, email_service):
    await client.post("/api/v1/otp/send", json={"email": EMAIL})
    first = email_service.last_code()
    await client.post("/api/v1/otp/send", json={"email": EMAIL})
    second = email_service.last_code()
    if first != second:
        resp = await client.post("/api/v1/otp/verify", json={"email": EMAIL, "otp_code": first})
        assert resp.status_code == 400
    resp = await client.post("/api/v1/otp/verify", json={"email": EMAIL, "otp_code": second})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_anonymous_inquiry_requires_verified_email(client):
    resp = await client.post("/api/v1/inquiries", json=_inquiry())
    assert resp.status_code == 403
    assert resp.json()["code"] == "verification_required"


@pytest.mark.asyncio
async def test_verified_visitor_can_send_one_inquiry(client, email_service):
    await _send_and_verify(client, email_service)

    resp = await client.post("/api/v1/inquiries", json=_inquiry())
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["message"] == "Inquiry submitted successfully"
    assert body["data"]["client_email"] == "visitor@example.com"
    assert body["data"]["is_authenticated"] is False
    assert body["data"]["user_id"] is None
    assert body["data"]["status"] == "pending"

    # The verification is spent
    assert (await client.post("/api/v1/inquiries", json=_inquiry())).status_code == 403

    feed = (await client.get("/api/v1/notifications", params={"role": "customer_service"})).json()
    (notification,) = feed["notifications"]
    assert notification["notification_type"] == "inquiry_received"
    assert notification["source_table"] == "client_inquiries"
    assert notification["data"]["inquiry_id"] == body["data"]["id"]


@pytest.mark.asyncio
async def test_concurrent_submissions_share_one_verification(app, client, email_service):
    await _send_and_verify(client, email_service)

    first, second = await asyncio.gather(
        client.post("/api/v1/inquiries", json=_inquiry()),
        client.post("/api/v1/inquiries", json=_inquiry(message="Second question")),
    )
    assert sorted([first.status_code, second.status_code]) == [201, 403]

    async with app.state.session_factory() as session:
        stored = await session.scalar(select(func.count()).select_from(InquiryORM))
    assert stored == 1


@pytest.mark.asyncio
async def test_inquiry_requires_fields(client):
    resp = await client.post("/api/v1/inquiries", json=_inquiry(message=" "))
    assert resp.status_code == 400
    assert resp.json()["message"] == "Property, client details, and message are required"


@pytest.mark.asyncio
async def test_authenticated_client_skips_otp(client, auth_headers):
    resp = await client.post(
        "/api/v1/inquiries",
        json=_inquiry(is_authenticated=True, user_id="someone-else"),
        headers=auth_headers("7", email="ana@example.com"),
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["is_authenticated"] is True
    assert data["user_id"] == "7"


@pytest.mark.asyncio
async def test_authenticated_flag_without_token_is_rejected(client):
    resp = await client.post("/api/v1/inquiries", json=_inquiry(is_authenticated=True))
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_list_inquiries_scoping(client, auth_headers):
    await client.post("/api/v1/inquiries", json=_inquiry(), headers=auth_headers("7"))
    await client.post(
        "/api/v1/inquiries",
        json=_inquiry(client_email="other@example.com"),
        headers=auth_headers("8"),
    )

    assert (await client.get("/api/v1/inquiries")).status_code == 401

    mine = await client.get(
        "/api/v1/inquiries", params={"userId": "8"}, headers=auth_headers("7")
    )
    assert mine.json()["count"] == 1
    assert mine.json()["data"][0]["user_id"] == "7"

    staff = await client.get(
        "/api/v1/inquiries",
        params={"clientEmail": "OTHER@example.com"},
        headers=auth_headers("1", role="customer_service"),
    )
    assert [i["user_id"] for i in staff.json()["data"]] == ["8"]
    everything = await client.get("/api/v1/inquiries", headers=auth_headers("1", role="admin"))
    assert everything.json()["count"] == 2
