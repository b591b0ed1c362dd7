from __future__ import annotations

import re
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from src.infrastructure.db.orm.property_reservation import PropertyContractORM

BASE = "/api/v1/property-reservations"


def _reservation(**overrides) -> dict:
    body = {
        "property_id": "prop-3",
        "property_title": "Model House C",
        "reservation_fee": 20000,
        "client_name": "Ana Reyes",
        "client_email": "Ana@Example.com",
        "client_phone": "+63 900 000 0000",
        "client_address": "Lot 4, Block 2, Futura Homes",
        "occupation": "Nurse",
        "employer": "City Hospital",
        "employment_status": "regular",
        "years_employed": 0,
        "monthly_income": 35000,
        "other_income_source": "Rental",
        "other_income_amount": 5000,
        "id_type": "passport",
    }
    body.update(overrides)
    return body


@pytest.fixture()
def client_headers(auth_headers):
    return auth_headers("7", role="client", email="ana@example.com")


@pytest.fixture()
def admin_headers(auth_headers):
    return auth_headers("1", role="admin")


async def _submit(client, headers, **overrides) -> dict:
    resp = await client.post(BASE, json=_reservation(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.mark.asyncio
async def test_submit_reservation(client, client_headers):
    resp = await client.post(BASE, json=_reservation(), headers=client_headers)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["message"].startswith("Reservation submitted successfully!")
    data = body["data"]
    assert re.fullmatch(r"TRK-[A-Z0-9]{8}", data["tracking_number"])
    assert data["status"] == "pending"
    assert data["user_id"] == "7"
    assert data["years_employed"] == 0
    assert Decimal(data["total_monthly_income"]) == Decimal("40000")
    assert Decimal(data["reservation_fee"]) == Decimal("20000")

    feed = (await client.get("/api/v1/notifications", params={"role": "admin"})).json()
    (notification,) = feed["notifications"]
    assert notification["notification_type"] == "reservation_submitted"
    assert notification["data"]["tracking_number"] == data["tracking_number"]


@pytest.mark.asyncio
async def test_submit_requires_sign_in(client):
    resp = await client.post(BASE, json=_reservation())
    assert resp.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"client_address": " "}, "Please fill in all required fields to submit your reservation"),
        ({"years_employed": None}, "Please fill in all required fields to submit your reservation"),
        ({"monthly_income": 0}, "Monthly income must be greater than zero"),
        ({"years_employed": -1}, "Years employed cannot be negative"),
    ],
)
async def test_submit_validation(client, client_headers, overrides, message):
    resp = await client.post(BASE, json=_reservation(**overrides), headers=client_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == message


@pytest.mark.asyncio
async def test_approve_and_notify_client(client, client_headers, admin_headers):
    created = await _submit(client, client_headers)

    resp = await client.post(f"{BASE}/{created['id']}/approve", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["message"] == "Reservation approved successfully!"
    assert resp.json()["data"]["status"] == "approved"
    assert resp.json()["data"]["reviewed_by"] == "1"

    feed = (
        await client.get("/api/v1/notifications", params={"clientOnly": "true", "userId": "7"})
    ).json()
    assert [n["notification_type"] for n in feed["notifications"]] == ["reservation_approved"]

    again = await client.post(f"{BASE}/{created['id']}/reject", headers=admin_headers)
    assert again.status_code == 409
    assert again.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_reject_with_and_without_reason(client, client_headers, admin_headers):
    first = await _submit(client, client_headers)
    second = await _submit(client, client_headers)

    resp = await client.post(
        f"{BASE}/{first['id']}/reject",
        json={"reason": "Income could not be verified"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["message"] == "Reservation rejected successfully!"
    assert resp.json()["data"]["rejection_reason"] == "Income could not be verified"

    resp = await client.post(f"{BASE}/{second['id']}/reject", headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["rejection_reason"] is None


@pytest.mark.asyncio
async def test_review_requires_staff_and_existing_reservation(
    client, client_headers, admin_headers
):
    created = await _submit(client, client_headers)
    resp = await client.post(f"{BASE}/{created['id']}/approve", headers=client_headers)
    assert resp.status_code == 403

    resp = await client.post(f"{BASE}/{uuid4()}/approve", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_listing_filters_and_attaches_contract(
    app, client, client_headers, admin_headers, auth_headers
):
    mine = await _submit(client, client_headers)
    other = await _submit(client, auth_headers("8"), client_email="other@example.com")
    await client.post(f"{BASE}/{mine['id']}/approve", headers=admin_headers)

    async with app.state.session_factory() as session:
        session.add(
            PropertyContractORM(
                contract_id=uuid4(),
                reservation_id=UUID(mine["id"]),
                contract_number="CTR-2026-0001",
                payment_plan_months=60,
                monthly_installment=Decimal("18500.00"),
                contract_status="active",
            )
        )
        await session.commit()

    own = await client.get(BASE, params={"userId": "8"}, headers=client_headers)
    assert own.status_code == 200
    (item,) = own.json()["data"]
    assert item["id"] == mine["id"]
    assert item["contract"]["contract_number"] == "CTR-2026-0001"
    assert item["contract"]["payment_plan_months"] == 60
    assert Decimal(item["contract"]["monthly_installment"]) == Decimal("18500")

    pending = await client.get(BASE, params={"status": "pending"}, headers=admin_headers)
    assert [r["id"] for r in pending.json()["data"]] == [other["id"]]
    assert pending.json()["data"][0]["contract"] is None

    everything = await client.get(BASE, headers=admin_headers)
    assert everything.json()["count"] == 2

    bad = await client.get(BASE, params={"status": "bogus"}, headers=admin_headers)
    assert bad.status_code == 400
