from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from src.application.errors import (
    AuthError,
    ConflictError,
    InvalidTransition,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from src.application.use_cases.reservations import (
    create_reservation,
    list_reservations,
    review_reservation,
)
from src.application.use_cases.reservations.review_reservation import ReservationAction
from src.domain.models.property_reservation import ReservationContract
from src.domain.value_objects.reservation_status import ReservationStatus
from src.domain.value_objects.role import Role

NOW = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)


def _payload(**kwargs) -> create_reservation.CreateReservationInput:
    data = {
        "property_id": "prop-1",
        "property_title": "Model House A",
        "client_name": "Ana Reyes",
        "client_email": "Ana@Example.com",
        "client_phone": " +63 900 000 0000 ",
        "client_address": " Lot 4, Block 2 ",
        "occupation": "Nurse",
        "employer": "City Hospital",
        "employment_status": "regular",
        "years_employed": 3,
        "monthly_income": Decimal("35000"),
    }
    data.update(kwargs)
    return create_reservation.CreateReservationInput(**data)


async def _create(uow, actor="7", **kwargs):
    result = await create_reservation.execute(uow, _payload(**kwargs), actor_id=actor, now=NOW)
    return result.reservation


async def _review(uow, reservation, action, role=Role.ADMIN, reason=None):
    return await review_reservation.execute(
        uow,
        review_reservation.ReviewReservationInput(
            reservation_id=reservation.id,
            action=action,
            actor_id="admin-1",
            actor_role=role,
            reason=reason,
        ),
        now=NOW,
    )


async def test_create_trims_fields_and_notifies_staff(uow):
    result = await create_reservation.execute(uow, _payload(), actor_id="7", now=NOW)
    reservation = result.reservation
    assert reservation.status is ReservationStatus.PENDING
    assert reservation.user_id == "7"
    assert reservation.client_phone == "+63 900 000 0000"
    assert reservation.client_address == "Lot 4, Block 2"
    assert reservation.client_email == "ana@example.com"
    assert reservation.tracking_number.startswith("TRK-")

    notification = result.notification
    assert notification.notification_type == "reservation_submitted"
    assert notification.source_table == "property_reservations"
    assert notification.data["tracking_number"] == reservation.tracking_number
    assert uow.counters["commits"] == 1


async def test_missing_fields_are_listed(uow):
    with pytest.raises(ValidationError) as excinfo:
        await _create(uow, employer=" ", monthly_income=None)
    assert excinfo.value.message == create_reservation.MISSING_FIELDS
    assert excinfo.value.details == {"missing": ["employer", "monthly_income"]}
    assert uow.property_reservations.items == {}


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"monthly_income": Decimal("0")}, "Monthly income must be greater than zero"),
        ({"years_employed": -2}, "Years employed cannot be negative"),
    ],
)
async def test_numeric_rules(uow, overrides, message):
    with pytest.raises(ValidationError, match=message):
        await _create(uow, **overrides)


async def test_reservation_for_someone_else_is_refused(uow):
    with pytest.raises(PermissionDenied):
        await _create(uow, user_id="8")


async def test_approve_notifies_client(uow):
    reservation = await _create(uow)
    result = await _review(uow, reservation, ReservationAction.APPROVE)
    assert result.previous_status is ReservationStatus.PENDING
    assert result.reservation.status is ReservationStatus.APPROVED
    assert result.reservation.reviewed_by == "admin-1"

    notification = result.notification
    assert notification.notification_type == "reservation_approved"
    assert notification.recipient_role == "client"
    assert notification.data["user_id"] == "7"


async def test_reject_carries_reason_to_client(uow):
    reservation = await _create(uow)
    result = await _review(
        uow, reservation, ReservationAction.REJECT, reason="Income could not be verified"
    )
    assert result.reservation.status is ReservationStatus.REJECTED
    assert result.notification.notification_type == "reservation_rejected"
    assert result.notification.message.startswith(
        "Your reservation for Model House A was not approved: Income could not be verified"
    )


async def test_clients_cannot_review(uow):
    reservation = await _create(uow)
    with pytest.raises(PermissionDenied):
        await _review(uow, reservation, ReservationAction.APPROVE, role=Role.CLIENT)
    assert reservation.status is ReservationStatus.PENDING


async def test_second_review_is_an_invalid_transition(uow):
    reservation = await _create(uow)
    await _review(uow, reservation, ReservationAction.APPROVE)
    with pytest.raises(InvalidTransition):
        await _review(uow, reservation, ReservationAction.REJECT)


async def test_concurrent_review_conflicts(uow):
    reservation = await _create(uow)
    uow.property_reservations.conflict = True
    with pytest.raises(ConflictError):
        await _review(uow, reservation, ReservationAction.APPROVE)
    assert uow.counters["rollbacks"] == 1


async def test_unknown_reservation(uow):
    missing = type("Missing", (), {"id": uuid4()})()
    with pytest.raises(NotFound):
        await _review(uow, missing, ReservationAction.APPROVE)


async def test_listing_scopes_clients_and_attaches_contracts(uow):
    mine = await _create(uow, actor="7")
    await _create(uow, actor="8", user_id=None)
    contract = ReservationContract(
        contract_id=uuid4(),
        reservation_id=mine.id,
        contract_number="CTR-0001",
        payment_plan_months=60,
        monthly_installment=Decimal("18500.00"),
        contract_status="active",
    )
    uow.property_reservations.contracts[mine.id] = contract

    listings = await list_reservations.execute(
        uow, actor_id="7", actor_role=Role.CLIENT, user_id="8"
    )
    assert [x.reservation.id for x in listings] == [mine.id]
    assert listings[0].contract is contract

    everything = await list_reservations.execute(uow, actor_id="1", actor_role=Role.SALES)
    assert len(everything) == 2
    assert sum(1 for x in everything if x.contract is None) == 1

    approved = await list_reservations.execute(
        uow, actor_id="1", actor_role=Role.ADMIN, status="approved"
    )
    assert approved == []


async def test_listing_validates_status_and_auth(uow):
    with pytest.raises(ValidationError):
        await list_reservations.execute(uow, actor_id="1", actor_role=Role.ADMIN, status="bogus")
    with pytest.raises(AuthError):
        await list_reservations.execute(uow, actor_id=None, actor_role=None)
