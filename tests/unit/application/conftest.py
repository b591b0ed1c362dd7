from __future__ import annotations

from types import SimpleNamespace

import pytest


class StubNotificationsRepo:
    def __init__(self) -> None:
        self.items: dict = {}

    async def add(self, notification):
        self.items[notification.id] = notification
        return notification

    async def get(self, notification_id):
        return self.items.get(notification_id)

    async def list_matching(self, predicate, *, limit):
        matched = [n for n in self.items.values() if predicate.matches(n)]
        matched.sort(key=lambda n: n.created_at, reverse=True)
        return matched[:limit]

    async def update(self, notification):
        self.items[notification.id] = notification
        return notification

    async def delete(self, notification_id):
        return self.items.pop(notification_id, None) is not None

    async def delete_all(self):
        removed = len(self.items)
        self.items.clear()
        return removed


class StubOtpRepo:
    def __init__(self) -> None:
        self.by_email: dict = {}
        self.saves = 0
        self.contended = False

    async def get_by_email(self, email):
        return self.by_email.get(email)

    async def replace(self, challenge):
        self.by_email[challenge.email] = challenge
        return challenge

    async def save(self, challenge):
        self.saves += 1
        self.by_email[challenge.email] = challenge

    async def consume(self, challenge_id, *, now):
        if self.contended:
            return False
        for challenge in self.by_email.values():
            if challenge.id == challenge_id and challenge.verified_at and not challenge.consumed_at:
                challenge.consume(now=now)
                return True
        return False


class StubBookingsRepo:
    def __init__(self) -> None:
        self.items: dict = {}
        self.conflict = False

    async def add(self, booking):
        self.items[booking.id] = booking
        return booking

    async def get(self, booking_id):
        return self.items.get(booking_id)

    async def list(self, *, user_id=None, status=None):
        return [
            b
            for b in self.items.values()
            if (user_id is None or b.user_id == user_id) and (status is None or b.status is status)
        ]

    async def update(self, booking, *, expected_status):
        if self.conflict:
            return False
        self.items[booking.id] = booking
        return True


class StubInquiriesRepo:
    def __init__(self) -> None:
        self.items: list = []
        self.list_args = None

    async def add(self, inquiry):
        self.items.append(inquiry)
        return inquiry

    async def list(self, *, user_id=None, client_email=None):
        self.list_args = {"user_id": user_id, "client_email": client_email}
        return list(self.items)

class StubReservationsRepo:
    def __init__(self) -> None:
        self.items: dict = {}
        self.contracts: dict = {}
        self.conflict = False

    async def add(self, reservation):
        self.items[reservation.id] = reservation
        return reservation

    async def get(self, reservation_id):
        return self.items.get(reservation_id)

    async def list(self, *, user_id=None, status=None):
        return [
            r
            for r in self.items.values()
            if (user_id is None or r.user_id == user_id) and (status is None or r.status is status)
        ]

    async def contracts_for(self, reservation_ids):
        return {rid: self.contracts[rid] for rid in reservation_ids if rid in self.contracts}

    async def update(self, reservation, *, expected_status):
        if self.conflict:
            return False
        self.items[reservation.id] = reservation
        return True



class StubMailer:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list = []

    async def send_template(self, template_key, *, to, context, locale=None):
        if self.fail:
            raise RuntimeError("provider down")
        self.sent.append((template_key, list(to), context))


def make_uow():
    counters = {"commits": 0, "rollbacks": 0}

    async def commit():
        counters["commits"] += 1

    async def rollback():
        counters["rollbacks"] += 1

    return SimpleNamespace(
        notifications=StubNotificationsRepo(),
        otp_challenges=StubOtpRepo(),
        tour_bookings=StubBookingsRepo(),
        inquiries=StubInquiriesRepo(),
        property_reservations=StubReservationsRepo(),
        commit=commit,
        rollback=rollback,
        counters=counters,
    )


@pytest.fixture()
def uow():
    return make_uow()


@pytest.fixture()
def mailer():
    return StubMailer()
