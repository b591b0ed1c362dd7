from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session

from src.application.notifications.visibility import VisibilityQuery, build_visibility_predicate
from src.domain.value_objects.predicate import MATCH_ALL, MATCH_NONE
from src.infrastructure.db.orm.notification import NotificationORM
from src.infrastructure.db.predicates import compile_predicate

ROWS = {
    "client_7": {"recipient_role": "client", "data": {"user_id": 7}},
    "client_7_text": {"recipient_role": "client", "data": {"user_id": "7"}},
    "client_8": {"recipient_role": "client", "data": {"user_id": 8}},
    "staff": {"recipient_role": "staff"},
    "all": {"recipient_role": "all"},
    "null_role": {"recipient_role": None},
    "admin_7": {"recipient_role": "admin", "recipient_id": 7},
    "archived": {"recipient_role": "staff", "status": "archived"},
    "urgent": {"recipient_role": "staff", "priority": "urgent"},
}


@pytest.fixture(scope="module")
def session():
    engine = create_engine("sqlite://")
    NotificationORM.__table__.create(engine)
    now = datetime(2026, 10, 19, tzinfo=timezone.utc)
    with Session(engine) as session:
        for name, values in ROWS.items():
            session.add(
                NotificationORM(
                    id=uuid4(),
                    title=name,
                    message="m",
                    icon="📢",
                    priority=values.get("priority", "normal"),
                    status=values.get("status", "unread"),
                    notification_type="manual",
                    source_table="manual",
                    source_table_display_name="Manual Notification",
                    recipient_role=values.get("recipient_role"),
                    recipient_id=values.get("recipient_id"),
                    data=values.get("data", {}),
                    created_at=now,
                    updated_at=now,
                )
            )
        session.commit()
        yield session
    engine.dispose()


def _sql_titles(session, predicate) -> set[str]:
    stmt = select(NotificationORM.title).where(compile_predicate(predicate, NotificationORM))
    return set(session.execute(stmt).scalars())


def _memory_titles(session, predicate) -> set[str]:
    rows = session.execute(select(NotificationORM)).scalars().all()
    return {row.title for row in rows if predicate.matches(row)}


@pytest.mark.parametrize(
    "query",
    [
        {"client_only": True, "user_id": "7"},
        {"client_only": True, "user_id": "7", "role": "admin"},
        {"user_id": "7", "role": "staff"},
        {"user_id": "3f2a9c1e-1111-4a4a-9b9b-000000000001", "role": "staff"},
        {"role": "staff"},
        {"user_id": "7"},
        {"user_id": "abc"},
        {},
        {"role": "staff", "status": "archived"},
        {"role": "staff", "priority": "urgent"},
    ],
)
def test_sql_and_memory_evaluation_agree(session, query):
    predicate = build_visibility_predicate(VisibilityQuery.build(**query))
    assert _sql_titles(session, predicate) == _memory_titles(session, predicate)


def test_known_results(session):
    client = build_visibility_predicate(VisibilityQuery.build(client_only=True, user_id="7"))
    assert _sql_titles(session, client) == {"client_7", "client_7_text"}
    role_only = build_visibility_predicate(VisibilityQuery.build(role="staff"))
    assert _sql_titles(session, role_only) == {"staff", "all", "urgent"}


def test_empty_nodes(session):
    assert _sql_titles(session, MATCH_NONE) == set()
    assert _sql_titles(session, MATCH_ALL) == set(ROWS)
