from __future__ import annotations

from src.domain.value_objects.predicate import (
    MATCH_ALL,
    MATCH_NONE,
    And,
    Eq,
    IsNull,
    JsonFieldEq,
    Not,
    Or,
    all_of,
    any_of,
)
from src.domain.value_objects.notification_status import NotificationStatus


def test_eq_reads_mappings_and_attributes():
    class Row:
        status = NotificationStatus.UNREAD

    assert Eq("status", "unread").matches({"status": "unread"})
    # Enum values are compared by their value
    assert Eq("status", "unread").matches(Row())
    assert not Eq("status", "read").matches(Row())


def test_eq_never_matches_null():
    assert not Eq("recipient_role", None).matches({"recipient_role": None})
    assert not Not(IsNull("recipient_role")).matches({"recipient_role": None})
    assert IsNull("recipient_role").matches({})


def test_json_field_compares_as_text():
    predicate = JsonFieldEq("data", "user_id", "7")
    assert predicate.matches({"data": {"user_id": 7}})
    assert predicate.matches({"data": {"user_id": "7"}})
    assert not predicate.matches({"data": {"user_id": 8}})
    assert not predicate.matches({"data": None})
    assert not predicate.matches({"data": {}})


def test_empty_disjunction_and_conjunction():
    assert not MATCH_NONE.matches({})
    assert MATCH_ALL.matches({})


def test_combinators_collapse_single_operands():
    eq = Eq("a", 1)
    assert any_of(eq) is eq
    assert all_of(eq) is eq
    assert all_of(MATCH_ALL, eq) is eq
    assert all_of() == MATCH_ALL
    assert isinstance(any_of(eq, Eq("b", 2)), Or)
    assert isinstance(all_of(eq, Eq("b", 2)), And)


def test_nested_tree():
    predicate = all_of(
        Not(Eq("status", "archived")),
        any_of(Eq("recipient_role", "staff"), Eq("recipient_role", "all")),
    )
    assert predicate.matches({"status": "unread", "recipient_role": "all"})
    assert not predicate.matches({"status": "archived", "recipient_role": "all"})
    assert not predicate.matches({"status": "unread", "recipient_role": "admin"})
