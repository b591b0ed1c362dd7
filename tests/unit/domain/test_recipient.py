from __future__ import annotations

from decimal import Decimal

import pytest

from src.domain.value_objects.recipient import (
    ExternalIdentity,
    MalformedRecipient,
    NumericRecipient,
    parse_recipient_id,
)


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_absent_values(raw):
    assert parse_recipient_id(raw) is None


@pytest.mark.parametrize("raw,expected", [(42, 42), ("42", 42), (" 7 ", 7), (3.0, 3), ("12.0", 12)])
def test_numeric_values(raw, expected):
    assert parse_recipient_id(raw) == NumericRecipient(expected)


def test_hyphenated_strings_are_external_identities():
    parsed = parse_recipient_id("3f2a9c1e-1111-4a4a-9b9b-000000000001")
    assert isinstance(parsed, ExternalIdentity)
    # Even negative-looking numbers carry a hyphen and are never numeric ids
    assert isinstance(parse_recipient_id("-5"), ExternalIdentity)


@pytest.mark.parametrize("raw", [0, -3, 2.5, "abc", "1.5", True, Decimal("NaN"), [1]])
def test_malformed_values(raw):
    assert isinstance(parse_recipient_id(raw), MalformedRecipient)
