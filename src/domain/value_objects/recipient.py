from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class NumericRecipient:
    """Internal staff/user id; the only shape ever persisted as recipient_id."""

    value: int


@dataclass(frozen=True, slots=True)
class ExternalIdentity:
    """Auth-provider identity (UUID-like). Never valid as a recipient_id."""

    value: str


@dataclass(frozen=True, slots=True)
class MalformedRecipient:
    raw: Any


RecipientRef = Union[NumericRecipient, ExternalIdentity, MalformedRecipient, None]


def parse_recipient_id(raw: Any) -> RecipientRef:
    """Classify a caller-supplied recipient id.

    Strings containing a hyphen are treated as external identities before any
    numeric parsing, so "-5" and "3f2a-..." both land there. Numbers (or numeric
    strings) must be integral and positive to count as a NumericRecipient.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return MalformedRecipient(raw)
    if isinstance(raw, int):
        return NumericRecipient(raw) if raw > 0 else MalformedRecipient(raw)
    if isinstance(raw, float):
        if raw.is_integer() and raw > 0:
            return NumericRecipient(int(raw))
        return MalformedRecipient(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if "-" in text:
            return ExternalIdentity(text)
        try:
            number = Decimal(text)
        except InvalidOperation:
            return MalformedRecipient(raw)
        if number.is_finite() and number == number.to_integral_value() and number > 0:
            return NumericRecipient(int(number))
        return MalformedRecipient(raw)
    return MalformedRecipient(raw)
