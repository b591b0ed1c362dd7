"""Small boolean expression tree used to describe record filters.

Predicates are plain data: the SQLAlchemy repositories compile them to SQL,
and `matches` evaluates them in memory (used by the live notification feed).
Fields are read from mappings by key and from other objects by attribute.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


def _read(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        value = record.get(field)
    else:
        value = getattr(record, field, None)
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True, slots=True)
class Eq:
    field: str
    value: Any

    def matches(self, record: Any) -> bool:
        current = _read(record, self.field)
        # SQL semantics: NULL never equals anything
        return current is not None and current == self.value


@dataclass(frozen=True, slots=True)
class IsNull:
    field: str

    def matches(self, record: Any) -> bool:
        return _read(record, self.field) is None


@dataclass(frozen=True, slots=True)
class JsonFieldEq:
    """`field` holds a JSON object whose `key` must equal `value` compared as text."""

    field: str
    key: str
    value: Any

    def matches(self, record: Any) -> bool:
        payload = _read(record, self.field)
        if not isinstance(payload, Mapping):
            return False
        current = payload.get(self.key)
        return current is not None and str(current) == str(self.value)


@dataclass(frozen=True, slots=True)
class Not:
    operand: Predicate

    def matches(self, record: Any) -> bool:
        return not self.operand.matches(record)


@dataclass(frozen=True, slots=True)
class Or:
    operands: tuple[Predicate, ...]

    def matches(self, record: Any) -> bool:
        # An empty disjunction matches nothing
        return any(op.matches(record) for op in self.operands)


@dataclass(frozen=True, slots=True)
class And:
    operands: tuple[Predicate, ...]

    def matches(self, record: Any) -> bool:
        return all(op.matches(record) for op in self.operands)


Predicate = Union[Eq, IsNull, JsonFieldEq, Not, Or, And]

MATCH_ALL: Predicate = And(())
MATCH_NONE: Predicate = Or(())


def any_of(*operands: Predicate) -> Predicate:
    return operands[0] if len(operands) == 1 else Or(tuple(operands))


def all_of(*operands: Predicate) -> Predicate:
    flattened = tuple(op for op in operands if op != MATCH_ALL)
    if not flattened:
        return MATCH_ALL
    return flattened[0] if len(flattened) == 1 else And(flattened)
