from __future__ import annotations

from enum import Enum
from typing import Any

from sqlalchemy import String, and_, cast, false, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement

from src.domain.value_objects.predicate import And, Eq, IsNull, JsonFieldEq, Not, Or, Predicate


def _column(model: type, field: str):
    try:
        return getattr(model, field)
    except AttributeError as exc:
        raise ValueError(f"{model.__name__} has no column '{field}'") from exc


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def compile_predicate(predicate: Predicate, model: type) -> ColumnElement[bool]:
    """Translate a predicate tree into a WHERE clause over `model`'s columns."""
    if isinstance(predicate, Eq):
        return _column(model, predicate.field) == _plain(predicate.value)
    if isinstance(predicate, IsNull):
        return _column(model, predicate.field).is_(None)
    if isinstance(predicate, JsonFieldEq):
        # Compared as text so {"user_id": 7} and {"user_id": "7"} both match "7"
        element = _column(model, predicate.field)[predicate.key].as_string()
        return cast(element, String) == str(_plain(predicate.value))
    if isinstance(predicate, Not):
        return not_(compile_predicate(predicate.operand, model))
    if isinstance(predicate, Or):
        if not predicate.operands:
            return false()
        return or_(*(compile_predicate(op, model) for op in predicate.operands))
    if isinstance(predicate, And):
        if not predicate.operands:
            return true()
        return and_(*(compile_predicate(op, model) for op in predicate.operands))
    raise TypeError(f"Unsupported predicate node: {type(predicate).__name__}")
