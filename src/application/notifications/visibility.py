"""Which notifications a caller may see.

One feed serves three audiences (client portal, per-user targeting and role
broadcasts). The audience is chosen by the first matching mode:

1. CLIENT_ONLY: clientOnly flag with a user id. Only client notifications
   whose data.user_id is that user; broadcasts are never included.
2. STAFF: user id and role. Personal, role and "all" notifications.
3. ROLE_ONLY: role without user id. Role and "all" notifications, never rows
   with a NULL recipient_role.
4. USER_ONLY: user id without role. Personal notifications only.
5. UNFILTERED: nothing given. Every notification (admin/debug fallback).

Archived rows are hidden unless the caller filters on status=archived.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from src.domain.value_objects.notification_status import NotificationStatus
from src.domain.value_objects.predicate import (
    MATCH_ALL,
    MATCH_NONE,
    Eq,
    IsNull,
    JsonFieldEq,
    Not,
    Predicate,
    all_of,
    any_of,
)
from src.domain.value_objects.recipient import NumericRecipient, parse_recipient_id
from src.domain.value_objects.role import ALL_RECIPIENTS, Role

logger = logging.getLogger(__name__)


class VisibilityMode(str, Enum):
    CLIENT_ONLY = "client_only"
    STAFF = "staff"
    ROLE_ONLY = "role_only"
    USER_ONLY = "user_only"
    UNFILTERED = "unfiltered"


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True, slots=True)
class VisibilityQuery:
    role: str | None = None
    user_id: str | None = None
    client_only: bool = False
    status: str | None = None
    priority: str | None = None
    limit: int = 50

    @classmethod
    def build(
        cls,
        *,
        role: str | None = None,
        user_id: str | None = None,
        client_only: bool = False,
        status: str | None = None,
        priority: str | None = None,
        limit: int = 50,
    ) -> VisibilityQuery:
        return cls(
            role=_blank_to_none(role),
            user_id=_blank_to_none(user_id),
            client_only=client_only,
            status=_blank_to_none(status),
            priority=_blank_to_none(priority),
            limit=limit,
        )

    @property
    def mode(self) -> VisibilityMode:
        if self.client_only and self.user_id:
            return VisibilityMode.CLIENT_ONLY
        if self.user_id and self.role:
            return VisibilityMode.STAFF
        if self.role:
            return VisibilityMode.ROLE_ONLY
        if self.user_id:
            return VisibilityMode.USER_ONLY
        return VisibilityMode.UNFILTERED


def _personal_target(user_id: str) -> Predicate:
    # recipient_id only ever holds internal numeric ids; a UUID user id cannot match it
    parsed = parse_recipient_id(user_id)
    if isinstance(parsed, NumericRecipient):
        return Eq("recipient_id", parsed.value)
    return MATCH_NONE


def audience_predicate(query: VisibilityQuery) -> Predicate:
    mode = query.mode
    if mode is VisibilityMode.CLIENT_ONLY:
        return all_of(
            Eq("recipient_role", Role.CLIENT.value),
            JsonFieldEq("data", "user_id", query.user_id),
        )
    if mode is VisibilityMode.STAFF:
        personal = _personal_target(query.user_id)
        branches = [Eq("recipient_role", query.role), Eq("recipient_role", ALL_RECIPIENTS)]
        if personal != MATCH_NONE:
            branches.insert(0, personal)
        return any_of(*branches)
    if mode is VisibilityMode.ROLE_ONLY:
        return all_of(
            any_of(Eq("recipient_role", query.role), Eq("recipient_role", ALL_RECIPIENTS)),
            Not(IsNull("recipient_role")),
        )
    if mode is VisibilityMode.USER_ONLY:
        return _personal_target(query.user_id)
    return MATCH_ALL


def status_predicate(query: VisibilityQuery) -> Predicate:
    if query.status:
        return Eq("status", query.status)
    return Not(Eq("status", NotificationStatus.ARCHIVED.value))


def build_visibility_predicate(query: VisibilityQuery) -> Predicate:
    logger.debug(
        "Resolved notification visibility: mode=%s role=%s user_id=%s",
        query.mode.value,
        query.role,
        query.user_id,
    )
    parts = [status_predicate(query)]
    if query.priority:
        parts.append(Eq("priority", query.priority))
    parts.append(audience_predicate(query))
    return all_of(*parts)
