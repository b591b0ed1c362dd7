from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.application.errors import AuthError
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class AuthContext:
    user_id: str
    role: Role
    email: str | None
    claims: dict[str, Any]


def role_from_claims(claims: dict[str, Any]) -> Role:
    app_metadata = claims.get("app_metadata")
    if isinstance(app_metadata, dict) and app_metadata.get("role"):
        return Role.parse(app_metadata["role"])
    return Role.parse(claims.get("user_role"))


def context_from_claims(claims: dict[str, Any]) -> AuthContext:
    subject = claims.get("sub")
    if not subject:
        raise AuthError("Token missing subject")
    return AuthContext(
        user_id=str(subject),
        role=role_from_claims(claims),
        email=claims.get("email"),
        claims=claims,
    )
