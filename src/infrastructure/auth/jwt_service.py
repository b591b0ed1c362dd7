from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError

from src.application.errors import AuthError

# Provider tokens carry this in `role`; the application role lives in app_metadata
PROVIDER_ROLE = "authenticated"


class JWTService:
    """Verifies bearer tokens minted by the hosted auth provider.

    The provider signs with a shared HS256 secret. Tests and the dev script
    mint tokens of the same shape with `create_access_token`.
    """

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str,
        access_token_expires_minutes: int,
        issuer: str | None = None,
        audience: str | None = None,
        leeway_seconds: int = 30,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expires_minutes = access_token_expires_minutes
        self.issuer = issuer
        self.audience = audience
        self.leeway_seconds = leeway_seconds

    def create_access_token(
        self,
        *,
        subject: str,
        role: str | None = None,
        email: str | None = None,
        extra_claims: Mapping[str, Any] | None = None,
    ) -> str:
        issued = datetime.now(timezone.utc)
        expires = issued + timedelta(minutes=self.access_token_expires_minutes)
        claims: dict[str, Any] = {
            "sub": str(subject),
            "role": PROVIDER_ROLE,
            "iat": int(issued.timestamp()),
            "exp": int(expires.timestamp()),
        }
        if role:
            claims["app_metadata"] = {"role": role}
        if email:
            claims["email"] = email
        for claim, value in (("iss", self.issuer), ("aud", self.audience)):
            if value:
                claims[claim] = value
        claims.update(extra_claims or {})
        return jwt.encode(claims, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        options = {"leeway": self.leeway_seconds, "verify_aud": self.audience is not None}
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )
        except ExpiredSignatureError as exc:
            raise AuthError("Token has expired") from exc
        except JWTError as exc:
            raise AuthError("Token validation failed") from exc
