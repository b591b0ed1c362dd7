from __future__ import annotations

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.application.errors import AuthError
from src.config.settings import Settings
from src.infrastructure.auth.context import context_from_claims

logger = logging.getLogger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """Resolves the caller from an optional bearer token.

    Requests without an Authorization header continue anonymously (public
    portal, notification feed, OTP). A header that is present but invalid is
    rejected here. Routes that need an identity depend on `get_auth_context`.
    """

    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        request.state.auth_context = None
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS":
            return await call_next(request)
        authorization = request.headers.get("Authorization")
        if not authorization:
            return await call_next(request)

        try:
            scheme, _, token = authorization.partition(" ")
            if scheme.lower() != "bearer" or not token.strip():
                raise AuthError("Invalid Authorization header")
            jwt_service = getattr(request.app.state, "jwt_service", None)
            if jwt_service is None:
                raise RuntimeError("JWT service not configured")
            claims = jwt_service.decode(token.strip())
            request.state.auth_context = context_from_claims(claims)
        except AuthError as exc:
            logger.info("Rejected bearer token on %s %s: %s", request.method, request.url.path, exc)
            payload = {
                "success": False,
                "error": exc.message,
                "message": exc.message,
                "code": exc.code,
            }
            return JSONResponse(status_code=exc.status_code, content=payload)
        return await call_next(request)
