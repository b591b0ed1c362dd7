from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from src.application.errors import AuthError
from src.config.settings import Settings, get_settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.email.mailer import Mailer
from src.infrastructure.websocket.connection_manager import ConnectionManager


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_optional_auth_context(request: Request) -> AuthContext | None:
    return getattr(request.state, "auth_context", None)


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_jwt_service(request: Request) -> JWTService:
    service = getattr(request.app.state, "jwt_service", None)
    if service is None:
        raise RuntimeError("JWT service not configured")
    return service


def get_mailer(request: Request) -> Mailer:
    mailer = getattr(request.app.state, "mailer", None)
    if mailer is None:
        raise RuntimeError("Mailer not configured")
    return mailer


def get_connection_manager(request: Request) -> ConnectionManager:
    """Live notification feed shared by the whole app."""
    manager = getattr(request.app.state, "connection_manager", None)
    if manager is None:
        raise RuntimeError("Connection manager not configured")
    return manager
