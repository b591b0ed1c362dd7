from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.config.settings import Settings, get_settings
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.db.session import create_engine, create_session_factory
from src.infrastructure.email.factory import build_email_service
from src.infrastructure.email.mailer import Mailer
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.infrastructure.websocket.connection_manager import ConnectionManager
from src.interfaces.http.deps import get_app_settings
from src.interfaces.http.routers import bookings, inquiries, notifications, otp, reservations
from src.interfaces.middleware.auth_middleware import AuthMiddleware
from src.interfaces.middleware.error_handler import register_error_handlers

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
NOISY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx")

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Futura Homes API starting (environment=%s)", app.state.settings.environment)
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO
    root = logging.getLogger()
    # uvicorn --reload re-imports this module; keep a single console handler
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
        root.addHandler(console)
    root.setLevel(level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(level)


def _attach_services(
    app: FastAPI,
    settings: Settings,
    *,
    email_service: EmailService | None,
    jwt_service: JWTService | None,
) -> None:
    """Shared process-wide handles, reached by routes through `deps`."""
    state = app.state
    state.settings = settings
    state.engine = create_engine(settings.database_url)
    state.session_factory = create_session_factory(state.engine)
    state.jwt_service = jwt_service or JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    state.email_service = email_service or build_email_service(settings)
    state.email_renderer = EmailTemplateRenderer.create_default()
    state.mailer = Mailer(
        service=state.email_service, renderer=state.email_renderer, settings=settings
    )
    state.connection_manager = ConnectionManager()


def _api_router() -> APIRouter:
    api = APIRouter(prefix="/api/v1")
    for module in (notifications, otp, inquiries, bookings, reservations):
        api.include_router(module.router)

    @api.get("/health", tags=["health"])
    async def health(
        request: Request, settings: Settings = Depends(get_app_settings)
    ) -> dict[str, object]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "live_subscribers": request.app.state.connection_manager.get_connection_count(),
        }

    return api


def create_app(
    *,
    settings: Settings | None = None,
    email_service: EmailService | None = None,
    jwt_service: JWTService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Futura Homes Backend",
        version="0.1.0",
        description="Notifications, inquiries and tour bookings for the Futura Homes portal",
        lifespan=lifespan,
    )
    _attach_services(app, settings, email_service=email_service, jwt_service=jwt_service)
    register_error_handlers(app)
    app.include_router(_api_router())

    # Middleware added last runs first: CORS must wrap auth so preflights never need a token
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
