from __future__ import annotations

import os
import re
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    inquiry,
    notification,
    otp_challenge,
    property_reservation,
    tour_booking,
)
from src.infrastructure.email.models import EmailMessage, EmailService
from src.interfaces.http.main import create_app


class RecordingEmailService(EmailService):
    """Keeps sent messages in memory; can be told to fail."""

    name = "recording"

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.fail = False

    async def send(self, message: EmailMessage) -> None:
        if self.fail:
            raise RuntimeError("mail server unavailable")
        self.sent.append(message)

    def last_code(self) -> str:
        match = re.search(r"\b(\d{6})\b", self.sent[-1].subject)
        assert match, self.sent[-1].subject
        return match.group(1)


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret",
            "jwt_audience": "authenticated",
            "log_level": "INFO",
            "environment": "test",
            "email_provider": "logging",
            "app_timezone": "Asia/Manila",
        }
    )


@pytest.fixture()
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture()
def app(test_settings: Settings, email_service: RecordingEmailService):
    return create_app(settings=test_settings, email_service=email_service)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await engine.dispose()


@pytest.fixture()
def token_factory(app):
    def _make(user_id: str | int, role: str = "client", email: str | None = None) -> str:
        return app.state.jwt_service.create_access_token(
            subject=str(user_id), role=role, email=email
        )

    return _make


@pytest.fixture()
def auth_headers(token_factory):
    def _make(user_id: str | int, role: str = "client", email: str | None = None) -> dict:
        return {"Authorization": f"Bearer {token_factory(user_id, role, email)}"}

    return _make
