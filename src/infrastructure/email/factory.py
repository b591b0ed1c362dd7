from __future__ import annotations

import logging

from src.config.settings import Settings
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.providers.smtp_provider import SMTPEmailService
from src.infrastructure.email.providers.unione_provider import UniOneEmailService

logger = logging.getLogger(__name__)


def build_email_service(settings: Settings) -> EmailService:
    provider = (settings.email_provider or "logging").strip().lower()
    if provider == "smtp":
        if not settings.smtp_host:
            raise ValueError("SMTP_HOST is required when EMAIL_PROVIDER=smtp")
        service: EmailService = SMTPEmailService(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=(
                settings.smtp_password.get_secret_value() if settings.smtp_password else None
            ),
            use_tls=settings.smtp_use_tls,
        )
    elif provider == "unione":
        if settings.unione_api_key is None:
            raise ValueError("UNIONE_API_KEY is required when EMAIL_PROVIDER=unione")
        service = UniOneEmailService(
            api_key=settings.unione_api_key.get_secret_value(),
            api_url=settings.unione_api_url,
        )
    elif provider == "logging":
        service = LoggingEmailService()
    else:
        raise ValueError(f"Unknown EMAIL_PROVIDER '{settings.email_provider}'")
    logger.info("Email provider configured: %s", service.name)
    return service
