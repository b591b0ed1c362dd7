from __future__ import annotations

import logging

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    """Development provider: writes the envelope to the log instead of sending."""

    name = "logging"

    async def send(self, message: EmailMessage) -> None:
        # Subjects and bodies may carry one-time codes, so only sizes are logged
        logger.info(
            "Email (logging provider): template=%s to=%s from=%s text_len=%s html_len=%s",
            message.template_key or "-",
            ",".join(message.to),
            message.sender,
            len(message.text or ""),
            len(message.html or ""),
        )
