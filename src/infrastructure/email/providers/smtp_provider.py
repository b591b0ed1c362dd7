from __future__ import annotations

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage as MimeMessage

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


def to_mime(message: EmailMessage) -> MimeMessage:
    """Plain text first, HTML as the preferred alternative."""
    mime = MimeMessage()
    mime["Subject"] = message.subject
    mime["From"] = message.sender
    mime["To"] = ", ".join(message.to)
    mime.set_content(message.text or "")
    if message.html:
        mime.add_alternative(message.html, subtype="html")
    return mime


class SMTPEmailService(EmailService):
    name = "smtp"

    def __init__(
        self,
        *,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _deliver(self, mime: MimeMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls(context=ssl.create_default_context())
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(mime)

    async def send(self, message: EmailMessage) -> None:
        # smtplib blocks; keep it off the event loop
        await asyncio.to_thread(self._deliver, to_mime(message))
        logger.info(
            "Email sent via SMTP: template=%s to=%s",
            message.template_key or "-",
            ",".join(message.to),
        )
