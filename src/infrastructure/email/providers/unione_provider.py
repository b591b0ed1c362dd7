from __future__ import annotations

import logging
from typing import Any

import httpx

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://us1.unione.io/en/transactional/api/v1/email/send.json"


class EmailDeliveryError(RuntimeError):
    pass


class UniOneEmailService(EmailService):
    """Transactional e-mail over the UniOne JSON API."""

    name = "unione"

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    def build_payload(self, message: EmailMessage) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if message.html:
            body["html"] = message.html
        if message.text:
            body["plaintext"] = message.text
        return {
            "message": {
                "recipients": [{"email": email} for email in message.to],
                "from_email": message.from_email or "no-reply@futura.local",
                "from_name": message.from_name or "Futura Homes",
                "subject": message.subject,
                "body": body,
                "track_links": 0,
                "track_read": 0,
            }
        }

    async def send(self, message: EmailMessage) -> None:
        headers = {"Content-Type": "application/json", "X-API-KEY": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    self.api_url, json=self.build_payload(message), headers=headers
                )
        except httpx.HTTPError as exc:
            logger.error("UniOne HTTP error: %s", exc)
            raise EmailDeliveryError(f"Failed to send email via UniOne: {exc}") from exc

        if response.status_code != 200:
            raise EmailDeliveryError(
                f"UniOne API error: {response.status_code} - {response.text}"
            )
        result = response.json()
        if result.get("status") != "success":
            raise EmailDeliveryError(f"UniOne send failed: {result}")
        logger.info(
            "Email sent via UniOne: template=%s to=%s job_id=%s",
            message.template_key or "-",
            ",".join(message.to),
            result.get("job_id", "unknown"),
        )
