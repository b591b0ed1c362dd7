from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from src.config.settings import Settings
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Mailer:
    """Renders a template and hands it to the configured provider."""

    service: EmailService
    renderer: EmailTemplateRenderer
    settings: Settings

    async def send_template(
        self,
        template_key: str,
        *,
        to: Sequence[str],
        context: dict[str, Any],
        locale: str | None = None,
    ) -> None:
        message = self.renderer.render(
            template_key=template_key,
            settings=self.settings,
            context=context,
            locale=locale,
        )
        message.to = list(to)
        await self.service.send(message)
        logger.info("Email dispatched: template=%s to=%s", template_key, ",".join(message.to))
