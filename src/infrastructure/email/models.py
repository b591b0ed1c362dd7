from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


@dataclass(slots=True)
class EmailMessage:
    subject: str
    to: Sequence[str] = field(default_factory=list)
    text: str | None = None
    html: str | None = None
    from_email: str | None = None
    from_name: str | None = None
    template_key: str | None = None

    @property
    def sender(self) -> str:
        address = self.from_email or "no-reply@futura.local"
        return f"{self.from_name} <{address}>" if self.from_name else address


class EmailService:
    """Delivery channel for rendered messages. Providers raise on failure."""

    name = "base"

    async def send(self, message: EmailMessage) -> None:  # pragma: no cover - interface
        raise NotImplementedError
