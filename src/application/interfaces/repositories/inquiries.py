from __future__ import annotations

from typing import Protocol

from src.domain.models.inquiry import Inquiry


class InquiriesRepository(Protocol):
    async def add(self, inquiry: Inquiry) -> Inquiry: ...

    async def list(
        self,
        *,
        user_id: str | None = None,
        client_email: str | None = None,
    ) -> list[Inquiry]: ...
