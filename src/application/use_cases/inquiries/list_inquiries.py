from __future__ import annotations

from src.application.errors import AuthError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.inquiry import Inquiry
from src.domain.value_objects.role import Role


async def execute(
    uow: UnitOfWork,
    *,
    actor_id: str | None,
    actor_role: Role | None,
    user_id: str | None = None,
    client_email: str | None = None,
) -> list[Inquiry]:
    if actor_id is None or actor_role is None:
        raise AuthError("Authentication required")
    if not actor_role.is_staff():
        # Clients only ever see their own inquiries
        user_id = actor_id
        client_email = None
    email = client_email.strip().lower() if client_email else None
    return await uow.inquiries.list(user_id=user_id or None, client_email=email)
