from __future__ import annotations

from enum import Enum


class ReservationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    def can_move_to(self, target: ReservationStatus) -> bool:
        # Review happens once; approved and rejected are final
        return self is ReservationStatus.PENDING and target is not ReservationStatus.PENDING
