from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import WebSocket

from src.application.notifications.visibility import VisibilityQuery, build_visibility_predicate
from src.domain.models.notification import Notification
from src.domain.value_objects.predicate import Predicate

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Subscription:
    websocket: WebSocket
    query: VisibilityQuery
    predicate: Predicate


class ConnectionManager:
    """Live notification feed: every socket only receives what its query could list."""

    def __init__(self) -> None:
        self.subscriptions: dict[int, Subscription] = {}

    async def connect(self, websocket: WebSocket, query: VisibilityQuery) -> Subscription:
        await websocket.accept()
        subscription = Subscription(
            websocket=websocket,
            query=query,
            predicate=build_visibility_predicate(query),
        )
        self.subscriptions[id(websocket)] = subscription
        logger.info(
            "WebSocket connected: mode=%s role=%s user=%s total=%d",
            query.mode.value,
            query.role,
            query.user_id,
            len(self.subscriptions),
        )
        return subscription

    def disconnect(self, websocket: WebSocket) -> None:
        if self.subscriptions.pop(id(websocket), None) is not None:
            logger.info("WebSocket disconnected: remaining=%d", len(self.subscriptions))

    async def publish(self, notification: Notification, payload: dict[str, Any]) -> int:
        """Push `payload` to every subscriber allowed to see `notification`.

        Returns the number of sockets it was delivered to; broken sockets are dropped.
        """
        message = {"type": "notification", "notification": payload}
        delivered = 0
        for key, subscription in list(self.subscriptions.items()):
            if not subscription.predicate.matches(notification):
                continue
            try:
                await subscription.websocket.send_json(message)
                delivered += 1
            except Exception as exc:
                logger.warning("Dropping broken WebSocket subscriber: %s", exc)
                self.subscriptions.pop(key, None)
        logger.debug("Notification %s pushed to %d subscriber(s)", notification.id, delivered)
        return delivered

    def get_connection_count(self) -> int:
        return len(self.subscriptions)
