"""Delivery service pushing notifications to connected websocket clients."""

from __future__ import annotations

import logging
from typing import Any

from notification_hub.domain.entities import DeliveryOutcome, NotificationRequest

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)


class WebsocketNotificationService:
    """Push requests to every open websocket of the recipients.

    Recipients without an open connection are skipped; they will find the
    persisted record the next time they list their notifications.
    """

    id = "websocket"
    display_name = "In-app push"

    def __init__(self, manager: NotificationConnectionManager = notification_manager) -> None:
        self._manager = manager

    async def send(self, request: NotificationRequest, *, timeout: float) -> DeliveryOutcome:
        message = {"type": "notification", "data": serialize_request(request)}
        delivered = 0
        for user_id in request.recipient_user_ids:
            delivered += await self._manager.send_to_user(user_id, dict(message))
        logger.debug("Pushed notification %r to %s websocket(s)", request.name, delivered)
        return DeliveryOutcome.success(self.id)


def serialize_request(request: NotificationRequest) -> dict[str, Any]:
    """Return the websocket payload representation for ``request``."""

    return {
        "name": request.name,
        "description": request.description,
        "url": request.url,
        "level": request.level.value,
        "notification_type": request.notification_type,
        "created_at": request.created_at.isoformat() if request.created_at else None,
    }


__all__ = ["WebsocketNotificationService", "serialize_request"]
