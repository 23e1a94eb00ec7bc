"""Send a notification to every administrator account."""

from __future__ import annotations

import logging

from anyio import to_thread

from notification_hub.domain.entities import (
    DispatchResult,
    NotificationLevel,
    NotificationRequest,
)
from notification_hub.domain.errors import NoAdministrators
from notification_hub.domain.interfaces import UserDirectory

from .dispatch import NotificationDispatcher

logger = logging.getLogger(__name__)


class AdminBroadcaster:
    """Resolve the administrators and hand the request to the dispatcher."""

    def __init__(self, directory: UserDirectory, dispatcher: NotificationDispatcher) -> None:
        self._directory = directory
        self._dispatcher = dispatcher

    async def broadcast(
        self,
        name: str,
        description: str | None = None,
        url: str | None = None,
        level: NotificationLevel | str | None = None,
        *,
        notification_type: str | None = None,
    ) -> DispatchResult:
        administrators = await to_thread.run_sync(self._directory.list_administrators)
        if not administrators:
            logger.warning("Admin notification %r dropped: no administrators configured", name)
            raise NoAdministrators()

        request = NotificationRequest(
            name=name,
            description=description,
            url=url,
            level=NotificationLevel.parse(level),
            recipient_user_ids=tuple(administrators),
            notification_type=notification_type,
        )
        return await self._dispatcher.send(request)


__all__ = ["AdminBroadcaster"]
