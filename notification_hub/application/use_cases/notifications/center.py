"""Entry points of the notification engine, independent of any transport."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from notification_hub.application.registry import NotificationRegistry
from notification_hub.domain.entities import (
    DispatchResult,
    NotificationLevel,
    NotificationRequest,
    NotificationSummary,
    NotificationType,
    UserNotification,
)
from notification_hub.domain.interfaces import (
    NotificationService,
    NotificationStore,
    UserDirectory,
)

from .broadcast import AdminBroadcaster
from .dispatch import NotificationDispatcher


class NotificationCenter:
    """Bundle the registry, store, dispatcher and admin broadcaster.

    Read-side methods are synchronous; the ``send`` family is async because it
    fans out to delivery services.
    """

    def __init__(
        self,
        registry: NotificationRegistry,
        store: NotificationStore,
        directory: UserDirectory,
        *,
        delivery_timeout: float | None = None,
    ) -> None:
        self.registry = registry
        self.store = store
        self.directory = directory
        self.dispatcher = NotificationDispatcher(
            registry, store, delivery_timeout=delivery_timeout
        )
        self.broadcaster = AdminBroadcaster(directory, self.dispatcher)

    def list_notification_types(self) -> Sequence[NotificationType]:
        return self.registry.list_types()

    def list_notification_services(self) -> Sequence[NotificationService]:
        return self.registry.list_services()

    async def send(self, request: NotificationRequest) -> DispatchResult:
        return await self.dispatcher.send(request)

    async def broadcast_to_admins(
        self,
        name: str,
        description: str | None = None,
        url: str | None = None,
        level: NotificationLevel | str | None = None,
        *,
        notification_type: str | None = None,
    ) -> DispatchResult:
        return await self.broadcaster.broadcast(
            name, description, url, level, notification_type=notification_type
        )

    def list_user_notifications(
        self,
        user_id: str,
        is_read: bool | None = None,
        start_index: int | None = None,
        limit: int | None = None,
    ) -> Sequence[UserNotification]:
        return self.store.list(
            user_id, is_read=is_read, start_index=start_index or 0, limit=limit
        )

    def get_summary(self, user_id: str) -> NotificationSummary:
        return self.store.summary(user_id)

    def set_read(self, user_id: str, ids: Iterable[int], read: bool = True) -> int:
        return self.store.set_read(user_id, ids, read=read)


__all__ = ["NotificationCenter"]
