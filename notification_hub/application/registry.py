"""Catalog of notification types and delivery services."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from threading import Lock

from notification_hub.domain.entities import DEFAULT_NOTIFICATION_TYPES, NotificationType
from notification_hub.domain.interfaces import NotificationService

logger = logging.getLogger(__name__)


class NotificationRegistry:
    """Hold the notification type catalog and the registered services.

    Both sequences keep insertion order. ``register_service`` replaces an entry
    with the same ``id`` in place, so iteration order stays deterministic.
    """

    def __init__(
        self,
        types: Iterable[NotificationType] = DEFAULT_NOTIFICATION_TYPES,
        services: Iterable[NotificationService] = (),
    ) -> None:
        self._types: dict[str, NotificationType] = {}
        for notification_type in types:
            self._types.setdefault(notification_type.id, notification_type)
        self._services: dict[str, NotificationService] = {}
        self._lock = Lock()
        for service in services:
            self.register_service(service)

    def list_types(self) -> tuple[NotificationType, ...]:
        return tuple(self._types.values())

    def get_type(self, type_id: str) -> NotificationType | None:
        return self._types.get(type_id)

    def list_services(self) -> tuple[NotificationService, ...]:
        """Return a snapshot of the registered services."""

        with self._lock:
            return tuple(self._services.values())

    def register_service(self, service: NotificationService) -> None:
        """Add ``service`` or replace the service registered under its ``id``."""

        service_id = getattr(service, "id", None)
        if not service_id:
            raise ValueError("Notification services must expose a non-empty id")
        with self._lock:
            replaced = service_id in self._services
            self._services[service_id] = service
        if replaced:
            logger.info("Replaced notification service %s", service_id)
        else:
            logger.info("Registered notification service %s", service_id)


__all__ = ["NotificationRegistry"]
