"""Concrete delivery services for the notification engine."""

from .email import EmailNotificationService
from .manager import NotificationConnectionManager, notification_manager
from .websocket import WebsocketNotificationService, serialize_request

__all__ = [
    "EmailNotificationService",
    "NotificationConnectionManager",
    "notification_manager",
    "WebsocketNotificationService",
    "serialize_request",
]
