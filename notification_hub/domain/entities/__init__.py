"""Domain entities exposed by the application."""

from .notification import (
    DeliveryOutcome,
    DispatchResult,
    NotificationLevel,
    NotificationRequest,
    NotificationSummary,
    UserNotification,
)
from .notification_type import DEFAULT_NOTIFICATION_TYPES, NotificationType
from .user import User

__all__ = [
    "DeliveryOutcome",
    "DispatchResult",
    "NotificationLevel",
    "NotificationRequest",
    "NotificationSummary",
    "UserNotification",
    "NotificationType",
    "DEFAULT_NOTIFICATION_TYPES",
    "User",
]
