"""Repository implementations for infrastructure layer."""

from .user_notification_repository import UserNotificationRepository
from .user_repository import UserRepository

__all__ = ["UserNotificationRepository", "UserRepository"]
