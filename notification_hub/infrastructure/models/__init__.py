"""ORM models used by the application infrastructure."""

from .user import UserModel
from .user_notification import UserNotificationModel
from .user_notification_counter import UserNotificationCounterModel

__all__ = ["UserModel", "UserNotificationModel", "UserNotificationCounterModel"]
