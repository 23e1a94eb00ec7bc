"""Use cases for dispatching and reading notifications."""

from .broadcast import AdminBroadcaster
from .center import NotificationCenter
from .dispatch import NotificationDispatcher

__all__ = ["AdminBroadcaster", "NotificationCenter", "NotificationDispatcher"]
