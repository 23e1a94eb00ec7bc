"""Exceptions raised by the notification engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import UserNotification


class NotificationError(Exception):
    """Base class for notification engine errors."""


class InvalidRequest(NotificationError, ValueError):
    """Raised when a caller submits a malformed request."""


class NoAdministrators(NotificationError):
    """Raised when an admin broadcast resolves to an empty recipient set."""

    def __init__(self, message: str = "No administrator accounts are configured") -> None:
        super().__init__(message)


class StorageError(NotificationError, RuntimeError):
    """Raised when the notification store cannot persist or read records.

    ``failed_user_ids`` lists recipients whose record is known to be missing and
    ``persisted`` holds the records written before the failure.
    """

    def __init__(
        self,
        message: str,
        *,
        failed_user_ids: Iterable[str] = (),
        persisted: Mapping[str, Sequence["UserNotification"]] | None = None,
    ) -> None:
        super().__init__(message)
        self.failed_user_ids = list(failed_user_ids)
        self.persisted = {user_id: list(records) for user_id, records in (persisted or {}).items()}


__all__ = ["NotificationError", "InvalidRequest", "NoAdministrators", "StorageError"]
