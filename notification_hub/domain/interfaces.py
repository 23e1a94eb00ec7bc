"""Capabilities the engine expects from its collaborators."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from .entities import (
    DeliveryOutcome,
    NotificationLevel,
    NotificationRequest,
    NotificationSummary,
    UserNotification,
)


@runtime_checkable
class NotificationService(Protocol):
    """A delivery backend such as email, push or webhook.

    ``send`` may be a plain or a coroutine function. Raising is reported as a
    failed delivery; returning ``None`` counts as success.
    """

    id: str
    display_name: str

    def send(
        self, request: NotificationRequest, *, timeout: float
    ) -> DeliveryOutcome | None: ...


class UserDirectory(Protocol):
    """Source of user accounts."""

    def list_administrators(self) -> Sequence[str]: ...

    def get_emails(self, user_ids: Sequence[str]) -> dict[str, str]: ...


class NotificationStore(Protocol):
    """Per-user notification persistence."""

    def append(
        self,
        user_id: str,
        *,
        name: str,
        description: str | None,
        url: str | None,
        level: NotificationLevel,
        created_at: datetime,
        notification_type: str | None = None,
    ) -> UserNotification: ...

    def list(
        self,
        user_id: str,
        *,
        is_read: bool | None = None,
        start_index: int = 0,
        limit: int | None = None,
    ) -> Sequence[UserNotification]: ...

    def set_read(self, user_id: str, ids: Iterable[int], *, read: bool = True) -> int: ...

    def summary(self, user_id: str) -> NotificationSummary: ...


__all__ = ["NotificationService", "NotificationStore", "UserDirectory"]
