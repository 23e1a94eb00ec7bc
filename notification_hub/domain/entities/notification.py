"""Domain entities describing notification requests and per-user records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class NotificationLevel(str, Enum):
    """Severity attached to a notification."""

    LOW = "Low"
    NORMAL = "Normal"
    WARNING = "Warning"
    ERROR = "Error"

    @property
    def rank(self) -> int:
        """Return the ordering position of the level, lowest first."""

        return _LEVEL_RANKS[self]

    @classmethod
    def parse(cls, value: "NotificationLevel | str | None") -> "NotificationLevel":
        """Return the level matching ``value`` case-insensitively.

        ``None`` resolves to :attr:`NORMAL`.
        """

        if value is None:
            return cls.NORMAL
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        for level in cls:
            if level.value.lower() == normalized:
                return level
        raise ValueError(f"Unknown notification level: {value!r}")


_LEVEL_RANKS = {
    NotificationLevel.LOW: 0,
    NotificationLevel.NORMAL: 1,
    NotificationLevel.WARNING: 2,
    NotificationLevel.ERROR: 3,
}


@dataclass(frozen=True)
class NotificationRequest:
    """A logical notification addressed to one or more users.

    ``created_at`` is stamped by the dispatcher when the request is submitted;
    any value supplied by the caller is overwritten.
    """

    name: str
    recipient_user_ids: tuple[str, ...]
    description: str | None = None
    url: str | None = None
    level: NotificationLevel = NotificationLevel.NORMAL
    notification_type: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        # Deduplicate while keeping the caller's order.
        unique: list[str] = []
        seen: set[str] = set()
        for user_id in self.recipient_user_ids or ():
            if user_id in seen:
                continue
            seen.add(user_id)
            unique.append(user_id)
        object.__setattr__(self, "recipient_user_ids", tuple(unique))
        object.__setattr__(self, "level", NotificationLevel.parse(self.level))


@dataclass
class UserNotification:
    """Notification record persisted for a single recipient.

    ``id`` is unique within the owning user's collection and grows with every
    append. Only ``is_read`` changes after creation.
    """

    id: int
    user_id: str
    name: str
    description: str | None
    url: str | None
    level: NotificationLevel
    created_at: datetime
    is_read: bool = False
    notification_type: str | None = None


@dataclass(frozen=True)
class NotificationSummary:
    """Unread aggregate for a user, computed on demand."""

    unread_count: int = 0
    max_unread_level: NotificationLevel | None = None


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of handing a request to one delivery service."""

    service_id: str
    succeeded: bool
    error_message: str | None = None

    @classmethod
    def success(cls, service_id: str) -> "DeliveryOutcome":
        return cls(service_id=service_id, succeeded=True)

    @classmethod
    def failure(cls, service_id: str, error_message: str) -> "DeliveryOutcome":
        return cls(
            service_id=service_id,
            succeeded=False,
            error_message=error_message or "Delivery failed",
        )


@dataclass
class DispatchResult:
    """Aggregated outcome of a dispatched notification."""

    per_recipient: dict[str, list[UserNotification]] = field(default_factory=dict)
    per_service: list[DeliveryOutcome] = field(default_factory=list)

    @property
    def delivered_everywhere(self) -> bool:
        return all(outcome.succeeded for outcome in self.per_service)


__all__ = [
    "NotificationLevel",
    "NotificationRequest",
    "UserNotification",
    "NotificationSummary",
    "DeliveryOutcome",
    "DispatchResult",
]
