"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from notification_hub.domain.entities import NotificationLevel


class NameIdPair(BaseModel):
    """Identifier and display name of a type or service."""

    id: str
    name: str


class NotificationTypeRead(NameIdPair):
    category: str | None = None
    enabled: bool = True


class NotificationSendRequest(BaseModel):
    """Payload used to send a notification to explicit recipients."""

    name: str = Field(..., description="Short title of the notification")
    description: str | None = None
    url: str | None = None
    level: NotificationLevel = NotificationLevel.NORMAL
    user_ids: list[str] = Field(..., description="Recipients of the notification")
    notification_type: str | None = None


class NotificationRead(BaseModel):
    """Representation of a notification record delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    name: str
    description: str | None = None
    url: str | None = None
    level: NotificationLevel
    notification_type: str | None = None
    created_at: datetime
    is_read: bool


class NotificationsSummaryRead(BaseModel):
    unread_count: int
    max_unread_level: NotificationLevel | None = None


class DeliveryOutcomeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    service_id: str
    succeeded: bool
    error_message: str | None = None


class DispatchResultRead(BaseModel):
    """Outcome of a dispatched notification."""

    per_recipient: dict[str, list[NotificationRead]] = Field(default_factory=dict)
    per_service: list[DeliveryOutcomeRead] = Field(default_factory=list)


class SetReadResponse(BaseModel):
    updated_count: int


__all__ = [
    "NameIdPair",
    "NotificationTypeRead",
    "NotificationSendRequest",
    "NotificationRead",
    "NotificationsSummaryRead",
    "DeliveryOutcomeRead",
    "DispatchResultRead",
    "SetReadResponse",
]
