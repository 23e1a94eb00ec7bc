from .notification import (
    DeliveryOutcomeRead,
    DispatchResultRead,
    NameIdPair,
    NotificationRead,
    NotificationSendRequest,
    NotificationsSummaryRead,
    NotificationTypeRead,
    SetReadResponse,
)

__all__ = [
    "DeliveryOutcomeRead",
    "DispatchResultRead",
    "NameIdPair",
    "NotificationRead",
    "NotificationSendRequest",
    "NotificationsSummaryRead",
    "NotificationTypeRead",
    "SetReadResponse",
]
