"""FastAPI dependency utilities."""

from __future__ import annotations

import logging
from functools import lru_cache

from notification_hub.application.registry import NotificationRegistry
from notification_hub.application.use_cases.notifications import NotificationCenter
from notification_hub.config import get_settings
from notification_hub.infrastructure.database import (
    get_engine,
    get_session_factory,
    initialize_database,
)
from notification_hub.infrastructure.notifications import (
    EmailNotificationService,
    WebsocketNotificationService,
    notification_manager,
)
from notification_hub.infrastructure.repositories import (
    UserNotificationRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_notification_center() -> NotificationCenter:
    """Build the process-wide notification center from the settings."""

    settings = get_settings()
    initialize_database(get_engine())
    session_factory = get_session_factory()
    directory = UserRepository(session_factory)

    registry = NotificationRegistry()
    registry.register_service(WebsocketNotificationService(notification_manager))
    if settings.sendgrid_api_key and settings.sendgrid_sender:
        registry.register_service(EmailNotificationService(directory))
    else:
        logger.info("SendGrid not configured; email notifications disabled")

    return NotificationCenter(
        registry,
        UserNotificationRepository(session_factory),
        directory,
        delivery_timeout=settings.delivery_timeout_seconds,
    )
