"""Shared fixtures for the notification engine tests."""

from __future__ import annotations

import pytest

from notification_hub.application.registry import NotificationRegistry
from notification_hub.infrastructure.database import (
    build_engine,
    build_session_factory,
    initialize_database,
)
from notification_hub.infrastructure.repositories import (
    UserNotificationRepository,
    UserRepository,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'notifications.db'}")
    initialize_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def store(session_factory):
    return UserNotificationRepository(session_factory)


@pytest.fixture
def directory(session_factory):
    return UserRepository(session_factory)


@pytest.fixture
def registry():
    return NotificationRegistry()
