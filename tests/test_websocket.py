"""Tests for the websocket connection manager and push service."""

from __future__ import annotations

import pytest

from notification_hub.domain.entities import NotificationRequest
from notification_hub.infrastructure.notifications import (
    NotificationConnectionManager,
    WebsocketNotificationService,
)

pytestmark = pytest.mark.anyio


class FakeWebSocket:
    def __init__(self, broken: bool = False) -> None:
        self.accepted = False
        self.broken = broken
        self.messages: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.broken:
            raise RuntimeError("connection closed")
        self.messages.append(message)


async def test_push_reaches_every_connection_of_each_recipient() -> None:
    manager = NotificationConnectionManager()
    first, second, other = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()
    await manager.connect("u1", first)
    await manager.connect("u1", second)
    await manager.connect("u9", other)
    service = WebsocketNotificationService(manager)

    outcome = await service.send(
        NotificationRequest(name="Disk full", recipient_user_ids=("u1", "u2")), timeout=1
    )

    assert outcome.succeeded is True
    assert first.accepted and second.accepted
    assert first.messages[0]["type"] == "notification"
    assert first.messages[0]["data"]["name"] == "Disk full"
    assert first.messages[0]["data"]["level"] == "Normal"
    assert len(second.messages) == 1
    assert other.messages == []


async def test_broken_connections_are_dropped() -> None:
    manager = NotificationConnectionManager()
    await manager.connect("u1", FakeWebSocket(broken=True))

    delivered = await manager.send_to_user("u1", {"type": "ping"})

    assert delivered == 0
    assert manager.connected_users() == set()
