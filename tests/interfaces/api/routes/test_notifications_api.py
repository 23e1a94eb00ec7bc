"""Integration tests for the notification HTTP endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from notification_hub.application.registry import NotificationRegistry
from notification_hub.application.use_cases.notifications import NotificationCenter
from notification_hub.domain.entities import User
from notification_hub.interfaces.api.dependencies import get_notification_center

from tests.fakes import FailingService, RecordingService


@pytest.fixture
def center(store, directory):
    registry = NotificationRegistry(
        services=[RecordingService("push", "In-app push"), FailingService("email", "Email")]
    )
    return NotificationCenter(registry, store, directory, delivery_timeout=2)


@pytest.fixture
def client(center):
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_notification_center] = lambda: center
    with TestClient(app) as test_client:
        yield test_client


def _send(client: TestClient, *user_ids: str, name: str = "Disk full", level: str = "Warning"):
    return client.post(
        "/notifications/",
        json={"name": name, "level": level, "user_ids": list(user_ids)},
    )


def test_types_and_services(client: TestClient) -> None:
    types_response = client.get("/notifications/types")
    services_response = client.get("/notifications/services")

    assert types_response.status_code == 200
    assert {"id": "TaskFailed", "name": "Scheduled task failed", "category": "Tasks", "enabled": True} in types_response.json()
    assert services_response.json() == [
        {"id": "push", "name": "In-app push"},
        {"id": "email", "name": "Email"},
    ]


def test_send_returns_per_recipient_and_per_service(client: TestClient) -> None:
    response = _send(client, "u1", "u2")

    assert response.status_code == 200
    body = response.json()
    assert sorted(body["per_recipient"]) == ["u1", "u2"]
    assert body["per_recipient"]["u1"][0]["level"] == "Warning"
    assert [o["succeeded"] for o in body["per_service"]] == [True, False]


def test_send_without_recipients_is_a_bad_request(client: TestClient) -> None:
    response = _send(client)

    assert response.status_code == 400


def test_list_filter_and_paginate(client: TestClient) -> None:
    for index in range(3):
        _send(client, "u1", name=f"n{index}")

    all_response = client.get("/notifications/u1", params={"startIndex": 0, "limit": 10})
    assert [n["name"] for n in all_response.json()] == ["n0", "n1", "n2"]

    client.post("/notifications/u1/read", params={"ids": "1,3"})
    unread = client.get("/notifications/u1", params={"isRead": "false"}).json()
    assert [n["id"] for n in unread] == [2]

    paged = client.get("/notifications/u1", params={"startIndex": 1, "limit": 1}).json()
    assert [n["name"] for n in paged] == ["n1"]


def test_read_unread_and_summary(client: TestClient) -> None:
    _send(client, "u1", level="Error")
    _send(client, "u1", level="Low")

    summary = client.get("/notifications/u1/summary").json()
    assert summary == {"unread_count": 2, "max_unread_level": "Error"}

    read_response = client.post("/notifications/u1/read", params={"ids": "1, 7"})
    assert read_response.json() == {"updated_count": 1}
    assert client.get("/notifications/u1/summary").json() == {
        "unread_count": 1,
        "max_unread_level": "Low",
    }

    unread_response = client.post("/notifications/u1/unread", params={"ids": "1"})
    assert unread_response.json() == {"updated_count": 1}
    assert client.get("/notifications/u1/summary").json()["unread_count"] == 2


def test_invalid_ids_are_rejected(client: TestClient) -> None:
    response = client.post("/notifications/u1/read", params={"ids": "1,abc"})

    assert response.status_code == 400


def test_unknown_user_has_empty_list_and_summary(client: TestClient) -> None:
    assert client.get("/notifications/ghost").json() == []
    assert client.get("/notifications/ghost/summary").json() == {
        "unread_count": 0,
        "max_unread_level": None,
    }


def test_admin_notification(client: TestClient, directory) -> None:
    empty = client.post("/notifications/admin", params={"name": "Restart"})
    assert empty.status_code == 409

    directory.save(User(id="admin-1", name="Ada", email=None, is_admin=True))
    response = client.post("/notifications/admin", params={"name": "Restart"})

    assert response.status_code == 200
    record = response.json()["per_recipient"]["admin-1"][0]
    assert record["level"] == "Normal"
    assert record["name"] == "Restart"


def test_websocket_receives_pushed_notifications(client: TestClient, center) -> None:
    from notification_hub.infrastructure.notifications import WebsocketNotificationService

    center.registry.register_service(WebsocketNotificationService())

    with client.websocket_connect("/notifications/ws/u1") as websocket:
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

        _send(client, "u1", name="Backup finished")
        message = websocket.receive_json()

    assert message["type"] == "notification"
    assert message["data"]["name"] == "Backup finished"
