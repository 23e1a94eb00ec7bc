"""Tests for broadcasting notifications to administrators."""

from __future__ import annotations

import pytest

from notification_hub.application.registry import NotificationRegistry
from notification_hub.application.use_cases.notifications import NotificationCenter
from notification_hub.domain.entities import NotificationLevel, NotificationRequest, User
from notification_hub.domain.errors import NoAdministrators

from .fakes import RecordingService


@pytest.fixture
def center(store, directory):
    return NotificationCenter(
        NotificationRegistry(services=[RecordingService("push")]),
        store,
        directory,
        delivery_timeout=2,
    )


def test_directory_lists_only_active_administrators(directory) -> None:
    directory.save(User(id="admin-1", name="Ada", email="ada@example.com", is_admin=True))
    directory.save(User(id="admin-2", name="Off", email=None, is_admin=True, is_active=False))
    directory.save(User(id="user-1", name="Bob", email="bob@example.com"))

    assert directory.list_administrators() == ["admin-1"]
    assert directory.get_emails(["admin-1", "admin-2", "user-1", "ghost"]) == {
        "admin-1": "ada@example.com",
        "user-1": "bob@example.com",
    }


@pytest.mark.anyio
async def test_broadcast_reaches_every_administrator(center, directory, store) -> None:
    directory.save(User(id="admin-1", name="Ada", email=None, is_admin=True))
    directory.save(User(id="admin-2", name="Grace", email=None, is_admin=True))
    directory.save(User(id="user-1", name="Bob", email=None))

    result = await center.broadcast_to_admins(
        "Server restart required", "Apply the pending update", None, "warning"
    )

    assert sorted(result.per_recipient) == ["admin-1", "admin-2"]
    assert result.per_recipient["admin-1"][0].level is NotificationLevel.WARNING
    assert list(store.list("user-1")) == []
    assert result.per_service[0].succeeded is True


@pytest.mark.anyio
async def test_broadcast_defaults_to_normal_level(center, directory) -> None:
    directory.save(User(id="admin-1", name="Ada", email=None, is_admin=True))

    result = await center.broadcast_to_admins("Plugin installed")

    assert result.per_recipient["admin-1"][0].level is NotificationLevel.NORMAL


@pytest.mark.anyio
async def test_broadcast_without_administrators_writes_nothing(center, directory, store) -> None:
    directory.save(User(id="user-1", name="Bob", email=None))
    push = center.registry.list_services()[0]

    with pytest.raises(NoAdministrators):
        await center.broadcast_to_admins("Disk full")

    assert list(store.list("user-1")) == []
    assert push.requests == []


def test_center_read_side_delegates_to_the_store(center, store) -> None:
    center.dispatcher.send_sync(NotificationRequest(name="Disk full", recipient_user_ids=("u1",)))

    assert [n.name for n in center.list_user_notifications("u1")] == ["Disk full"]
    assert center.set_read("u1", [1]) == 1
    assert center.get_summary("u1").unread_count == 0
    assert [s.id for s in center.list_notification_services()] == ["push"]
    assert len(center.list_notification_types()) > 0
