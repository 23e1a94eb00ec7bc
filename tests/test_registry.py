"""Tests for the notification type and service registry."""

from __future__ import annotations

import pytest

from notification_hub.application.registry import NotificationRegistry
from notification_hub.domain.entities import DEFAULT_NOTIFICATION_TYPES, NotificationType
from notification_hub.domain.interfaces import NotificationService

from .fakes import RecordingService


def test_default_catalog_is_exposed_in_order() -> None:
    registry = NotificationRegistry()

    assert registry.list_types() == DEFAULT_NOTIFICATION_TYPES
    assert registry.get_type("TaskFailed").category == "Tasks"
    assert registry.get_type("Unknown") is None


def test_custom_catalog_ignores_duplicate_ids() -> None:
    registry = NotificationRegistry(
        [NotificationType("a", "First"), NotificationType("a", "Second"), NotificationType("b", "B")]
    )

    assert [t.display_name for t in registry.list_types()] == ["First", "B"]


def test_services_keep_insertion_order() -> None:
    registry = NotificationRegistry(services=[RecordingService("email"), RecordingService("push")])
    registry.register_service(RecordingService("webhook"))

    assert [service.id for service in registry.list_services()] == ["email", "push", "webhook"]


def test_reregistering_replaces_in_place() -> None:
    registry = NotificationRegistry()
    registry.register_service(RecordingService("email", "Old email"))
    registry.register_service(RecordingService("push"))
    replacement = RecordingService("email", "New email")

    registry.register_service(replacement)

    services = registry.list_services()
    assert [service.id for service in services] == ["email", "push"]
    assert services[0] is replacement


def test_list_services_returns_a_snapshot() -> None:
    registry = NotificationRegistry()
    snapshot = registry.list_services()

    registry.register_service(RecordingService("push"))

    assert snapshot == ()
    assert len(registry.list_services()) == 1


def test_service_without_id_is_rejected() -> None:
    with pytest.raises(ValueError):
        NotificationRegistry().register_service(RecordingService(""))


def test_fake_services_satisfy_the_protocol() -> None:
    assert isinstance(RecordingService("push"), NotificationService)
