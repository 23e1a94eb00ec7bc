"""Test doubles for delivery services and clocks."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import anyio

from notification_hub.domain.entities import DeliveryOutcome, NotificationRequest

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class RecordingService:
    """Delivery service that records every request it receives."""

    def __init__(self, service_id: str, display_name: str | None = None) -> None:
        self.id = service_id
        self.display_name = display_name or service_id.title()
        self.requests: list[NotificationRequest] = []

    def send(self, request: NotificationRequest, *, timeout: float) -> DeliveryOutcome:
        self.requests.append(request)
        return DeliveryOutcome.success(self.id)


class FailingService(RecordingService):
    def send(self, request: NotificationRequest, *, timeout: float) -> DeliveryOutcome:
        self.requests.append(request)
        raise ConnectionError(f"{self.id} is unreachable")


class RejectingService(RecordingService):
    def send(self, request: NotificationRequest, *, timeout: float) -> DeliveryOutcome:
        self.requests.append(request)
        return DeliveryOutcome.failure(self.id, "mailbox full")


class BlockingService(RecordingService):
    """Blocks in a worker thread until ``release`` is set."""

    def __init__(self, service_id: str) -> None:
        super().__init__(service_id)
        self.release = threading.Event()

    def send(self, request: NotificationRequest, *, timeout: float) -> None:
        self.requests.append(request)
        self.release.wait(5)


class AsyncService(RecordingService):
    def __init__(self, service_id: str, delay: float = 0) -> None:
        super().__init__(service_id)
        self.delay = delay

    async def send(self, request: NotificationRequest, *, timeout: float) -> None:
        self.requests.append(request)
        await anyio.sleep(self.delay)


def make_clock(start: datetime = BASE_TIME, step: timedelta = timedelta(seconds=1)):
    """Return a clock that advances by ``step`` on every call."""

    state = {"now": start - step}

    def clock() -> datetime:
        state["now"] += step
        return state["now"]

    return clock
