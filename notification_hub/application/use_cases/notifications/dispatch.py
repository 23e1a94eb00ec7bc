"""Fan-out of a notification request to the store and every delivery service."""

from __future__ import annotations

import inspect
import logging
from dataclasses import replace
from datetime import datetime
from functools import partial
from typing import Any, Callable

import anyio
import anyio.lowlevel
from anyio import to_thread

from notification_hub.application.registry import NotificationRegistry
from notification_hub.config import get_settings
from notification_hub.domain.entities import (
    DeliveryOutcome,
    DispatchResult,
    NotificationRequest,
    UserNotification,
)
from notification_hub.domain.errors import InvalidRequest, StorageError
from notification_hub.domain.interfaces import NotificationService, NotificationStore
from notification_hub.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Persist a request for every recipient and deliver it through every service.

    Records are written before any delivery starts, so a user sees the
    notification even when every backend fails. Each service runs in its own
    task, bounded by ``delivery_timeout`` seconds; failures and timeouts are
    reported in :attr:`DispatchResult.per_service` and never raised.
    """

    def __init__(
        self,
        registry: NotificationRegistry,
        store: NotificationStore,
        *,
        delivery_timeout: float | None = None,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        if delivery_timeout is None:
            delivery_timeout = get_settings().delivery_timeout_seconds
        if delivery_timeout <= 0:
            raise ValueError("delivery_timeout must be positive")
        self._registry = registry
        self._store = store
        self._delivery_timeout = delivery_timeout
        self._clock = clock

    @property
    def delivery_timeout(self) -> float:
        return self._delivery_timeout

    async def send(self, request: NotificationRequest) -> DispatchResult:
        """Dispatch ``request`` and return the per-recipient and per-service outcome.

        Raises :class:`InvalidRequest` before any side effect when the request is
        malformed, and :class:`StorageError` when a recipient's record could not
        be written. Records written before the failure are kept.
        """

        self._validate(request)
        submitted = replace(request, created_at=self._clock())
        services = self._registry.list_services()
        logger.info(
            "Dispatching notification %r to %s recipient(s) through %s service(s)",
            submitted.name,
            len(submitted.recipient_user_ids),
            len(services),
        )

        per_recipient = await self._persist(submitted)
        per_service = await self._deliver(submitted, services)
        return DispatchResult(per_recipient=per_recipient, per_service=per_service)

    def send_sync(self, request: NotificationRequest) -> DispatchResult:
        """Run :meth:`send` on a new event loop for synchronous callers."""

        return anyio.run(self.send, request)

    def _validate(self, request: NotificationRequest) -> None:
        if not request.name or not request.name.strip():
            raise InvalidRequest("Notification name is required")
        if not request.recipient_user_ids:
            raise InvalidRequest("At least one recipient is required")
        if any(not user_id for user_id in request.recipient_user_ids):
            raise InvalidRequest("Recipient ids must not be empty")
        if (
            request.notification_type
            and self._registry.get_type(request.notification_type) is None
        ):
            raise InvalidRequest(f"Unknown notification type: {request.notification_type}")

    async def _persist(self, request: NotificationRequest) -> dict[str, list[UserNotification]]:
        persisted: dict[str, list[UserNotification]] = {}
        failed: list[str] = []
        for user_id in request.recipient_user_ids:
            await anyio.lowlevel.checkpoint_if_cancelled()
            append = partial(
                self._store.append,
                user_id,
                name=request.name,
                description=request.description,
                url=request.url,
                level=request.level,
                created_at=request.created_at,
                notification_type=request.notification_type,
            )
            # A write that has started always runs to completion.
            with anyio.CancelScope(shield=True):
                try:
                    record = await to_thread.run_sync(append)
                except StorageError:
                    logger.exception("Failed to persist notification for user %s", user_id)
                    failed.append(user_id)
                    continue
            persisted[user_id] = [record]

        if failed:
            raise StorageError(
                f"Could not persist notification {request.name!r} for "
                f"{len(failed)} of {len(request.recipient_user_ids)} recipient(s)",
                failed_user_ids=failed,
                persisted=persisted,
            )
        return persisted

    async def _deliver(
        self,
        request: NotificationRequest,
        services: tuple[NotificationService, ...],
    ) -> list[DeliveryOutcome]:
        outcomes: list[DeliveryOutcome | None] = [None] * len(services)
        async with anyio.create_task_group() as task_group:
            for index, service in enumerate(services):
                task_group.start_soon(self._deliver_one, service, request, outcomes, index)
        return [outcome for outcome in outcomes if outcome is not None]

    async def _deliver_one(
        self,
        service: NotificationService,
        request: NotificationRequest,
        outcomes: list[DeliveryOutcome | None],
        index: int,
    ) -> None:
        service_id = service.id
        timeout = self._delivery_timeout
        outcome: DeliveryOutcome | None = None
        with anyio.move_on_after(timeout) as scope:
            try:
                if inspect.iscoroutinefunction(service.send):
                    result = await service.send(request, timeout=timeout)
                else:
                    result = await to_thread.run_sync(
                        partial(service.send, request, timeout=timeout),
                        abandon_on_cancel=True,
                    )
            except Exception as exc:
                logger.warning(
                    "Notification service %s failed to deliver %r: %s",
                    service_id,
                    request.name,
                    exc,
                )
                outcome = DeliveryOutcome.failure(service_id, str(exc) or type(exc).__name__)
            else:
                outcome = _to_outcome(service_id, result)
                if not outcome.succeeded:
                    logger.warning(
                        "Notification service %s reported a failure: %s",
                        service_id,
                        outcome.error_message,
                    )

        if scope.cancelled_caught:
            logger.warning(
                "Notification service %s timed out after %ss delivering %r",
                service_id,
                timeout,
                request.name,
            )
            outcome = DeliveryOutcome.failure(
                service_id, f"Timed out after {timeout:g} seconds"
            )
        outcomes[index] = outcome


def _to_outcome(service_id: str, result: Any) -> DeliveryOutcome:
    if isinstance(result, DeliveryOutcome):
        if result.service_id != service_id:
            return replace(result, service_id=service_id)
        return result
    if result is False:
        return DeliveryOutcome.failure(service_id, "Service reported a failed delivery")
    return DeliveryOutcome.success(service_id)


__all__ = ["NotificationDispatcher"]
