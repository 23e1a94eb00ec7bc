"""Delivery service sending notification emails via SendGrid."""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Callable
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from notification_hub.config import Settings, get_settings
from notification_hub.domain.entities import DeliveryOutcome, NotificationRequest
from notification_hub.domain.interfaces import UserDirectory

logger = logging.getLogger(__name__)


class EmailDeliveryError(RuntimeError):
    """Raised when SendGrid rejects or fails a request."""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        messages: list[str] = []
        for item in parsed.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            if item.get("help"):
                messages.append(f"{item['message']} (help: {item['help']})")
            else:
                messages.append(str(item["message"]))
        if messages:
            return "; ".join(messages)
        return json.dumps(parsed, default=str)

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, body: Any) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"SendGrid request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid request failed with status {status_code}"
    if details:
        return f"SendGrid request failed: {details}"
    return "SendGrid request failed"


def render_email(request: NotificationRequest) -> tuple[str, str]:
    """Return the subject and HTML body for ``request``."""

    subject = f"[{request.level.value}] {request.name}"
    parts = [f"<p><strong>{html.escape(request.name)}</strong></p>"]
    if request.description:
        parts.append(f"<p>{html.escape(request.description)}</p>")
    if request.url:
        escaped_url = html.escape(request.url, quote=True)
        parts.append(f'<p><a href="{escaped_url}">{escaped_url}</a></p>')
    return subject, "".join(parts)


class EmailNotificationService:
    """Email every recipient that has an address in the user directory."""

    id = "email"
    display_name = "Email"

    def __init__(
        self,
        directory: UserDirectory,
        settings_provider: Callable[[], Settings] = get_settings,
    ) -> None:
        self._directory = directory
        self._settings_provider = settings_provider

    def send(self, request: NotificationRequest, *, timeout: float) -> DeliveryOutcome:
        settings = self._settings_provider()
        if not (settings.sendgrid_api_key and settings.sendgrid_sender):
            logger.info("SendGrid configuration incomplete; skipping email delivery")
            return DeliveryOutcome.failure(self.id, "SendGrid is not configured")

        addresses = self._directory.get_emails(list(request.recipient_user_ids))
        if not addresses:
            logger.info("No email addresses found for notification %r", request.name)
            return DeliveryOutcome.success(self.id)

        subject, html_content = render_email(request)
        message = Mail(
            from_email=settings.sendgrid_sender,
            to_emails=sorted(addresses.values()),
            subject=subject,
            html_content=html_content,
            is_multiple=True,
        )

        try:
            client = SendGridAPIClient(settings.sendgrid_api_key)
            client.client.timeout = timeout
            response = client.send(message)
        except Exception as exc:
            description = _describe_failure(
                getattr(exc, "status_code", None), getattr(exc, "body", None)
            )
            logger.error("%s", description)
            raise EmailDeliveryError(description) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_failure(status_code, getattr(response, "body", None))
            logger.error("%s", description)
            return DeliveryOutcome.failure(self.id, description)

        return DeliveryOutcome.success(self.id)


__all__ = ["EmailDeliveryError", "EmailNotificationService", "render_email"]
