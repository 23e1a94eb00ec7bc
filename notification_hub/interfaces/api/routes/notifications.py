"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from notification_hub.application.use_cases.notifications import NotificationCenter
from notification_hub.domain.entities import (
    DispatchResult,
    NotificationLevel,
    NotificationRequest,
)
from notification_hub.domain.errors import NotificationError
from notification_hub.infrastructure.notifications import notification_manager
from notification_hub.interfaces.api.dependencies import get_notification_center
from notification_hub.interfaces.api.routes_helpers import parse_ids, to_http_exception
from notification_hub.interfaces.api.schemas import (
    DeliveryOutcomeRead,
    DispatchResultRead,
    NameIdPair,
    NotificationRead,
    NotificationSendRequest,
    NotificationsSummaryRead,
    NotificationTypeRead,
    SetReadResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _dispatch_to_schema(result: DispatchResult) -> DispatchResultRead:
    return DispatchResultRead(
        per_recipient={
            user_id: [NotificationRead.model_validate(record) for record in records]
            for user_id, records in result.per_recipient.items()
        },
        per_service=[DeliveryOutcomeRead.model_validate(o) for o in result.per_service],
    )


@router.get("/types", response_model=list[NotificationTypeRead])
def list_notification_types(
    center: NotificationCenter = Depends(get_notification_center),
) -> list[NotificationTypeRead]:
    """Return every notification type known to the server."""

    return [
        NotificationTypeRead(
            id=notification_type.id,
            name=notification_type.display_name,
            category=notification_type.category,
            enabled=notification_type.enabled,
        )
        for notification_type in center.list_notification_types()
    ]


@router.get("/services", response_model=list[NameIdPair])
def list_notification_services(
    center: NotificationCenter = Depends(get_notification_center),
) -> list[NameIdPair]:
    """Return the registered delivery services."""

    return [
        NameIdPair(id=service.id, name=service.display_name)
        for service in center.list_notification_services()
    ]


@router.post("/admin", response_model=DispatchResultRead)
async def create_admin_notification(
    name: str,
    description: str | None = None,
    url: str | None = None,
    level: NotificationLevel | None = None,
    center: NotificationCenter = Depends(get_notification_center),
) -> DispatchResultRead:
    """Send a notification to every administrator."""

    try:
        result = await center.broadcast_to_admins(
            name, description, url, level or NotificationLevel.NORMAL
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _dispatch_to_schema(result)


@router.post("/", response_model=DispatchResultRead)
async def send_notification(
    payload: NotificationSendRequest,
    center: NotificationCenter = Depends(get_notification_center),
) -> DispatchResultRead:
    """Send a notification to the listed users."""

    request = NotificationRequest(
        name=payload.name,
        description=payload.description,
        url=payload.url,
        level=payload.level,
        recipient_user_ids=tuple(payload.user_ids),
        notification_type=payload.notification_type,
    )
    try:
        result = await center.send(request)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return _dispatch_to_schema(result)


@router.get("/{user_id}", response_model=list[NotificationRead])
def list_user_notifications(
    user_id: str,
    is_read: bool | None = Query(None, alias="isRead"),
    start_index: int | None = Query(None, alias="startIndex", ge=0),
    limit: int | None = Query(None, ge=0),
    center: NotificationCenter = Depends(get_notification_center),
) -> list[NotificationRead]:
    """Return the user's notifications, oldest first."""

    try:
        records = center.list_user_notifications(user_id, is_read, start_index, limit)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return [NotificationRead.model_validate(record) for record in records]


@router.get("/{user_id}/summary", response_model=NotificationsSummaryRead)
def get_notifications_summary(
    user_id: str,
    center: NotificationCenter = Depends(get_notification_center),
) -> NotificationsSummaryRead:
    """Return the unread count and the highest unread level for the user."""

    try:
        summary = center.get_summary(user_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return NotificationsSummaryRead(
        unread_count=summary.unread_count, max_unread_level=summary.max_unread_level
    )


@router.post("/{user_id}/read", response_model=SetReadResponse)
def set_read(
    user_id: str,
    ids: str = Query(..., description="Comma-separated notification ids"),
    center: NotificationCenter = Depends(get_notification_center),
) -> SetReadResponse:
    try:
        updated = center.set_read(user_id, parse_ids(ids), read=True)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return SetReadResponse(updated_count=updated)


@router.post("/{user_id}/unread", response_model=SetReadResponse)
def set_unread(
    user_id: str,
    ids: str = Query(..., description="Comma-separated notification ids"),
    center: NotificationCenter = Depends(get_notification_center),
) -> SetReadResponse:
    try:
        updated = center.set_read(user_id, parse_ids(ids), read=False)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return SetReadResponse(updated_count=updated)


@router.websocket("/ws/{user_id}")
async def notifications_websocket(websocket: WebSocket, user_id: str) -> None:
    """Websocket endpoint that streams notifications to ``user_id``.

    Clients may send ``{"type": "ping"}`` to keep the connection alive.
    """

    await notification_manager.connect(user_id, websocket)
    try:
        while True:
            message = await websocket.receive_json()
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        notification_manager.disconnect(user_id, websocket)
    except Exception:
        notification_manager.disconnect(user_id, websocket)
        raise
