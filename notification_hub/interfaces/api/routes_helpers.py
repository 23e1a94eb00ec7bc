"""Helpers shared by the API routes."""

from __future__ import annotations

from fastapi import HTTPException, status

from notification_hub.domain.errors import (
    InvalidRequest,
    NoAdministrators,
    NotificationError,
    StorageError,
)


def parse_ids(raw: str | None) -> list[int]:
    """Parse a comma-separated list of notification ids.

    Blank entries are ignored; anything else that is not an integer is rejected.
    """

    ids: list[int] = []
    for token in (raw or "").split(","):
        token = token.strip()
        if not token:
            continue
        try:
            ids.append(int(token))
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Invalid notification id: {token!r}",
            ) from exc
    return ids


def to_http_exception(exc: NotificationError) -> HTTPException:
    """Map an engine error onto the matching HTTP status."""

    if isinstance(exc, InvalidRequest):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, NoAdministrators):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, StorageError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": str(exc),
                "failed_user_ids": exc.failed_user_ids,
                "persisted_user_ids": sorted(exc.persisted),
            },
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
