"""Persistence helpers for per-user notification records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from threading import Lock
from weakref import WeakValueDictionary

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from notification_hub.domain.entities import (
    NotificationLevel,
    NotificationSummary,
    UserNotification,
)
from notification_hub.domain.errors import InvalidRequest, StorageError
from notification_hub.infrastructure.models import (
    UserNotificationCounterModel,
    UserNotificationModel,
)
from notification_hub.utils import from_storage_datetime, to_storage_datetime

logger = logging.getLogger(__name__)

_COUNTER_ATTEMPTS = 3


class _UserLock:
    """Lock for a single user; weakly referenced by :class:`_UserLocks`."""

    def __init__(self) -> None:
        self._lock = Lock()

    def __enter__(self) -> "_UserLock":
        self._lock.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._lock.release()


class _UserLocks:
    """Hand out one lock per user id.

    Entries disappear once no caller holds a reference to the lock, so the map
    only tracks users with an operation in flight.
    """

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: WeakValueDictionary[str, _UserLock] = WeakValueDictionary()

    def __call__(self, user_id: str) -> _UserLock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = _UserLock()
                self._locks[user_id] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


class UserNotificationRepository:
    """Store notification records grouped by user.

    Identifiers come from a per-user counter row bumped inside the append
    transaction, so they grow across processes and are never reissued after a
    record is deleted. Within a process every operation also holds the lock of
    the user it touches, so read-state updates are never lost and summaries
    see a consistent snapshot. Operations on different users do not contend.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._locks = _UserLocks()

    def append(
        self,
        user_id: str,
        *,
        name: str,
        description: str | None,
        url: str | None,
        level: NotificationLevel,
        created_at: datetime,
        notification_type: str | None = None,
    ) -> UserNotification:
        """Persist a new unread record for ``user_id`` and return it."""

        with self._locks(user_id), self._session_factory() as session:
            try:
                model = UserNotificationModel(
                    user_id=user_id,
                    sequence=self._next_id(session, user_id),
                    name=name,
                    description=description,
                    url=url,
                    level=NotificationLevel.parse(level).value,
                    notification_type=notification_type,
                    created_at=to_storage_datetime(created_at),
                    is_read=False,
                )
                session.add(model)
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise StorageError(
                    f"Could not persist notification for user {user_id}",
                    failed_user_ids=[user_id],
                ) from exc
            return self._to_entity(model)

    @staticmethod
    def _next_id(session: Session, user_id: str) -> int:
        """Bump the user's counter in the current transaction and return it."""

        counter = UserNotificationCounterModel
        for _ in range(_COUNTER_ATTEMPTS):
            bumped = session.execute(
                update(counter)
                .where(counter.user_id == user_id)
                .values(last_id=counter.last_id + 1)
            )
            if bumped.rowcount:
                return session.scalar(select(counter.last_id).where(counter.user_id == user_id))
            try:
                session.add(counter(user_id=user_id, last_id=1))
                session.flush()
            except IntegrityError:
                # Another process created the counter first; bump it instead.
                session.rollback()
                continue
            return 1
        raise StorageError(
            f"Could not allocate a notification id for user {user_id}",
            failed_user_ids=[user_id],
        )


    def list(
        self,
        user_id: str,
        *,
        is_read: bool | None = None,
        start_index: int = 0,
        limit: int | None = None,
    ) -> Sequence[UserNotification]:
        """Return the user's records oldest first.

        ``start_index`` skips matches after filtering and ``limit`` caps the
        result; ``limit=None`` means unbounded while ``limit=0`` yields nothing.
        """

        if start_index < 0:
            raise InvalidRequest("start_index must not be negative")
        if limit is not None and limit < 0:
            raise InvalidRequest("limit must not be negative")
        if limit == 0:
            return []

        query = select(UserNotificationModel).where(UserNotificationModel.user_id == user_id)
        if is_read is not None:
            query = query.where(UserNotificationModel.is_read.is_(is_read))
        query = query.order_by(
            UserNotificationModel.created_at.asc(), UserNotificationModel.sequence.asc()
        )
        if start_index:
            query = query.offset(start_index)
        if limit is not None:
            query = query.limit(limit)

        with self._locks(user_id), self._session_factory() as session:
            try:
                models = session.scalars(query).all()
            except SQLAlchemyError as exc:
                raise StorageError(f"Could not read notifications for user {user_id}") from exc
            return [self._to_entity(model) for model in models]

    def set_read(self, user_id: str, ids: Iterable[int], *, read: bool = True) -> int:
        """Set ``is_read`` on the listed records and return how many exist.

        Unknown identifiers are ignored. Records already in the requested state
        are counted but left untouched, so repeated calls return the same value.
        """

        unique_ids = {int(notification_id) for notification_id in ids}
        if not unique_ids:
            return 0

        owned = (
            UserNotificationModel.user_id == user_id,
            UserNotificationModel.sequence.in_(unique_ids),
        )
        with self._locks(user_id), self._session_factory() as session:
            try:
                matched = session.scalar(
                    select(func.count()).select_from(UserNotificationModel).where(*owned)
                )
                session.execute(
                    update(UserNotificationModel)
                    .where(*owned, UserNotificationModel.is_read.is_not(read))
                    .values(is_read=read)
                )
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise StorageError(f"Could not update notifications for user {user_id}") from exc
        return int(matched or 0)

    def set_unread(self, user_id: str, ids: Iterable[int]) -> int:
        return self.set_read(user_id, ids, read=False)

    def summary(self, user_id: str) -> NotificationSummary:
        """Count unread records and report the highest unread level."""

        query = (
            select(UserNotificationModel.level, func.count())
            .where(
                UserNotificationModel.user_id == user_id,
                UserNotificationModel.is_read.is_(False),
            )
            .group_by(UserNotificationModel.level)
        )
        with self._locks(user_id), self._session_factory() as session:
            try:
                rows = session.execute(query).all()
            except SQLAlchemyError as exc:
                raise StorageError(f"Could not summarize notifications for user {user_id}") from exc

        unread_count = 0
        max_level: NotificationLevel | None = None
        for raw_level, count in rows:
            unread_count += count
            level = NotificationLevel.parse(raw_level)
            if max_level is None or level.rank > max_level.rank:
                max_level = level
        return NotificationSummary(unread_count=unread_count, max_unread_level=max_level)

    @staticmethod
    def _to_entity(model: UserNotificationModel) -> UserNotification:
        return UserNotification(
            id=model.sequence,
            user_id=model.user_id,
            name=model.name,
            description=model.description,
            url=model.url,
            level=NotificationLevel.parse(model.level),
            created_at=from_storage_datetime(model.created_at),
            is_read=bool(model.is_read),
            notification_type=model.notification_type,
        )


__all__ = ["UserNotificationRepository"]
