"""Persistence layer for directory users."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from notification_hub.domain.entities import User
from notification_hub.infrastructure.models import UserModel


class UserRepository:
    """Resolve user accounts for the notification engine."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get(self, user_id: str) -> User | None:
        with self._session_factory() as session:
            model = session.get(UserModel, user_id)
            return self._to_entity(model) if model else None

    def save(self, user: User) -> User:
        with self._session_factory() as session:
            model = session.get(UserModel, user.id) or UserModel(id=user.id)
            model.name = user.name
            model.email = user.email
            model.is_admin = user.is_admin
            model.is_active = user.is_active
            session.add(model)
            session.commit()
            return self._to_entity(model)

    def list_administrators(self) -> Sequence[str]:
        """Return the ids of every active administrator."""

        query = (
            select(UserModel.id)
            .where(UserModel.is_admin.is_(True), UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        with self._session_factory() as session:
            return list(session.scalars(query).all())

    def get_emails(self, user_ids: Sequence[str]) -> dict[str, str]:
        if not user_ids:
            return {}

        query = select(UserModel.id, UserModel.email).where(
            UserModel.id.in_(set(user_ids)),
            UserModel.is_active.is_(True),
            UserModel.email.is_not(None),
        )
        with self._session_factory() as session:
            return {user_id: email for user_id, email in session.execute(query).all()}

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            is_admin=bool(model.is_admin),
            is_active=bool(model.is_active),
        )


__all__ = ["UserRepository"]
