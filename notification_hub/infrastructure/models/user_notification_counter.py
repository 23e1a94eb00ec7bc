"""SQLAlchemy model holding the last identifier issued to each user."""

from sqlalchemy import Column, Integer, String

from notification_hub.infrastructure.database import Base


class UserNotificationCounterModel(Base):
    """Per-user high-water mark for notification identifiers.

    The counter only grows, so identifiers are never reissued even after
    records are deleted.
    """

    __tablename__ = "user_notification_counter"

    user_id = Column(String(64), primary_key=True)
    last_id = Column(Integer, nullable=False, default=0)


__all__ = ["UserNotificationCounterModel"]
