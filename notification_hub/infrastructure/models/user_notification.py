"""SQLAlchemy model for persisted user notifications."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.sql import expression

from notification_hub.infrastructure.database import Base


class UserNotificationModel(Base):
    """Database representation for a notification addressed to one user.

    ``sequence`` is the identifier exposed to callers; it is unique per user.
    """

    __tablename__ = "user_notification"
    __table_args__ = (
        UniqueConstraint("user_id", "sequence", name="uq_user_notification_user_sequence"),
    )

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    url = Column(String(2048), nullable=True)
    level = Column(String(16), nullable=False)
    notification_type = Column(String(64), nullable=True)
    created_at = Column(DateTime(), nullable=False)
    is_read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )


__all__ = ["UserNotificationModel"]
