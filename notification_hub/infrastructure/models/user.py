"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, String
from sqlalchemy.sql import expression

from notification_hub.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a directory user."""

    __tablename__ = "user"

    id = Column(String(64), primary_key=True)
    name = Column(String(50), nullable=False)
    email = Column(String(120), nullable=True, index=True)
    is_admin = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    is_active = Column(Boolean, nullable=False, default=True)
