"""Domain entity representing a user known to the directory."""

from dataclasses import dataclass


@dataclass
class User:
    """Core attributes the notification engine needs about a user."""

    id: str
    name: str
    email: str | None
    is_admin: bool = False
    is_active: bool = True
