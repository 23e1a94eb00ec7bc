"""Utility script to register a user (by default an administrator) in the directory."""

from __future__ import annotations

import argparse
import uuid

from sqlalchemy.exc import SQLAlchemyError

from notification_hub.domain.entities import User
from notification_hub.infrastructure.database import (
    get_engine,
    get_session_factory,
    initialize_database,
)
from notification_hub.infrastructure.repositories import UserRepository


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Register a user that can receive notifications.",
    )
    parser.add_argument("--id", default=None, help="User id (default: a random UUID)")
    parser.add_argument("--name", default="Administrator", help="Display name")
    parser.add_argument("--email", default=None, help="Email address used for email delivery")
    parser.add_argument(
        "--no-admin",
        action="store_true",
        help="Register a regular user instead of an administrator.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database(get_engine())

    repository = UserRepository(get_session_factory())
    try:
        user = repository.save(
            User(
                id=args.id or uuid.uuid4().hex,
                name=args.name,
                email=args.email,
                is_admin=not args.no_admin,
            )
        )
    except SQLAlchemyError as exc:
        raise SystemExit(f"Could not save the user: {exc}") from exc

    print(
        "User saved:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.name}\n"
        f"  Email: {user.email or '-'}\n"
        f"  Administrator: {'yes' if user.is_admin else 'no'}"
    )


if __name__ == "__main__":
    main()
