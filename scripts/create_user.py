"""Utility script to create a user and print a bearer token for it."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from notifyhub.application.use_cases.users import create_user
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.database import SessionLocal, initialize_database
from notifyhub.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for the notifyhub API and print an access token.",
    )
    parser.add_argument("--name", default="Administrator", help="Full name of the user")
    parser.add_argument("--email", default="admin@example.com", help="Email address")
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Grant administrator privileges (can send notifications).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(session, name=args.name, email=args.email, is_admin=args.admin)
    except ValidationError as exc:
        session.rollback()
        raise SystemExit(f"Could not create user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        token = create_access_token({"sub": str(user.id)})
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Admin: {user.is_admin}\n"
            f"  Token: {token}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
