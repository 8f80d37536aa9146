"""Use case for creating users."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifyhub.domain.entities import User
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.repositories import UserRepository


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    is_admin: bool = False,
) -> User:
    """Create a user record that notifications can be sent to or from."""

    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name:
        raise ValidationError("The name field is required")
    if email.count("@") != 1:
        raise ValidationError("The email must be a valid email address")

    try:
        return UserRepository(session).create(
            User(id=None, name=name, email=email, is_admin=is_admin)
        )
    except IntegrityError as exc:
        session.rollback()
        raise ValidationError("The email has already been taken") from exc
