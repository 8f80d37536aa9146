"""Use case for deleting users."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifyhub.domain.errors import NotFoundError, ValidationError
from notifyhub.infrastructure.repositories import UserRepository


def delete_user(session: Session, user_id: int) -> None:
    """Delete a user; their delivery records are removed with them."""

    try:
        deleted = UserRepository(session).delete(user_id)
    except IntegrityError as exc:
        session.rollback()
        raise ValidationError(
            "A user who has sent notifications cannot be deleted"
        ) from exc
    if not deleted:
        raise NotFoundError("User not found")
