"""Use case for registering a device token for push delivery."""

from sqlalchemy.orm import Session

from notifyhub.domain.entities import DEVICE_TYPES, User
from notifyhub.domain.errors import NotFoundError, ValidationError
from notifyhub.infrastructure.repositories import UserRepository


def register_push_token(
    session: Session, user_id: int, *, push_token: str, device_type: str
) -> User:
    """Store the device token that push deliveries for ``user_id`` will use."""

    token = (push_token or "").strip()
    if not token:
        raise ValidationError("The push token field is required")

    normalized_type = (device_type or "").strip().lower()
    if normalized_type not in DEVICE_TYPES:
        raise ValidationError("The device type must be one of: " + ", ".join(DEVICE_TYPES))

    user = UserRepository(session).update_push_token(
        user_id, push_token=token, device_type=normalized_type
    )
    if user is None:
        raise NotFoundError("User not found")
    return user
