"""Read-side operations on a user's own notification inbox."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifyhub.config import get_settings
from notifyhub.domain.entities import InboxItem, Page, normalize_page
from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.repositories import DeliveryRecordRepository

NOT_FOUND_MESSAGE = "Notification not found"


def list_inbox(session: Session, user_id: int, page: int | None = 1) -> Page[InboxItem]:
    """Return the user's notifications, newest first."""

    return DeliveryRecordRepository(session).list_for_user(
        user_id, page=normalize_page(page), per_page=get_settings().page_size
    )


def get_inbox_item(session: Session, user_id: int, notification_id: int) -> InboxItem:
    item = DeliveryRecordRepository(session).get_for_user(user_id, notification_id)
    if item is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return item


def mark_read(session: Session, user_id: int, notification_id: int) -> InboxItem:
    """Mark one notification as read for ``user_id``.

    Calling it again on a read notification succeeds and refreshes ``read_at``.
    """

    repository = DeliveryRecordRepository(session)
    if not repository.mark_read(user_id, notification_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
    item = repository.get_for_user(user_id, notification_id)
    if item is None:  # deleted between the update and the read
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return item


def mark_all_read(session: Session, user_id: int) -> int:
    """Mark every unread notification of ``user_id`` as read."""

    return DeliveryRecordRepository(session).mark_all_read(user_id)


def unread_count(session: Session, user_id: int) -> int:
    return DeliveryRecordRepository(session).count_unread(user_id)


def delete_inbox_item(session: Session, user_id: int, notification_id: int) -> None:
    """Remove the notification from the user's inbox only."""

    if not DeliveryRecordRepository(session).delete_for_user(user_id, notification_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)
