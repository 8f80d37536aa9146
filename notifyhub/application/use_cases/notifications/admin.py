"""Administrator views over sent notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifyhub.config import get_settings
from notifyhub.domain.entities import (
    DeliveryStats,
    Notification,
    NotificationDetail,
    Page,
    User,
    normalize_page,
)
from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.repositories import NotificationRepository, UserRepository

NOT_FOUND_MESSAGE = "Notification not found"


def list_sent_notifications(session: Session, page: int | None = 1) -> Page[Notification]:
    """Return every notification with its sender, most recently sent first."""

    return NotificationRepository(session).list_sent(
        page=normalize_page(page), per_page=get_settings().page_size
    )


def get_notification_with_stats(session: Session, notification_id: int) -> NotificationDetail:
    """Return a notification, its delivery records and read statistics."""

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotFoundError(NOT_FOUND_MESSAGE)

    deliveries = repository.list_deliveries(notification_id)
    return NotificationDetail(
        notification=notification,
        deliveries=deliveries,
        stats=DeliveryStats.from_deliveries(deliveries),
    )


def delete_notification(session: Session, notification_id: int) -> None:
    if not NotificationRepository(session).delete(notification_id):
        raise NotFoundError(NOT_FOUND_MESSAGE)


def list_recipient_candidates(session: Session) -> list[User]:
    """Users an administrator can pick as recipients (non-admins, by name)."""

    return UserRepository(session).list_non_admin()
