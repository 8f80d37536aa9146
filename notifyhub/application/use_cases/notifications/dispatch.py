"""Create a notification, its delivery records, and fan it out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from sqlalchemy.orm import Session

from notifyhub.domain.entities import DispatchResult, Notification, RecipientSelector, User
from notifyhub.domain.errors import (
    DeliveryChannelError,
    DispatchFailedError,
    NoRecipientsError,
)
from notifyhub.infrastructure.notifications import realtime_event_publisher
from notifyhub.infrastructure.repositories import NotificationRepository, UserRepository
from notifyhub.infrastructure.tasks import push_task_queue
from notifyhub.utils import now_in_app_timezone

from .validators import ensure_valid_body, ensure_valid_title

logger = logging.getLogger(__name__)

PUSH_DATA_TYPE = "notification"


class RealtimePublisher(Protocol):
    def publish(
        self, target_user_id: int, title: str, body: str, notification_id: int
    ) -> None: ...


class PushQueue(Protocol):
    def enqueue(
        self,
        user_id: int,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> None: ...


def dispatch_notification(
    session: Session,
    *,
    sender_id: int,
    title: str,
    body: str,
    selector: RecipientSelector,
    realtime_publisher: RealtimePublisher = realtime_event_publisher,
    push_queue: PushQueue = push_task_queue,
) -> DispatchResult:
    """Send a notification from ``sender_id`` to the users picked by ``selector``.

    The notification and its delivery records are committed together before
    any delivery is attempted. Delivery failures are logged per recipient and
    never undo the committed notification.
    """

    title = ensure_valid_title(title)
    body = ensure_valid_body(body)

    try:
        recipients = _resolve_recipients(session, selector)
    except Exception as exc:
        session.rollback()
        logger.exception("Recipient resolution failed for user %s", sender_id)
        raise DispatchFailedError(exc) from exc

    if not recipients:
        if selector.all_users:
            raise NoRecipientsError("No users found")
        raise NoRecipientsError("No valid users found")

    recipient_ids = [user.id for user in recipients]
    try:
        notification = NotificationRepository(session).create_with_deliveries(
            Notification(
                id=None,
                sender_id=sender_id,
                title=title,
                body=body,
                recipient_ids=recipient_ids,
                sent_at=now_in_app_timezone(),
            ),
            recipient_ids,
        )
    except Exception as exc:
        logger.exception("Dispatch from user %s rolled back", sender_id)
        raise DispatchFailedError(exc) from exc

    logger.info(
        "Notification %s committed for %s recipient(s)", notification.id, len(recipient_ids)
    )
    _fan_out(notification, recipient_ids, realtime_publisher, push_queue)
    return DispatchResult(notification=notification, recipients_count=len(recipient_ids))


def _resolve_recipients(session: Session, selector: RecipientSelector) -> list[User]:
    repository = UserRepository(session)
    if selector.all_users:
        return repository.list_non_admin()
    return repository.list_by_ids(selector.user_ids)


def _fan_out(
    notification: Notification,
    recipient_ids: list[int],
    realtime_publisher: RealtimePublisher,
    push_queue: PushQueue,
) -> None:
    push_data = {"notification_id": str(notification.id), "type": PUSH_DATA_TYPE}

    for user_id in recipient_ids:
        try:
            realtime_publisher.publish(
                user_id, notification.title, notification.body, notification.id
            )
        except Exception as exc:
            logger.warning("%s", DeliveryChannelError("realtime", user_id, str(exc)))

        try:
            push_queue.enqueue(user_id, notification.title, notification.body, push_data)
        except Exception as exc:
            logger.warning("%s", DeliveryChannelError("push", user_id, str(exc)))
