"""Celery task delivering one push notification to one user."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from notifyhub.application.use_cases.push import deliver_push_to_user
from notifyhub.config import get_settings
from notifyhub.domain.entities import PushOutcome, PushResult
from notifyhub.domain.errors import DeliveryChannelError
from notifyhub.infrastructure import database
from notifyhub.infrastructure.push import get_push_gateway, normalize_data
from notifyhub.infrastructure.repositories import PushFailureRepository

from .celery_app import SEND_PUSH_TASK_NAME, celery_app

logger = logging.getLogger(__name__)

settings = get_settings()


@celery_app.task(
    bind=True,
    name=SEND_PUSH_TASK_NAME,
    max_retries=settings.push_max_attempts - 1,
    default_retry_delay=settings.push_retry_backoff_seconds,
)
def send_push_notification(
    self,
    user_id: int,
    title: str,
    body: str,
    data: dict[str, Any] | None = None,
) -> str:
    """Send a push message to ``user_id``, retrying transient gateway failures.

    Returns the :class:`PushOutcome` value of the final attempt. Deliveries
    that still fail after the last attempt, or fail permanently, are written
    to the ``push_delivery_failure`` table.
    """

    payload = normalize_data(data)
    attempt = self.request.retries + 1

    with database.SessionLocal() as session:
        result = deliver_push_to_user(
            session,
            get_push_gateway(),
            user_id=user_id,
            title=title,
            body=body,
            data=payload,
        )

        if result.outcome.is_retryable and self.request.retries < self.max_retries:
            logger.info(
                "Retrying push for user %s in %ss (attempt %s of %s)",
                user_id,
                settings.push_retry_backoff_seconds,
                attempt,
                self.max_retries + 1,
            )
            raise self.retry(
                exc=DeliveryChannelError("push", user_id, result.error or result.outcome.value),
                countdown=settings.push_retry_backoff_seconds,
            )

        if result.outcome in (PushOutcome.TRANSIENT_FAILURE, PushOutcome.PERMANENT_FAILURE):
            _record_failure(session, user_id, title, payload, result, attempts=attempt)

    return result.outcome.value


def _record_failure(
    session,
    user_id: int,
    title: str,
    data: Mapping[str, str],
    result: PushResult,
    *,
    attempts: int,
) -> None:
    error = DeliveryChannelError("push", user_id, result.error or result.outcome.value)
    logger.error("%s (after %s attempt(s))", error, attempts)
    PushFailureRepository(session).record(
        user_id=user_id,
        notification_id=_parse_notification_id(data),
        title=title,
        outcome=result.outcome,
        error=result.error,
        attempts=attempts,
    )


def _parse_notification_id(data: Mapping[str, str]) -> int | None:
    try:
        return int(data.get("notification_id"))
    except (TypeError, ValueError):
        return None


class PushTaskQueue:
    """Enqueue push deliveries on the Celery broker."""

    def enqueue(
        self,
        user_id: int,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> None:
        send_push_notification.delay(user_id, title, body, normalize_data(data))


push_task_queue = PushTaskQueue()


__all__ = ["PushTaskQueue", "push_task_queue", "send_push_notification"]
