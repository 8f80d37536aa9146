"""Deliver push notifications and invalidate tokens the gateway rejects."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from sqlalchemy.orm import Session

from notifyhub.domain.entities import MulticastReport, PushOutcome, PushResult, User
from notifyhub.infrastructure.repositories import UserRepository

logger = logging.getLogger(__name__)


class PushGateway(Protocol):
    """Interface the push use cases expect from a gateway adapter."""

    @property
    def is_configured(self) -> bool: ...

    def send_to_token(
        self, token: str, title: str, body: str, data: Mapping[str, Any] | None = None
    ) -> PushResult: ...

    def send_multicast(
        self,
        tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> MulticastReport: ...


def deliver_push_to_user(
    session: Session,
    gateway: PushGateway,
    *,
    user_id: int,
    title: str,
    body: str,
    data: Mapping[str, Any] | None = None,
) -> PushResult:
    """Send one push message to the device registered by ``user_id``.

    Missing users and users without a token are not errors: the result is
    ``SKIPPED``. A token reported as invalid is cleared so later deliveries
    become no-ops until the user registers a new one.
    """

    repository = UserRepository(session)
    user = repository.get(user_id)
    if user is None:
        logger.warning("Push delivery skipped: user %s not found", user_id)
        return PushResult(outcome=PushOutcome.SKIPPED, error="user not found")

    if not user.has_push_token():
        logger.info("Push delivery skipped: user %s has no push token", user_id)
        return PushResult(outcome=PushOutcome.SKIPPED, error="no push token")

    if not gateway.is_configured:
        logger.warning("Push gateway not configured, skipping push for user %s", user_id)
        return PushResult(outcome=PushOutcome.SKIPPED, token=user.push_token)

    result = gateway.send_to_token(user.push_token, title, body, data)

    if result.outcome is PushOutcome.SUCCESS:
        logger.info("Sent push notification to user %s", user_id)
    elif result.outcome is PushOutcome.INVALID_TOKEN:
        logger.warning("Invalid push token for user %s, clearing token", user_id)
        repository.clear_push_token(user_id)
    elif result.outcome is PushOutcome.TRANSIENT_FAILURE:
        logger.warning("Transient push failure for user %s: %s", user_id, result.error)
    else:
        logger.error("Push delivery to user %s failed: %s", user_id, result.error)
    return result


def send_push_to_tokens(
    session: Session,
    gateway: PushGateway,
    tokens: Sequence[str],
    *,
    title: str,
    body: str,
    data: Mapping[str, Any] | None = None,
) -> MulticastReport:
    """Send one message to many tokens and drop the ones reported invalid."""

    targets = [token for token in tokens if token]
    if not targets:
        logger.info("No push tokens to send to")
        return MulticastReport()

    report = gateway.send_multicast(targets, title, body, data)
    for failure in report.failures:
        logger.warning("Failed to send push to token: %s", failure.error or failure.outcome.value)

    invalid_tokens = report.invalid_tokens()
    if invalid_tokens:
        cleared = UserRepository(session).clear_push_tokens(invalid_tokens)
        logger.warning("Cleared %s invalid push token(s)", cleared)
    return report


def send_push_to_users(
    session: Session,
    gateway: PushGateway,
    users: Sequence[User],
    *,
    title: str,
    body: str,
    data: Mapping[str, Any] | None = None,
) -> MulticastReport:
    """Multicast to the registered devices of ``users``."""

    tokens = [user.push_token for user in users if user.has_push_token()]
    return send_push_to_tokens(
        session, gateway, tokens, title=title, body=body, data=data
    )
