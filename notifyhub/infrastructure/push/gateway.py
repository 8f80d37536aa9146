"""Firebase Cloud Messaging adapter used for mobile push delivery."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import firebase_admin
from firebase_admin import credentials, exceptions, messaging

from notifyhub.config import Settings, get_settings
from notifyhub.domain.entities import MulticastReport, PushOutcome, PushResult

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "notifyhub"

# send_each_for_multicast accepts at most this many tokens per call.
MULTICAST_BATCH_SIZE = 500

_INVALID_TOKEN_CODES = frozenset({"unregistered", "invalid_argument"})
_INVALID_TOKEN_MARKERS = (
    "unregistered",
    "invalid argument",
    "invalid_argument",
    "not a valid",
)
_TRANSIENT_CODES = frozenset(
    {
        "unavailable",
        "internal",
        "deadline_exceeded",
        "resource_exhausted",
        "quota_exceeded",
    }
)
_TRANSIENT_ERRORS = (
    exceptions.UnavailableError,
    exceptions.InternalError,
    exceptions.DeadlineExceededError,
    exceptions.ResourceExhaustedError,
)


def classify_error(
    message: str | None,
    *,
    code: str | None = None,
    status_code: int | None = None,
) -> PushOutcome:
    """Map an FCM error code, message or HTTP status onto a :class:`PushOutcome`."""

    if status_code is not None and (status_code >= 500 or status_code == 429):
        return PushOutcome.TRANSIENT_FAILURE

    normalized_code = (code or "").strip().lower()
    lowered = (message or "").strip().lower()
    if normalized_code in _INVALID_TOKEN_CODES or any(
        marker in lowered for marker in _INVALID_TOKEN_MARKERS
    ):
        return PushOutcome.INVALID_TOKEN
    if normalized_code in _TRANSIENT_CODES:
        return PushOutcome.TRANSIENT_FAILURE
    return PushOutcome.PERMANENT_FAILURE


def classify_exception(exc: Exception) -> PushOutcome:
    """Classify an exception raised by the Firebase Admin SDK."""

    if isinstance(exc, (messaging.UnregisteredError, exceptions.InvalidArgumentError)):
        return PushOutcome.INVALID_TOKEN
    if isinstance(exc, _TRANSIENT_ERRORS):
        return PushOutcome.TRANSIENT_FAILURE
    if isinstance(exc, exceptions.FirebaseError):
        return classify_error(
            str(exc),
            code=exc.code,
            status_code=getattr(exc.http_response, "status_code", None),
        )
    return PushOutcome.PERMANENT_FAILURE


def normalize_data(data: Mapping[str, Any] | None) -> dict[str, str]:
    """Return ``data`` with every value coerced to a string.

    FCM only accepts string values in the data payload; anything else is
    JSON-encoded.
    """

    if not data:
        return {}
    return {
        str(key): value if isinstance(value, str) else json.dumps(value)
        for key, value in data.items()
    }


@dataclass(frozen=True)
class FcmOptions:
    """Delivery options attached to every outgoing message."""

    ttl_seconds: int = 2_419_200
    android_priority: str = "high"
    android_channel_id: str = "notifications"
    apns_priority: str = "10"
    apns_sound: str = "default"
    apns_badge: int = 1


class FcmPushGateway:
    """Send push messages through the Firebase Admin SDK (FCM HTTP v1)."""

    def __init__(
        self,
        app: firebase_admin.App | None,
        *,
        options: FcmOptions | None = None,
    ) -> None:
        self._app = app
        self._options = options or FcmOptions()

    @classmethod
    def from_settings(cls, settings: Settings) -> "FcmPushGateway":
        return cls(
            _initialize_firebase_app(settings),
            options=FcmOptions(
                ttl_seconds=settings.fcm_ttl_seconds,
                android_priority=settings.fcm_android_priority,
                android_channel_id=settings.fcm_android_channel_id,
                apns_priority=settings.fcm_apns_priority,
                apns_sound=settings.fcm_apns_sound,
                apns_badge=settings.fcm_apns_badge,
            ),
        )

    @property
    def is_configured(self) -> bool:
        return self._app is not None

    def send_to_token(
        self,
        token: str,
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> PushResult:
        """Send one message to ``token`` and classify the result."""

        if not self.is_configured:
            logger.warning("Firebase not configured, skipping push notification")
            return PushResult(outcome=PushOutcome.SKIPPED, token=token)

        message = messaging.Message(token=token, **self._message_fields(title, body, data))
        try:
            messaging.send(message, app=self._app)
        except (exceptions.FirebaseError, ValueError) as exc:
            outcome = classify_exception(exc)
            logger.warning("FCM send failed (%s): %s", outcome.value, exc)
            return PushResult(outcome=outcome, token=token, error=str(exc))
        return PushResult(outcome=PushOutcome.SUCCESS, token=token)

    def send_multicast(
        self,
        tokens: Sequence[str],
        title: str,
        body: str,
        data: Mapping[str, Any] | None = None,
    ) -> MulticastReport:
        """Send the same message to every token in ``tokens``."""

        targets = [token for token in tokens if token]
        report = MulticastReport()
        if not targets:
            return report

        if not self.is_configured:
            logger.warning("Firebase not configured, skipping push notifications")
            report.failure_count = len(targets)
            report.failures = [
                PushResult(outcome=PushOutcome.SKIPPED, token=token) for token in targets
            ]
            return report

        fields = self._message_fields(title, body, data)
        for start in range(0, len(targets), MULTICAST_BATCH_SIZE):
            batch = targets[start : start + MULTICAST_BATCH_SIZE]
            try:
                response = messaging.send_each_for_multicast(
                    messaging.MulticastMessage(tokens=batch, **fields), app=self._app
                )
            except (exceptions.FirebaseError, ValueError) as exc:
                outcome = classify_exception(exc)
                logger.error("FCM multicast batch failed (%s): %s", outcome.value, exc)
                report.failure_count += len(batch)
                report.failures.extend(
                    PushResult(outcome=outcome, token=token, error=str(exc)) for token in batch
                )
                continue

            for token, item in zip(batch, response.responses):
                if item.success:
                    report.success_count += 1
                    continue
                report.failure_count += 1
                report.failures.append(
                    PushResult(
                        outcome=classify_exception(item.exception),
                        token=token,
                        error=str(item.exception),
                    )
                )

        logger.info(
            "FCM multicast sent - success: %s, failure: %s",
            report.success_count,
            report.failure_count,
        )
        return report

    def _message_fields(
        self, title: str, body: str, data: Mapping[str, Any] | None
    ) -> dict[str, Any]:
        options = self._options
        return {
            "notification": messaging.Notification(title=title, body=body),
            "data": normalize_data(data),
            "android": messaging.AndroidConfig(
                ttl=options.ttl_seconds,
                priority=options.android_priority,
                notification=messaging.AndroidNotification(
                    channel_id=options.android_channel_id
                ),
            ),
            "apns": messaging.APNSConfig(
                headers={"apns-priority": options.apns_priority},
                payload=messaging.APNSPayload(
                    aps=messaging.Aps(sound=options.apns_sound, badge=options.apns_badge)
                ),
            ),
        }


def _initialize_firebase_app(settings: Settings) -> firebase_admin.App | None:
    """Return the Firebase app for the configured service account, if any."""

    path = settings.firebase_credentials
    if not path or not Path(path).is_file():
        logger.warning("Firebase credentials not found, push delivery is disabled")
        return None

    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    options = {"projectId": settings.firebase_project_id} if settings.firebase_project_id else None
    return firebase_admin.initialize_app(
        credentials.Certificate(path), options, name=FIREBASE_APP_NAME
    )


@lru_cache(maxsize=1)
def get_push_gateway() -> FcmPushGateway:
    """Return the shared gateway configured from the application settings."""

    return FcmPushGateway.from_settings(get_settings())


__all__ = [
    "FcmOptions",
    "FcmPushGateway",
    "MULTICAST_BATCH_SIZE",
    "classify_error",
    "classify_exception",
    "get_push_gateway",
    "normalize_data",
]
