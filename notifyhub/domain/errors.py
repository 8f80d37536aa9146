"""Errors raised by the notification dispatch pipeline."""

from __future__ import annotations


class NotificationError(Exception):
    """Base class for every pipeline error."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NotificationError, ValueError):
    """Malformed input rejected before anything is persisted."""


class NoRecipientsError(NotificationError):
    """The recipient selector resolved to an empty set of users."""


class NotFoundError(NotificationError, LookupError):
    """An entity, or a user-scoped delivery record, does not exist."""


class DispatchFailedError(NotificationError):
    """The transactional phase of a dispatch failed and was rolled back."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to send notification: {cause}")
        self.cause = cause


class DeliveryChannelError(NotificationError):
    """A post-commit delivery attempt failed on one channel for one user."""

    def __init__(self, channel: str, user_id: int, reason: str) -> None:
        super().__init__(f"{channel} delivery to user {user_id} failed: {reason}")
        self.channel = channel
        self.user_id = user_id
        self.reason = reason


__all__ = [
    "NotificationError",
    "ValidationError",
    "NoRecipientsError",
    "NotFoundError",
    "DispatchFailedError",
    "DeliveryChannelError",
]
