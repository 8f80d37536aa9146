"""Use cases for delivering notifications to mobile devices."""

from .deliver import (
    PushGateway,
    deliver_push_to_user,
    send_push_to_tokens,
    send_push_to_users,
)

__all__ = [
    "PushGateway",
    "deliver_push_to_user",
    "send_push_to_tokens",
    "send_push_to_users",
]
