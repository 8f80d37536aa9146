"""Domain entities exposed by the application."""

from .dispatch import DispatchResult, RecipientSelector
from .notification import (
    DeliveryRecord,
    DeliveryStats,
    InboxItem,
    Notification,
    NotificationDetail,
)
from .page import Page, normalize_page
from .push import MulticastReport, PushOutcome, PushResult
from .user import DEVICE_TYPES, User

__all__ = [
    "DEVICE_TYPES",
    "DeliveryRecord",
    "DeliveryStats",
    "DispatchResult",
    "InboxItem",
    "MulticastReport",
    "Notification",
    "NotificationDetail",
    "Page",
    "PushOutcome",
    "PushResult",
    "RecipientSelector",
    "User",
    "normalize_page",
]
