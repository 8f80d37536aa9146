"""Notification dispatch and query use cases."""

from .admin import (
    delete_notification,
    get_notification_with_stats,
    list_recipient_candidates,
    list_sent_notifications,
)
from .dispatch import dispatch_notification
from .inbox import (
    delete_inbox_item,
    get_inbox_item,
    list_inbox,
    mark_all_read,
    mark_read,
    unread_count,
)

__all__ = [
    "dispatch_notification",
    "list_inbox",
    "get_inbox_item",
    "mark_read",
    "mark_all_read",
    "unread_count",
    "delete_inbox_item",
    "list_sent_notifications",
    "get_notification_with_stats",
    "delete_notification",
    "list_recipient_candidates",
]
