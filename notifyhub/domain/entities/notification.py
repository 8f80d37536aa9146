"""Domain entities for notifications and their per-user delivery records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .user import User


@dataclass
class Notification:
    """Broadcast message addressed to one or more users."""

    id: int | None
    sender_id: int
    title: str
    body: str
    recipient_ids: list[int] = field(default_factory=list)
    sent_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: User | None = None


@dataclass
class DeliveryRecord:
    """One recipient's read state for one notification."""

    id: int | None
    user_id: int
    notification_id: int
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: User | None = None


@dataclass
class InboxItem:
    """A delivery record joined with the notification it points to."""

    delivery: DeliveryRecord
    notification: Notification


@dataclass(frozen=True)
class DeliveryStats:
    """Read/unread counters derived from a notification's delivery records."""

    total_recipients: int
    read_count: int
    unread_count: int

    @classmethod
    def from_deliveries(cls, deliveries: list[DeliveryRecord]) -> "DeliveryStats":
        read_count = sum(1 for delivery in deliveries if delivery.read)
        return cls(
            total_recipients=len(deliveries),
            read_count=read_count,
            unread_count=len(deliveries) - read_count,
        )


@dataclass
class NotificationDetail:
    """Notification with every delivery record and aggregate stats."""

    notification: Notification
    deliveries: list[DeliveryRecord]
    stats: DeliveryStats


__all__ = [
    "Notification",
    "DeliveryRecord",
    "InboxItem",
    "DeliveryStats",
    "NotificationDetail",
]
