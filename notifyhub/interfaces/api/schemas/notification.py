"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .user import UserSummaryRead


class NotificationBroadcastRequest(BaseModel):
    """Content of a notification sent to every non-admin user."""

    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1, max_length=5000)


class NotificationSendRequest(NotificationBroadcastRequest):
    """Content of a notification sent to selected users."""

    user_ids: list[int] = Field(..., min_length=1, description="Recipient user identifiers")


class NotificationRead(BaseModel):
    """Representation of a notification."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    sender_id: int
    title: str
    body: str
    recipient_ids: list[int] = Field(default_factory=list)
    sent_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sender: UserSummaryRead | None = None


class DeliveryRead(BaseModel):
    """Read state of a notification for one recipient."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    notification_id: int
    read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: UserSummaryRead | None = None


class InboxItemRead(BaseModel):
    """A notification as seen from the recipient's inbox."""

    id: int
    user_id: int
    notification_id: int
    read: bool
    read_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    notification: NotificationRead


class DeliveryStatsRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_recipients: int
    read_count: int
    unread_count: int


class NotificationDetailRead(BaseModel):
    notification: NotificationRead
    deliveries: list[DeliveryRead]
    stats: DeliveryStatsRead


class DispatchResultRead(BaseModel):
    notification: NotificationRead
    recipients_count: int


__all__ = [
    "NotificationBroadcastRequest",
    "NotificationSendRequest",
    "NotificationRead",
    "DeliveryRead",
    "InboxItemRead",
    "DeliveryStatsRead",
    "NotificationDetailRead",
    "DispatchResultRead",
]
