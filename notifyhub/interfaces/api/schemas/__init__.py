from .common import ApiResponse, Paginated, UnreadCountRead
from .notification import (
    DeliveryRead,
    DeliveryStatsRead,
    DispatchResultRead,
    InboxItemRead,
    NotificationBroadcastRequest,
    NotificationDetailRead,
    NotificationRead,
    NotificationSendRequest,
)
from .user import PushTokenUpdate, UserRead, UserSummaryRead

__all__ = [
    "ApiResponse",
    "Paginated",
    "UnreadCountRead",
    "DeliveryRead",
    "DeliveryStatsRead",
    "DispatchResultRead",
    "InboxItemRead",
    "NotificationBroadcastRequest",
    "NotificationDetailRead",
    "NotificationRead",
    "NotificationSendRequest",
    "PushTokenUpdate",
    "UserRead",
    "UserSummaryRead",
]
