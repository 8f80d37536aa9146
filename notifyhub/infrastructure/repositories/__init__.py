"""Repository implementations for infrastructure layer."""

from .user_repository import UserRepository
from .notification_repository import NotificationRepository
from .delivery_record_repository import DeliveryRecordRepository
from .push_failure_repository import PushDeliveryFailure, PushFailureRepository

__all__ = [
    "UserRepository",
    "NotificationRepository",
    "DeliveryRecordRepository",
    "PushDeliveryFailure",
    "PushFailureRepository",
]
