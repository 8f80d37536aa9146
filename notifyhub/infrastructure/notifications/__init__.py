"""Real-time notification transport for the infrastructure layer."""

from .manager import NotificationConnectionManager, notification_manager
from .realtime import (
    EVENT_TYPE,
    RealtimeEventPublisher,
    build_event_payload,
    realtime_event_publisher,
)

__all__ = [
    "EVENT_TYPE",
    "NotificationConnectionManager",
    "notification_manager",
    "RealtimeEventPublisher",
    "build_event_payload",
    "realtime_event_publisher",
]
