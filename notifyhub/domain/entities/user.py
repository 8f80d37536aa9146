"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

DEVICE_TYPE_IOS = "ios"
DEVICE_TYPE_ANDROID = "android"
DEVICE_TYPES = (DEVICE_TYPE_IOS, DEVICE_TYPE_ANDROID)


@dataclass
class User:
    """Core attributes describing a notification recipient or sender."""

    id: int | None
    name: str
    email: str
    is_admin: bool = False
    push_token: str | None = None
    device_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def has_push_token(self) -> bool:
        """Return ``True`` when the user registered a device for push delivery."""

        return bool(self.push_token)
