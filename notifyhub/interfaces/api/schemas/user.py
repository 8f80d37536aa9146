"""Pydantic models describing users."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class UserSummaryRead(BaseModel):
    """Identity fields shown next to notifications and recipient lists."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class UserRead(UserSummaryRead):
    is_admin: bool
    push_token: str | None = None
    device_type: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PushTokenUpdate(BaseModel):
    """Payload used to register the device that receives push messages."""

    push_token: str = Field(..., min_length=1, max_length=512)
    device_type: Literal["ios", "android"]


__all__ = ["UserSummaryRead", "UserRead", "PushTokenUpdate"]
