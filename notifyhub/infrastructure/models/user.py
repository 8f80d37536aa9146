"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a user that can send or receive notifications."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    is_admin = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    push_token = Column(String(512), nullable=True, index=True)
    device_type = Column(String(20), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=True,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    deliveries = relationship(
        "DeliveryRecordModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["UserModel"]
