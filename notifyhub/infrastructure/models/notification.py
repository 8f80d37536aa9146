"""SQLAlchemy model for notifications sent by administrators."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for a dispatched notification."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    recipient_ids = Column(JSON, nullable=False, default=list)
    sent_at = Column(DateTime(), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=True,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    sender = relationship("UserModel", lazy="joined")
    deliveries = relationship(
        "DeliveryRecordModel",
        back_populates="notification",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


__all__ = ["NotificationModel"]
