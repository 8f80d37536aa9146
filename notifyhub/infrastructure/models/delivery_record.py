"""SQLAlchemy model for per-user notification delivery records."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.sql import expression
from sqlalchemy.orm import relationship

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class DeliveryRecordModel(Base):
    """Read state of one notification for one recipient."""

    __tablename__ = "user_notification"
    __table_args__ = (
        UniqueConstraint("user_id", "notification_id", name="uq_user_notification"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    read_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime(),
        nullable=True,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    user = relationship("UserModel", back_populates="deliveries", lazy="joined")
    notification = relationship(
        "NotificationModel", back_populates="deliveries", lazy="joined"
    )


__all__ = ["DeliveryRecordModel"]
