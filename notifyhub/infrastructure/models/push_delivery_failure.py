"""SQLAlchemy model for push deliveries that exhausted their attempts."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class PushDeliveryFailureModel(Base):
    """Operator-visible record of a push message that could not be delivered."""

    __tablename__ = "push_delivery_failure"

    id = Column(Integer, primary_key=True, index=True)
    # Plain column: the record must outlive the user it was addressed to.
    user_id = Column(Integer, nullable=False, index=True)
    notification_id = Column(Integer, nullable=True, index=True)
    title = Column(String(255), nullable=False)
    outcome = Column(String(30), nullable=False)
    error = Column(Text, nullable=True)
    attempts = Column(Integer, nullable=False, default=1)
    failed_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["PushDeliveryFailureModel"]
