"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session, joinedload

from notifyhub.domain.entities import (
    DeliveryRecord,
    Notification,
    Page,
)
from notifyhub.infrastructure.models import DeliveryRecordModel, NotificationModel
from notifyhub.utils import ensure_app_naive_datetime, ensure_app_timezone

from .user_repository import UserRepository


class NotificationRepository:
    """Store notifications together with their delivery records."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create_with_deliveries(
        self, notification: Notification, recipient_ids: Sequence[int]
    ) -> Notification:
        """Persist ``notification`` and one delivery record per recipient.

        Both are written in a single transaction: either everything is
        committed or the session is rolled back and the error re-raised.
        """

        model = NotificationModel(
            sender_id=notification.sender_id,
            title=notification.title,
            body=notification.body,
            recipient_ids=list(recipient_ids),
            sent_at=ensure_app_naive_datetime(notification.sent_at),
        )
        try:
            self.session.add(model)
            self.session.flush()
            self.session.add_all(
                DeliveryRecordModel(user_id=user_id, notification_id=model.id)
                for user_id in recipient_ids
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(model)
        return self._to_entity(model)

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_sent(self, *, page: int, per_page: int) -> Page[Notification]:
        query = self.session.query(NotificationModel)
        total = query.count()
        result: Page[Notification] = Page(total=total, page=page, per_page=per_page)
        models = (
            query.options(joinedload(NotificationModel.sender))
            .order_by(NotificationModel.sent_at.desc(), NotificationModel.id.desc())
            .offset(result.offset)
            .limit(per_page)
            .all()
        )
        result.items = [self._to_entity(model) for model in models]
        return result

    def list_deliveries(self, notification_id: int) -> list[DeliveryRecord]:
        query = (
            self.session.query(DeliveryRecordModel)
            .options(joinedload(DeliveryRecordModel.user))
            .filter(DeliveryRecordModel.notification_id == notification_id)
            .order_by(DeliveryRecordModel.id.asc())
        )
        return [self.delivery_to_entity(model) for model in query.all()]

    def delete(self, notification_id: int) -> bool:
        """Delete the delivery records of a notification, then the notification."""

        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            return False
        self.session.query(DeliveryRecordModel).filter(
            DeliveryRecordModel.notification_id == notification_id
        ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            sender_id=model.sender_id,
            title=model.title,
            body=model.body,
            recipient_ids=[int(user_id) for user_id in (model.recipient_ids or [])],
            sent_at=ensure_app_timezone(model.sent_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            sender=UserRepository._to_entity(model.sender) if model.sender else None,
        )

    @staticmethod
    def delivery_to_entity(model: DeliveryRecordModel) -> DeliveryRecord:
        return DeliveryRecord(
            id=model.id,
            user_id=model.user_id,
            notification_id=model.notification_id,
            read=bool(model.read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            user=UserRepository._to_entity(model.user) if model.user else None,
        )


__all__ = ["NotificationRepository"]
