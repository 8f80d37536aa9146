"""Persistence helpers for a user's notification inbox."""

from __future__ import annotations

from sqlalchemy.orm import Session, joinedload

from notifyhub.domain.entities import InboxItem, Page
from notifyhub.infrastructure.models import DeliveryRecordModel, NotificationModel
from notifyhub.utils import ensure_app_naive_datetime, now_in_app_timezone

from .notification_repository import NotificationRepository


class DeliveryRecordRepository:
    """Query and update delivery records scoped to their owning user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: int, *, page: int, per_page: int) -> Page[InboxItem]:
        query = self.session.query(DeliveryRecordModel).filter(
            DeliveryRecordModel.user_id == user_id
        )
        total = query.count()
        result: Page[InboxItem] = Page(total=total, page=page, per_page=per_page)
        models = (
            query.options(
                joinedload(DeliveryRecordModel.notification).joinedload(
                    NotificationModel.sender
                )
            )
            .order_by(DeliveryRecordModel.created_at.desc(), DeliveryRecordModel.id.desc())
            .offset(result.offset)
            .limit(per_page)
            .all()
        )
        result.items = [self._to_item(model) for model in models]
        return result

    def list_unread_for_user(self, user_id: int, *, limit: int | None = 50) -> list[InboxItem]:
        query = (
            self.session.query(DeliveryRecordModel)
            .filter(DeliveryRecordModel.user_id == user_id)
            .filter(DeliveryRecordModel.read.is_(False))
            .order_by(DeliveryRecordModel.created_at.desc(), DeliveryRecordModel.id.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_item(model) for model in query.all()]

    def get_for_user(self, user_id: int, notification_id: int) -> InboxItem | None:
        model = self._get_model(user_id, notification_id)
        return self._to_item(model) if model else None

    def mark_read(self, user_id: int, notification_id: int) -> bool:
        """Flag the record as read; returns ``False`` when the pair is unknown."""

        now = ensure_app_naive_datetime(now_in_app_timezone())
        updated = (
            self.session.query(DeliveryRecordModel)
            .filter(
                DeliveryRecordModel.user_id == user_id,
                DeliveryRecordModel.notification_id == notification_id,
            )
            .update(
                {
                    DeliveryRecordModel.read: True,
                    DeliveryRecordModel.read_at: now,
                    DeliveryRecordModel.updated_at: now,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return bool(updated)

    def mark_all_read(self, user_id: int) -> int:
        now = ensure_app_naive_datetime(now_in_app_timezone())
        updated = (
            self.session.query(DeliveryRecordModel)
            .filter(
                DeliveryRecordModel.user_id == user_id,
                DeliveryRecordModel.read.is_(False),
            )
            .update(
                {
                    DeliveryRecordModel.read: True,
                    DeliveryRecordModel.read_at: now,
                    DeliveryRecordModel.updated_at: now,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated)

    def count_unread(self, user_id: int) -> int:
        return (
            self.session.query(DeliveryRecordModel)
            .filter(
                DeliveryRecordModel.user_id == user_id,
                DeliveryRecordModel.read.is_(False),
            )
            .count()
        )

    def delete_for_user(self, user_id: int, notification_id: int) -> bool:
        deleted = (
            self.session.query(DeliveryRecordModel)
            .filter(
                DeliveryRecordModel.user_id == user_id,
                DeliveryRecordModel.notification_id == notification_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def _get_model(self, user_id: int, notification_id: int) -> DeliveryRecordModel | None:
        return (
            self.session.query(DeliveryRecordModel)
            .options(
                joinedload(DeliveryRecordModel.notification).joinedload(
                    NotificationModel.sender
                )
            )
            .filter(
                DeliveryRecordModel.user_id == user_id,
                DeliveryRecordModel.notification_id == notification_id,
            )
            .first()
        )

    @staticmethod
    def _to_item(model: DeliveryRecordModel) -> InboxItem:
        return InboxItem(
            delivery=NotificationRepository.delivery_to_entity(model),
            notification=NotificationRepository._to_entity(model.notification),
        )


__all__ = ["DeliveryRecordRepository"]
