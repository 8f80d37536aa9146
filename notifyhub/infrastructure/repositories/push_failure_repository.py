"""Persistence helpers for failed push deliveries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.orm import Session

from notifyhub.domain.entities import PushOutcome
from notifyhub.infrastructure.models import PushDeliveryFailureModel
from notifyhub.utils import ensure_app_timezone


@dataclass
class PushDeliveryFailure:
    id: int
    user_id: int
    notification_id: int | None
    title: str
    outcome: str
    error: str | None
    attempts: int
    failed_at: datetime | None


class PushFailureRepository:
    """Record push messages that could not be delivered."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def record(
        self,
        *,
        user_id: int,
        notification_id: int | None,
        title: str,
        outcome: PushOutcome,
        error: str | None,
        attempts: int,
    ) -> PushDeliveryFailure:
        model = PushDeliveryFailureModel(
            user_id=user_id,
            notification_id=notification_id,
            title=title[:255],
            outcome=outcome.value,
            error=error,
            attempts=attempts,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(self, user_id: int) -> list[PushDeliveryFailure]:
        query = (
            self.session.query(PushDeliveryFailureModel)
            .filter(PushDeliveryFailureModel.user_id == user_id)
            .order_by(PushDeliveryFailureModel.failed_at.desc(), PushDeliveryFailureModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: PushDeliveryFailureModel) -> PushDeliveryFailure:
        return PushDeliveryFailure(
            id=model.id,
            user_id=model.user_id,
            notification_id=model.notification_id,
            title=model.title,
            outcome=model.outcome,
            error=model.error,
            attempts=model.attempts,
            failed_at=ensure_app_timezone(model.failed_at),
        )


__all__ = ["PushDeliveryFailure", "PushFailureRepository"]
