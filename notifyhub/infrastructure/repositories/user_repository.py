"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifyhub.domain.entities import User
from notifyhub.infrastructure.models import UserModel
from notifyhub.utils import ensure_app_timezone


class UserRepository:
    """Provide the user operations needed by the dispatch pipeline."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email,
            is_admin=user.is_admin,
            push_token=user.push_token,
            device_type=user.device_type,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_by_ids(self, user_ids: Sequence[int]) -> list[User]:
        """Return the existing users among ``user_ids`` in the given order."""

        if not user_ids:
            return []

        unique_ids = {int(user_id) for user_id in user_ids}
        models = (
            self.session.query(UserModel).filter(UserModel.id.in_(unique_ids)).all()
        )
        by_id = {model.id: model for model in models}

        ordered: list[User] = []
        seen: set[int] = set()
        for user_id in user_ids:
            model = by_id.get(int(user_id))
            if model is None or model.id in seen:
                continue
            seen.add(model.id)
            ordered.append(self._to_entity(model))
        return ordered

    def list_non_admin(self) -> list[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_admin.is_(False))
            .order_by(UserModel.name.asc(), UserModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def update_push_token(
        self, user_id: int, *, push_token: str, device_type: str
    ) -> User | None:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return None
        model.push_token = push_token
        model.device_type = device_type
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def clear_push_token(self, user_id: int) -> bool:
        updated = (
            self.session.query(UserModel)
            .filter(UserModel.id == user_id)
            .update({UserModel.push_token: None}, synchronize_session=False)
        )
        self.session.commit()
        return bool(updated)

    def clear_push_tokens(self, tokens: Sequence[str]) -> int:
        """Remove every stored token listed in ``tokens``."""

        values = [token for token in tokens if token]
        if not values:
            return 0
        updated = (
            self.session.query(UserModel)
            .filter(UserModel.push_token.in_(values))
            .update({UserModel.push_token: None}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated)

    def delete(self, user_id: int) -> bool:
        model = self.session.get(UserModel, user_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            is_admin=bool(model.is_admin),
            push_token=model.push_token,
            device_type=model.device_type,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["UserRepository"]
