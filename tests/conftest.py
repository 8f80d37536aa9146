"""Shared fixtures: a throwaway SQLite database and in-memory transports."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "notifyhub_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ.pop("CELERY_RESULT_BACKEND", None)
os.environ.pop("FIREBASE_CREDENTIALS", None)

from notifyhub.config import get_settings  # noqa: E402

get_settings.cache_clear()

from notifyhub.domain.entities import User  # noqa: E402
from notifyhub.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from notifyhub.infrastructure.repositories import UserRepository  # noqa: E402
from notifyhub.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure every test starts from an empty schema."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Factory inserting users; e-mails are derived from the name."""

    def _make_user(
        name: str,
        *,
        is_admin: bool = False,
        push_token: str | None = None,
        device_type: str | None = None,
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                name=name,
                email=f"{name.lower().replace(' ', '.')}@example.com",
                is_admin=is_admin,
                push_token=push_token,
                device_type=device_type,
            )
        )

    return _make_user


@pytest.fixture()
def auth_headers():
    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@dataclass
class RecordingPublisher:
    """Real-time transport double that records published events."""

    events: list[tuple[int, str, str, int]] = field(default_factory=list)
    fail_for: set[int] = field(default_factory=set)

    def publish(self, target_user_id: int, title: str, body: str, notification_id: int) -> None:
        if target_user_id in self.fail_for:
            raise RuntimeError("socket gone")
        self.events.append((target_user_id, title, body, notification_id))


@dataclass
class RecordingPushQueue:
    """Push task queue double that records enqueued jobs."""

    jobs: list[tuple[int, str, str, dict[str, Any]]] = field(default_factory=list)
    fail_for: set[int] = field(default_factory=set)

    def enqueue(self, user_id: int, title: str, body: str, data=None) -> None:
        if user_id in self.fail_for:
            raise ConnectionError("broker unreachable")
        self.jobs.append((user_id, title, body, dict(data or {})))


@pytest.fixture()
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture()
def push_queue() -> RecordingPushQueue:
    return RecordingPushQueue()
