"""Registry of live websocket sessions, keyed by user id."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track the websocket sessions each user currently has open.

    A user may be connected from several devices at once; events are sent to
    all of them. Users without a session simply miss live events and catch up
    through their inbox.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, list[WebSocket]] = {}

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        await websocket.accept()
        sessions = self._sessions.setdefault(user_id, [])
        if websocket not in sessions:
            sessions.append(websocket)
        logger.debug("User %s opened a notification stream (%s active)", user_id, len(sessions))

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        sessions = self._sessions.get(user_id)
        if not sessions:
            return
        if websocket in sessions:
            sessions.remove(websocket)
        if not sessions:
            del self._sessions[user_id]

    def is_connected(self, user_id: int) -> bool:
        return bool(self._sessions.get(user_id))

    def session_count(self, user_id: int) -> int:
        return len(self._sessions.get(user_id, ()))

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every session of ``user_id``.

        Returns how many sessions received it. A session that fails to
        receive is dropped from the registry.
        """

        delivered = 0
        for websocket in list(self._sessions.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                logger.info("Dropping websocket for user %s after send failure: %s", user_id, exc)
                self.disconnect(user_id, websocket)
            else:
                delivered += 1
        return delivered


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
