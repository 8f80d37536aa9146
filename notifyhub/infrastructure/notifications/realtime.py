"""Helpers to publish notifications to connected websocket clients."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from .manager import NotificationConnectionManager, notification_manager

EVENT_TYPE = "notification"


class RealtimeEventPublisher:
    """Schedule real-time notification events for live user sessions."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[int]] = set()

    def publish(
        self, target_user_id: int, title: str, body: str, notification_id: int
    ) -> None:
        """Send one event to the live sessions of ``target_user_id``.

        Inside the event loop the send is scheduled as a task; from a worker
        thread it runs on the loop and this call waits for it.
        """

        message = {
            "type": EVENT_TYPE,
            "data": build_event_payload(
                title=title, body=body, notification_id=notification_id
            ),
        }
        self._schedule_send(target_user_id, message)

    def _schedule_send(self, user_id: int, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Sync FastAPI endpoints run on anyio worker threads; hand the send
            # back to the event loop that owns the websockets. Raises
            # RuntimeError outside a worker thread (scripts, Celery).
            from_thread.run(self._manager.send_to_user, user_id, message)
        else:
            task = loop.create_task(self._manager.send_to_user(user_id, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)


def build_event_payload(*, title: str, body: str, notification_id: int) -> dict[str, Any]:
    """Return the JSON payload delivered to websocket clients."""

    return {"notification_id": notification_id, "title": title, "body": body}


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


__all__ = [
    "EVENT_TYPE",
    "RealtimeEventPublisher",
    "build_event_payload",
    "realtime_event_publisher",
]
