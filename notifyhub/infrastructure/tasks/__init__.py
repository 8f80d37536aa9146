"""Asynchronous task definitions."""

from .celery_app import SEND_PUSH_TASK_NAME, celery_app
from .push import PushTaskQueue, push_task_queue, send_push_notification

__all__ = [
    "SEND_PUSH_TASK_NAME",
    "celery_app",
    "PushTaskQueue",
    "push_task_queue",
    "send_push_notification",
]
