"""Celery application used for asynchronous push delivery."""

from __future__ import annotations

from celery import Celery

from notifyhub.config import get_settings

SEND_PUSH_TASK_NAME = "notifyhub.push.send_to_user"

settings = get_settings()

celery_app = Celery(
    "notifyhub",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["notifyhub.infrastructure.tasks.push"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    task_ignore_result=settings.celery_result_backend is None,
    task_always_eager=settings.celery_task_always_eager,
    # Eager runs must not raise Retry so apply() can replay the attempts.
    task_eager_propagates=False,
    task_routes={SEND_PUSH_TASK_NAME: {"queue": settings.push_queue}},
    timezone=settings.app_timezone,
    broker_connection_retry_on_startup=True,
)


__all__ = ["SEND_PUSH_TASK_NAME", "celery_app"]
