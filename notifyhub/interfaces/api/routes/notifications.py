"""Inbox endpoints and websocket stream for the authenticated user."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
)
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.notifications import (
    delete_inbox_item as delete_inbox_item_uc,
    get_inbox_item as get_inbox_item_uc,
    list_inbox as list_inbox_uc,
    mark_all_read as mark_all_read_uc,
    mark_read as mark_read_uc,
    unread_count as unread_count_uc,
)
from notifyhub.domain.entities import User
from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure import database
from notifyhub.infrastructure.database import get_db
from notifyhub.infrastructure.notifications import build_event_payload, notification_manager
from notifyhub.infrastructure.repositories import DeliveryRecordRepository
from notifyhub.interfaces.api.dependencies import get_current_user, resolve_current_user
from notifyhub.interfaces.api.routes_helpers import (
    inbox_item_to_schema,
    page_to_schema,
    to_http_exception,
)
from notifyhub.interfaces.api.schemas import (
    ApiResponse,
    InboxItemRead,
    Paginated,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=ApiResponse[Paginated[InboxItemRead]])
def list_notifications(
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the authenticated user's notifications, newest first."""

    result = list_inbox_uc(db, current_user.id, page)
    return ApiResponse(
        data=page_to_schema(result, inbox_item_to_schema),
        message="Notifications retrieved successfully",
    )


@router.get("/unread-count", response_model=ApiResponse[UnreadCountRead])
def get_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    count = unread_count_uc(db, current_user.id)
    return ApiResponse(
        data=UnreadCountRead(count=count),
        message="Unread count retrieved successfully",
    )


@router.put("/read-all", response_model=ApiResponse[None])
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    mark_all_read_uc(db, current_user.id)
    return ApiResponse(message="All notifications marked as read")


@router.get("/{notification_id}", response_model=ApiResponse[InboxItemRead])
def get_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        item = get_inbox_item_uc(db, current_user.id, notification_id)
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        data=inbox_item_to_schema(item),
        message="Notification retrieved successfully",
    )


@router.put("/{notification_id}/read", response_model=ApiResponse[InboxItemRead])
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        item = mark_read_uc(db, current_user.id, notification_id)
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        data=inbox_item_to_schema(item),
        message="Notification marked as read",
    )


@router.delete("/{notification_id}", response_model=ApiResponse[None])
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove a notification from the user's inbox; other recipients keep it."""

    try:
        delete_inbox_item_uc(db, current_user.id, notification_id)
    except NotFoundError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(message="Notification deleted successfully")


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = database.SessionLocal()
    try:
        user = resolve_current_user(token, session)
        pending = DeliveryRecordRepository(session).list_unread_for_user(user.id)
    except HTTPException:
        await websocket.close(code=1008)
        return
    except Exception:
        logger.exception("Could not open notification stream")
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        if pending:
            await websocket.send_json(
                {
                    "type": "init",
                    "data": [
                        build_event_payload(
                            title=item.notification.title,
                            body=item.notification.body,
                            notification_id=item.notification.id,
                        )
                        for item in pending
                    ],
                }
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, ids)
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user.id, websocket)
    except Exception:
        notification_manager.disconnect(user.id, websocket)
        raise


def _acknowledge(user_id: int, notification_ids: list[object]) -> None:
    """Mark the acknowledged notifications as read for ``user_id``."""

    ack_session = database.SessionLocal()
    try:
        repository = DeliveryRecordRepository(ack_session)
        for notification_id in notification_ids:
            if isinstance(notification_id, int):
                repository.mark_read(user_id, notification_id)
    finally:
        ack_session.close()
