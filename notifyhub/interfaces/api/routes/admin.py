"""Administrator endpoints: compose, broadcast and inspect notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.notifications import (
    delete_notification as delete_notification_uc,
    dispatch_notification as dispatch_notification_uc,
    get_notification_with_stats as get_notification_with_stats_uc,
    list_recipient_candidates as list_recipient_candidates_uc,
    list_sent_notifications as list_sent_notifications_uc,
)
from notifyhub.domain.entities import DispatchResult, RecipientSelector, User
from notifyhub.domain.errors import NotificationError
from notifyhub.infrastructure.database import get_db
from notifyhub.interfaces.api.dependencies import require_admin
from notifyhub.interfaces.api.routes_helpers import (
    notification_to_schema,
    page_to_schema,
    to_http_exception,
)
from notifyhub.interfaces.api.schemas import (
    ApiResponse,
    DeliveryRead,
    DeliveryStatsRead,
    DispatchResultRead,
    NotificationBroadcastRequest,
    NotificationDetailRead,
    NotificationRead,
    NotificationSendRequest,
    Paginated,
    UserSummaryRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


def _dispatch_result_to_schema(result: DispatchResult) -> DispatchResultRead:
    return DispatchResultRead(
        notification=notification_to_schema(result.notification),
        recipients_count=result.recipients_count,
    )


@router.get("/users", response_model=ApiResponse[list[UserSummaryRead]])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Return the users that can be picked as recipients."""

    users = list_recipient_candidates_uc(db)
    return ApiResponse(
        data=[UserSummaryRead.model_validate(user) for user in users],
        message="Users retrieved successfully",
    )


@router.get("/notifications", response_model=ApiResponse[Paginated[NotificationRead]])
def list_notifications(
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    result = list_sent_notifications_uc(db, page)
    return ApiResponse(
        data=page_to_schema(result, notification_to_schema),
        message="Notifications retrieved successfully",
    )


@router.post("/notifications/send", response_model=ApiResponse[DispatchResultRead])
def send_notification(
    payload: NotificationSendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Send a notification to the selected users."""

    try:
        result = dispatch_notification_uc(
            db,
            sender_id=current_user.id,
            title=payload.title,
            body=payload.body,
            selector=RecipientSelector.explicit(payload.user_ids),
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        data=_dispatch_result_to_schema(result),
        message="Notification sent successfully",
    )


@router.post("/notifications/send-all", response_model=ApiResponse[DispatchResultRead])
def send_notification_to_all(
    payload: NotificationBroadcastRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Send a notification to every non-admin user."""

    try:
        result = dispatch_notification_uc(
            db,
            sender_id=current_user.id,
            title=payload.title,
            body=payload.body,
            selector=RecipientSelector.everyone(),
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        data=_dispatch_result_to_schema(result),
        message="Notification sent to all users",
    )


@router.get("/notifications/{notification_id}", response_model=ApiResponse[NotificationDetailRead])
def get_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    """Return a notification with per-recipient delivery state and stats."""

    try:
        detail = get_notification_with_stats_uc(db, notification_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        data=NotificationDetailRead(
            notification=notification_to_schema(detail.notification),
            deliveries=[DeliveryRead.model_validate(d) for d in detail.deliveries],
            stats=DeliveryStatsRead.model_validate(detail.stats),
        ),
        message="Notification retrieved successfully",
    )


@router.delete("/notifications/{notification_id}", response_model=ApiResponse[None])
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        delete_notification_uc(db, notification_id)
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    logger.info("Notification %s deleted by user %s", notification_id, current_user.id)
    return ApiResponse(message="Notification deleted successfully")
