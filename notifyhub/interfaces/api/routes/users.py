"""Endpoints for the authenticated user's own profile."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.users import register_push_token as register_push_token_uc
from notifyhub.domain.entities import User
from notifyhub.domain.errors import NotificationError
from notifyhub.infrastructure.database import get_db
from notifyhub.interfaces.api.dependencies import get_current_user
from notifyhub.interfaces.api.routes_helpers import to_http_exception
from notifyhub.interfaces.api.schemas import ApiResponse, PushTokenUpdate, UserRead

router = APIRouter(prefix="/user", tags=["user"])


@router.get("", response_model=ApiResponse[UserRead])
def read_current_user(current_user: User = Depends(get_current_user)):
    return ApiResponse(
        data=UserRead.model_validate(current_user),
        message="User retrieved successfully",
    )


@router.put("/push-token", response_model=ApiResponse[UserRead])
def update_push_token(
    payload: PushTokenUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Register the device that receives push notifications for this user."""

    try:
        user = register_push_token_uc(
            db,
            current_user.id,
            push_token=payload.push_token,
            device_type=payload.device_type,
        )
    except NotificationError as exc:
        raise to_http_exception(exc) from exc
    return ApiResponse(
        data=UserRead.model_validate(user),
        message="Push token updated successfully",
    )
