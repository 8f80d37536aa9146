"""Helper utilities shared across API route handlers."""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notifyhub.domain.entities import InboxItem, Notification, Page
from notifyhub.domain.errors import (
    NoRecipientsError,
    NotFoundError,
    NotificationError,
    ValidationError,
)
from notifyhub.interfaces.api.schemas import InboxItemRead, NotificationRead, Paginated

T = TypeVar("T")

logger = logging.getLogger(__name__)


def envelope(data: Any = None, message: str = "", *, success: bool = True) -> dict[str, Any]:
    """Build the ``{success, data, message}`` body returned by every endpoint."""

    return {"success": success, "data": data, "message": message}


def to_http_exception(exc: NotificationError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""

    if isinstance(exc, (ValidationError, NoRecipientsError)):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=exc.message)


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(None, str(exc.detail), success=False),
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "The given data was invalid")
    if location:
        message = f"{location}: {message}"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope({"errors": errors}, message, success=False),
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(None, "Server Error", success=False),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render errors with the same envelope as successful responses."""

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


def notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def inbox_item_to_schema(item: InboxItem) -> InboxItemRead:
    delivery = item.delivery
    return InboxItemRead(
        id=delivery.id or 0,
        user_id=delivery.user_id,
        notification_id=delivery.notification_id,
        read=delivery.read,
        read_at=delivery.read_at,
        created_at=delivery.created_at,
        updated_at=delivery.updated_at,
        notification=notification_to_schema(item.notification),
    )


def page_to_schema(page: Page[T], convert: Callable[[T], Any]) -> Paginated[Any]:
    return Paginated[Any](
        data=[convert(item) for item in page.items],
        current_page=page.page,
        per_page=page.per_page,
        total=page.total,
        last_page=page.last_page,
    )
