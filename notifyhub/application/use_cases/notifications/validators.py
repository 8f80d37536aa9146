"""Validation helpers for notification content."""

from notifyhub.domain.errors import ValidationError

TITLE_MAX_LENGTH = 255
BODY_MAX_LENGTH = 5000


def ensure_valid_title(title: str | None) -> str:
    """Return ``title`` stripped or raise ``ValidationError``."""

    normalized = (title or "").strip()
    if not normalized:
        raise ValidationError("The title field is required")
    if len(normalized) > TITLE_MAX_LENGTH:
        raise ValidationError(f"The title may not be greater than {TITLE_MAX_LENGTH} characters")
    return normalized


def ensure_valid_body(body: str | None) -> str:
    """Return ``body`` stripped or raise ``ValidationError``."""

    normalized = (body or "").strip()
    if not normalized:
        raise ValidationError("The body field is required")
    if len(normalized) > BODY_MAX_LENGTH:
        raise ValidationError(f"The body may not be greater than {BODY_MAX_LENGTH} characters")
    return normalized
