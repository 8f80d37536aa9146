"""Mobile push transport."""

from .gateway import (
    FcmOptions,
    FcmPushGateway,
    classify_error,
    classify_exception,
    get_push_gateway,
    normalize_data,
)

__all__ = [
    "FcmOptions",
    "FcmPushGateway",
    "classify_error",
    "classify_exception",
    "get_push_gateway",
    "normalize_data",
]
