"""Use cases for managing users."""

from .create_user import create_user
from .delete_user import delete_user
from .register_push_token import register_push_token

__all__ = ["create_user", "delete_user", "register_push_token"]
