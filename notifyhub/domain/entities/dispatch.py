"""Value objects used by the dispatch engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .notification import Notification


@dataclass(frozen=True)
class RecipientSelector:
    """Describe who a notification is addressed to.

    Either an explicit list of user identifiers or every non-admin user.
    """

    user_ids: tuple[int, ...] = ()
    all_users: bool = False

    @classmethod
    def explicit(cls, user_ids: Iterable[int]) -> "RecipientSelector":
        ordered: list[int] = []
        seen: set[int] = set()
        for user_id in user_ids:
            if user_id in seen:
                continue
            seen.add(user_id)
            ordered.append(user_id)
        return cls(user_ids=tuple(ordered), all_users=False)

    @classmethod
    def everyone(cls) -> "RecipientSelector":
        return cls(user_ids=(), all_users=True)


@dataclass
class DispatchResult:
    """Outcome of a committed dispatch."""

    notification: Notification
    recipients_count: int


__all__ = ["RecipientSelector", "DispatchResult"]
