"""Push delivery outcomes exposed by the gateway adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PushOutcome(str, Enum):
    """Classification of one push delivery attempt."""

    SUCCESS = "success"
    INVALID_TOKEN = "invalid_token"
    TRANSIENT_FAILURE = "transient_failure"
    PERMANENT_FAILURE = "permanent_failure"
    SKIPPED = "skipped"

    @property
    def is_retryable(self) -> bool:
        return self is PushOutcome.TRANSIENT_FAILURE


@dataclass(frozen=True)
class PushResult:
    """Result of sending a message to a single device token."""

    outcome: PushOutcome
    token: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is PushOutcome.SUCCESS


@dataclass
class MulticastReport:
    """Aggregate result of a message sent to several tokens."""

    success_count: int = 0
    failure_count: int = 0
    failures: list[PushResult] = field(default_factory=list)

    def invalid_tokens(self) -> list[str]:
        return [
            failure.token
            for failure in self.failures
            if failure.outcome is PushOutcome.INVALID_TOKEN and failure.token
        ]


__all__ = ["PushOutcome", "PushResult", "MulticastReport"]
