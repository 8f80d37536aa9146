from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from notifyhub.application.use_cases.push import (
    deliver_push_to_user,
    send_push_to_tokens,
    send_push_to_users,
)
from notifyhub.domain.entities import MulticastReport, PushOutcome, PushResult
from notifyhub.infrastructure.repositories import UserRepository


@dataclass
class FakeGateway:
    """Gateway double answering with a fixed outcome per token."""

    outcomes: dict[str, PushOutcome] = field(default_factory=dict)
    is_configured: bool = True
    sent: list[tuple[str, str, str, dict]] = field(default_factory=list)

    def send_to_token(self, token, title, body, data=None):
        self.sent.append((token, title, body, dict(data or {})))
        outcome = self.outcomes.get(token, PushOutcome.SUCCESS)
        error = None if outcome is PushOutcome.SUCCESS else outcome.value
        return PushResult(outcome=outcome, token=token, error=error)

    def send_multicast(self, tokens, title, body, data=None):
        report = MulticastReport()
        for token in tokens:
            result = self.send_to_token(token, title, body, data)
            if result.ok:
                report.success_count += 1
            else:
                report.failure_count += 1
                report.failures.append(result)
        return report


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


def test_user_without_token_is_skipped(session, make_user, gateway):
    alice = make_user("Alice")

    result = deliver_push_to_user(session, gateway, user_id=alice.id, title="Hi", body="There")

    assert result.outcome is PushOutcome.SKIPPED
    assert gateway.sent == []


def test_unknown_user_is_skipped(session, gateway):
    result = deliver_push_to_user(session, gateway, user_id=999, title="Hi", body="There")

    assert result.outcome is PushOutcome.SKIPPED
    assert gateway.sent == []


def test_unconfigured_gateway_skips_delivery(session, make_user):
    alice = make_user("Alice", push_token="tok-a", device_type="ios")
    gateway = FakeGateway(is_configured=False)

    result = deliver_push_to_user(session, gateway, user_id=alice.id, title="Hi", body="There")

    assert result.outcome is PushOutcome.SKIPPED
    assert gateway.sent == []


def test_successful_delivery_forwards_payload(session, make_user, gateway):
    alice = make_user("Alice", push_token="tok-a", device_type="android")

    result = deliver_push_to_user(
        session,
        gateway,
        user_id=alice.id,
        title="Hi",
        body="There",
        data={"notification_id": "7", "type": "notification"},
    )

    assert result.ok
    assert gateway.sent == [
        ("tok-a", "Hi", "There", {"notification_id": "7", "type": "notification"})
    ]
    assert UserRepository(session).get(alice.id).push_token == "tok-a"


def test_invalid_token_is_cleared(session, make_user):
    alice = make_user("Alice", push_token="stale", device_type="ios")
    gateway = FakeGateway(outcomes={"stale": PushOutcome.INVALID_TOKEN})

    first = deliver_push_to_user(session, gateway, user_id=alice.id, title="Hi", body="There")
    second = deliver_push_to_user(session, gateway, user_id=alice.id, title="Hi", body="Again")

    assert first.outcome is PushOutcome.INVALID_TOKEN
    assert second.outcome is PushOutcome.SKIPPED
    assert len(gateway.sent) == 1
    assert UserRepository(session).get(alice.id).push_token is None


@pytest.mark.parametrize(
    "outcome", [PushOutcome.TRANSIENT_FAILURE, PushOutcome.PERMANENT_FAILURE]
)
def test_other_failures_keep_the_token(session, make_user, outcome):
    alice = make_user("Alice", push_token="tok-a", device_type="ios")
    gateway = FakeGateway(outcomes={"tok-a": outcome})

    result = deliver_push_to_user(session, gateway, user_id=alice.id, title="Hi", body="There")

    assert result.outcome is outcome
    assert UserRepository(session).get(alice.id).push_token == "tok-a"


def test_multicast_clears_only_invalid_tokens(session, make_user):
    alice = make_user("Alice", push_token="tok-a", device_type="ios")
    bob = make_user("Bob", push_token="tok-b", device_type="android")
    carol = make_user("Carol")
    gateway = FakeGateway(outcomes={"tok-b": PushOutcome.INVALID_TOKEN})

    report = send_push_to_users(
        session, gateway, [alice, bob, carol], title="Hi", body="All"
    )

    assert report.success_count == 1
    assert report.failure_count == 1
    assert report.invalid_tokens() == ["tok-b"]
    assert [sent[0] for sent in gateway.sent] == ["tok-a", "tok-b"]
    repository = UserRepository(session)
    assert repository.get(alice.id).push_token == "tok-a"
    assert repository.get(bob.id).push_token is None


def test_multicast_without_tokens_sends_nothing(session, gateway):
    report = send_push_to_tokens(session, gateway, ["", None], title="Hi", body="There")

    assert report.success_count == 0
    assert report.failure_count == 0
    assert gateway.sent == []
