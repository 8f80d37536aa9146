"""Storage-level guarantees: uniqueness, cascades and ordering."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from notifyhub.application.use_cases.notifications import dispatch_notification
from notifyhub.application.use_cases.users import delete_user
from notifyhub.domain.entities import Notification, RecipientSelector
from notifyhub.domain.errors import NotFoundError, ValidationError
from notifyhub.infrastructure.models import DeliveryRecordModel, NotificationModel
from notifyhub.infrastructure.repositories import NotificationRepository


def _create(session, sender_id, recipient_ids, *, sent_at=None, title="Hello"):
    return NotificationRepository(session).create_with_deliveries(
        Notification(
            id=None,
            sender_id=sender_id,
            title=title,
            body="Body",
            sent_at=sent_at or datetime(2026, 1, 1, 12, 0),
        ),
        recipient_ids,
    )


def test_duplicate_delivery_record_is_rejected(session, make_user):
    sender = make_user("Admin", is_admin=True)
    alice = make_user("Alice")
    notification = _create(session, sender.id, [alice.id])

    session.add(DeliveryRecordModel(user_id=alice.id, notification_id=notification.id))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()

    assert session.query(DeliveryRecordModel).count() == 1


def test_duplicate_recipients_roll_back_the_notification(session, make_user):
    sender = make_user("Admin", is_admin=True)
    alice = make_user("Alice")

    with pytest.raises(IntegrityError):
        _create(session, sender.id, [alice.id, alice.id])

    assert session.query(NotificationModel).count() == 0
    assert session.query(DeliveryRecordModel).count() == 0


def test_deleting_a_notification_removes_its_records(session, make_user):
    sender = make_user("Admin", is_admin=True)
    alice = make_user("Alice")
    bob = make_user("Bob")
    first = _create(session, sender.id, [alice.id, bob.id])
    second = _create(session, sender.id, [alice.id])

    assert NotificationRepository(session).delete(first.id) is True

    remaining = session.query(DeliveryRecordModel).all()
    assert [(r.user_id, r.notification_id) for r in remaining] == [(alice.id, second.id)]
    orphans = (
        session.query(DeliveryRecordModel)
        .filter(DeliveryRecordModel.notification_id == first.id)
        .count()
    )
    assert orphans == 0


def test_deleting_a_user_removes_their_records(session, make_user):
    sender = make_user("Admin", is_admin=True)
    alice = make_user("Alice")
    bob = make_user("Bob")
    notification = _create(session, sender.id, [alice.id, bob.id])

    delete_user(session, alice.id)

    records = session.query(DeliveryRecordModel).all()
    assert [r.user_id for r in records] == [bob.id]
    # The shared notification survives for the remaining recipient.
    assert NotificationRepository(session).get(notification.id) is not None


def test_deleting_unknown_user_raises(session):
    with pytest.raises(NotFoundError):
        delete_user(session, 12345)


def test_sender_with_notifications_cannot_be_deleted(session, make_user):
    sender = make_user("Admin", is_admin=True)
    alice = make_user("Alice")
    _create(session, sender.id, [alice.id])

    with pytest.raises(ValidationError):
        delete_user(session, sender.id)


def test_sent_notifications_are_paginated_newest_first(session, make_user):
    sender = make_user("Admin", is_admin=True)
    alice = make_user("Alice")
    start = datetime(2026, 1, 1, 8, 0)
    for index in range(25):
        _create(
            session,
            sender.id,
            [alice.id],
            sent_at=start + timedelta(minutes=index),
            title=f"N{index}",
        )

    repository = NotificationRepository(session)
    first_page = repository.list_sent(page=1, per_page=20)
    second_page = repository.list_sent(page=2, per_page=20)

    assert first_page.total == 25
    assert first_page.last_page == 2
    assert [n.title for n in first_page.items[:3]] == ["N24", "N23", "N22"]
    assert len(second_page.items) == 5
    assert second_page.items[-1].title == "N0"
    assert first_page.items[0].sender.name == "Admin"


def test_dispatch_writes_one_record_per_recipient(session, make_user, publisher, push_queue):
    sender = make_user("Admin", is_admin=True)
    users = [make_user(f"User {index}") for index in range(5)]

    result = dispatch_notification(
        session,
        sender_id=sender.id,
        title="Maintenance",
        body="Tonight",
        selector=RecipientSelector.explicit([user.id for user in users]),
        realtime_publisher=publisher,
        push_queue=push_queue,
    )

    deliveries = NotificationRepository(session).list_deliveries(result.notification.id)
    assert len(deliveries) == result.recipients_count == 5
    assert {delivery.notification_id for delivery in deliveries} == {result.notification.id}
