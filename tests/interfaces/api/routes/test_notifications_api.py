"""End-to-end tests for the notification HTTP endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from notifyhub.infrastructure.notifications import realtime_event_publisher
from notifyhub.infrastructure.tasks import push_task_queue


@pytest.fixture()
def client(monkeypatch, publisher, push_queue):
    """Return a test client whose delivery channels record instead of sending."""

    monkeypatch.setattr(realtime_event_publisher, "publish", publisher.publish)
    monkeypatch.setattr(push_task_queue, "enqueue", push_queue.enqueue)

    from main import create_app

    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def admin(make_user):
    return make_user("Admin", is_admin=True)


def test_requests_without_token_are_rejected(client):
    response = client.get("/notifications/")

    assert response.status_code == 401
    assert response.json() == {"success": False, "data": None, "message": "Unauthenticated"}


def test_invalid_token_is_rejected(client):
    response = client.get("/notifications/", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.json()["success"] is False


def test_admin_routes_require_admin(client, make_user, auth_headers):
    alice = make_user("Alice")

    response = client.post(
        "/admin/notifications/send",
        json={"title": "Hi", "body": "There", "user_ids": [alice.id]},
        headers=auth_headers(alice),
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Unauthorized. Admin access required."


def test_send_and_read_flow(client, admin, make_user, auth_headers, publisher, push_queue):
    alice = make_user("Alice")
    bob = make_user("Bob")

    response = client.post(
        "/admin/notifications/send",
        json={"title": "Release", "body": "v2 is out", "user_ids": [alice.id, bob.id, 999]},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Notification sent successfully"
    assert body["data"]["recipients_count"] == 2
    notification = body["data"]["notification"]
    assert notification["recipient_ids"] == [alice.id, bob.id]
    assert notification["sender"]["id"] == admin.id
    assert [event[0] for event in publisher.events] == [alice.id, bob.id]
    assert [job[0] for job in push_queue.jobs] == [alice.id, bob.id]

    inbox = client.get("/notifications/", headers=auth_headers(alice)).json()
    assert inbox["data"]["total"] == 1
    assert inbox["data"]["per_page"] == 20
    assert inbox["data"]["current_page"] == 1
    assert inbox["data"]["last_page"] == 1
    [item] = inbox["data"]["data"]
    assert item["read"] is False
    assert item["notification"]["title"] == "Release"

    count = client.get("/notifications/unread-count", headers=auth_headers(alice)).json()
    assert count["data"] == {"count": 1}

    read = client.put(f"/notifications/{notification['id']}/read", headers=auth_headers(alice))
    assert read.status_code == 200
    assert read.json()["data"]["read"] is True
    assert read.json()["data"]["read_at"] is not None

    detail = client.get(
        f"/admin/notifications/{notification['id']}", headers=auth_headers(admin)
    ).json()["data"]
    assert detail["stats"] == {"total_recipients": 2, "read_count": 1, "unread_count": 1}


def test_send_with_no_valid_recipients(client, admin, auth_headers):
    response = client.post(
        "/admin/notifications/send",
        json={"title": "Hi", "body": "There", "user_ids": [998, 999]},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "data": None, "message": "No valid users found"}


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "body": "There", "user_ids": [1]},
        {"title": "x" * 256, "body": "There", "user_ids": [1]},
        {"title": "Hi", "body": "b" * 5001, "user_ids": [1]},
        {"title": "Hi", "body": "There", "user_ids": []},
        {"title": "   ", "body": "There", "user_ids": [1]},
    ],
)
def test_send_rejects_invalid_payloads(client, admin, auth_headers, publisher, payload):
    response = client.post(
        "/admin/notifications/send", json=payload, headers=auth_headers(admin)
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert publisher.events == []


def test_send_all_targets_non_admins(client, admin, make_user, auth_headers, push_queue):
    make_user("Alice")
    make_user("Bob")

    response = client.post(
        "/admin/notifications/send-all",
        json={"title": "Hello", "body": "Everyone"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["data"]["recipients_count"] == 2
    assert admin.id not in [job[0] for job in push_queue.jobs]


def test_send_all_without_users(client, admin, auth_headers):
    response = client.post(
        "/admin/notifications/send-all",
        json={"title": "Hello", "body": "Nobody"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
    assert response.json()["message"] == "No users found"


def test_inbox_is_private(client, admin, make_user, auth_headers):
    alice = make_user("Alice")
    bob = make_user("Bob")
    sent = client.post(
        "/admin/notifications/send",
        json={"title": "Private", "body": "For Alice", "user_ids": [alice.id]},
        headers=auth_headers(admin),
    ).json()["data"]["notification"]

    for method, path in [
        ("get", f"/notifications/{sent['id']}"),
        ("put", f"/notifications/{sent['id']}/read"),
        ("delete", f"/notifications/{sent['id']}"),
    ]:
        response = client.request(method.upper(), path, headers=auth_headers(bob))
        assert response.status_code == 404
        assert response.json()["message"] == "Notification not found"

    deleted = client.delete(f"/notifications/{sent['id']}", headers=auth_headers(alice))
    assert deleted.status_code == 200
    assert client.get("/notifications/", headers=auth_headers(alice)).json()["data"]["total"] == 0


def test_mark_all_read(client, admin, make_user, auth_headers):
    alice = make_user("Alice")
    for title in ("One", "Two"):
        client.post(
            "/admin/notifications/send",
            json={"title": title, "body": "Body", "user_ids": [alice.id]},
            headers=auth_headers(admin),
        )

    response = client.put("/notifications/read-all", headers=auth_headers(alice))

    assert response.status_code == 200
    assert response.json()["message"] == "All notifications marked as read"
    count = client.get("/notifications/unread-count", headers=auth_headers(alice)).json()
    assert count["data"]["count"] == 0


def test_admin_list_and_delete(client, admin, make_user, auth_headers):
    alice = make_user("Alice")
    sent = client.post(
        "/admin/notifications/send",
        json={"title": "Temp", "body": "Body", "user_ids": [alice.id]},
        headers=auth_headers(admin),
    ).json()["data"]["notification"]

    listing = client.get("/admin/notifications", headers=auth_headers(admin)).json()
    assert [n["id"] for n in listing["data"]["data"]] == [sent["id"]]

    users = client.get("/admin/users", headers=auth_headers(admin)).json()
    assert [u["name"] for u in users["data"]] == ["Alice"]

    deleted = client.delete(f"/admin/notifications/{sent['id']}", headers=auth_headers(admin))
    assert deleted.status_code == 200
    missing = client.get(f"/admin/notifications/{sent['id']}", headers=auth_headers(admin))
    assert missing.status_code == 404
    assert client.get("/notifications/", headers=auth_headers(alice)).json()["data"]["total"] == 0


def test_register_push_token(client, make_user, auth_headers):
    alice = make_user("Alice")

    response = client.put(
        "/user/push-token",
        json={"push_token": "device-token", "device_type": "android"},
        headers=auth_headers(alice),
    )

    assert response.status_code == 200
    assert response.json()["data"]["push_token"] == "device-token"
    assert response.json()["data"]["device_type"] == "android"

    invalid = client.put(
        "/user/push-token",
        json={"push_token": "device-token", "device_type": "windows"},
        headers=auth_headers(alice),
    )
    assert invalid.status_code == 400

    me = client.get("/user", headers=auth_headers(alice)).json()["data"]
    assert me["push_token"] == "device-token"


def test_websocket_sends_unread_backlog_and_handles_ack(client, admin, make_user, auth_headers):
    alice = make_user("Alice")
    sent = client.post(
        "/admin/notifications/send",
        json={"title": "Queued", "body": "While offline", "user_ids": [alice.id]},
        headers=auth_headers(admin),
    ).json()["data"]["notification"]
    token = auth_headers(alice)["Authorization"].split(" ", 1)[1]

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert init["data"] == [
            {"notification_id": sent["id"], "title": "Queued", "body": "While offline"}
        ]
        websocket.send_json({"type": "ack", "ids": [sent["id"]]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    count = client.get("/notifications/unread-count", headers=auth_headers(alice)).json()
    assert count["data"]["count"] == 0


def test_connected_recipient_receives_live_event(monkeypatch, make_user, auth_headers, push_queue):
    monkeypatch.setattr(push_task_queue, "enqueue", push_queue.enqueue)
    admin = make_user("Admin", is_admin=True)
    alice = make_user("Alice")
    token = auth_headers(alice)["Authorization"].split(" ", 1)[1]

    from main import create_app

    with TestClient(create_app()) as client:
        with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
            sent = client.post(
                "/admin/notifications/send",
                json={"title": "Live", "body": "Right now", "user_ids": [alice.id]},
                headers=auth_headers(admin),
            ).json()["data"]["notification"]

            event = websocket.receive_json()

    assert event == {
        "type": "notification",
        "data": {"notification_id": sent["id"], "title": "Live", "body": "Right now"},
    }


def test_unexpected_errors_use_the_envelope(monkeypatch, make_user, auth_headers):
    from notifyhub.interfaces.api.routes import notifications as notification_routes

    def broken_unread_count(db, user_id):
        raise RuntimeError("database went away")

    monkeypatch.setattr(notification_routes, "unread_count_uc", broken_unread_count)
    alice = make_user("Alice")

    from main import create_app

    with TestClient(create_app(), raise_server_exceptions=False) as client:
        response = client.get("/notifications/unread-count", headers=auth_headers(alice))

    assert response.status_code == 500
    assert response.json() == {"success": False, "data": None, "message": "Server Error"}
