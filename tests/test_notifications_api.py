"""API tests for notifications between accounts."""

import pytest
import requests

from services import notification_service


def send(client, headers, recipient_email, message="Rent is due"):
    return client.post(
        "/api/notifications",
        json={"recipient_email": recipient_email, "message": message},
        headers=headers,
    )


def test_send_and_receive(client, owner, viewer):
    _, owner_headers = owner
    viewer_user, viewer_headers = viewer

    response = send(client, owner_headers, viewer_user["email"])
    assert response.status_code == 201
    assert response.json()["sender_name"] == "Olivia Owner"

    received = client.get("/api/notifications/received", headers=viewer_headers).json()
    sent = client.get("/api/notifications/sent", headers=owner_headers).json()
    assert [n["message"] for n in received] == ["Rent is due"]
    assert [n["recipient_email"] for n in sent] == [viewer_user["email"]]


def test_only_recipient_can_acknowledge(client, owner, viewer):
    _, owner_headers = owner
    viewer_user, viewer_headers = viewer
    notification_id = send(client, owner_headers, viewer_user["email"]).json()["id"]

    assert client.patch(f"/api/notifications/{notification_id}/acknowledge", headers=owner_headers).status_code == 404

    response = client.patch(f"/api/notifications/{notification_id}/acknowledge", headers=viewer_headers)
    assert response.status_code == 200
    assert response.json()["is_acknowledged"] is True


def test_cannot_notify_self(client, owner):
    owner_user, headers = owner
    assert send(client, headers, owner_user["email"]).status_code == 400


def test_delete_by_sender(client, owner, viewer):
    _, owner_headers = owner
    viewer_user, viewer_headers = viewer
    notification_id = send(client, owner_headers, viewer_user["email"]).json()["id"]

    assert client.delete(f"/api/notifications/{notification_id}", headers=owner_headers).status_code == 204
    assert client.get("/api/notifications/received", headers=viewer_headers).json() == []


@pytest.mark.parametrize("error", [requests.ConnectionError("down"), RuntimeError("Brevo error")])
def test_email_failure_keeps_notification(client, owner, viewer, monkeypatch, error):
    _, owner_headers = owner
    viewer_user, viewer_headers = viewer

    def failing_send(*args, **kwargs):
        raise error

    monkeypatch.setattr(notification_service, "email_delivery_enabled", lambda: True)
    monkeypatch.setattr(notification_service, "send_notification_email", failing_send)

    assert send(client, owner_headers, viewer_user["email"]).status_code == 201
    assert len(client.get("/api/notifications/received", headers=viewer_headers).json()) == 1


def test_unread_count(client, owner, viewer):
    _, owner_headers = owner
    viewer_user, viewer_headers = viewer
    first = send(client, owner_headers, viewer_user["email"]).json()["id"]
    send(client, owner_headers, viewer_user["email"], message="Water bill attached")

    assert client.get("/api/notifications/unread-count", headers=viewer_headers).json() == {"count": 2}
    assert client.get("/api/notifications/unread-count", headers=owner_headers).json() == {"count": 0}

    client.patch(f"/api/notifications/{first}/acknowledge", headers=viewer_headers)
    assert client.get("/api/notifications/unread-count", headers=viewer_headers).json() == {"count": 1}
