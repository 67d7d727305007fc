"""API tests for registration, login and token handling."""

from fastapi.testclient import TestClient

from main import app
from services.property_service import PropertyService
from tests.helpers import register


def test_register_and_me(client):
    user, headers = register(client, "New.Person@Example.com", "New", "Person")
    assert user["email"] == "new.person@example.com"

    me = client.get("/api/me", headers=headers)
    assert me.status_code == 200
    assert me.json()["first_name"] == "New"


def test_duplicate_email(client, owner):
    response = client.post(
        "/api/register",
        json={"firstName": "A", "lastName": "B", "email": "owner@example.com", "password": "password123"},
    )
    assert response.status_code == 400


def test_short_password_rejected(client):
    response = client.post(
        "/api/register",
        json={"firstName": "A", "lastName": "B", "email": "a@example.com", "password": "short"},
    )
    assert response.status_code == 422


def test_login(client, owner):
    ok = client.post("/api/login", json={"email": "owner@example.com", "password": "password123"})
    wrong = client.post("/api/login", json={"email": "owner@example.com", "password": "nope-nope"})
    unknown = client.post("/api/login", json={"email": "ghost@example.com", "password": "password123"})

    assert ok.status_code == 200
    assert ok.json()["token"]
    assert wrong.status_code == 401
    assert unknown.status_code == 401


def test_missing_and_invalid_tokens(client):
    assert client.get("/api/me").status_code == 401
    assert client.get("/api/me", headers={"Authorization": "Bearer not-a-jwt"}).status_code == 403


def test_unknown_route(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_unexpected_value_error_is_a_server_error(client, owner, monkeypatch):
    _, headers = owner

    def broken(*args, **kwargs):
        raise ValueError("column index out of range")

    monkeypatch.setattr(PropertyService, "list_properties", staticmethod(broken))

    response = TestClient(app, raise_server_exceptions=False).get("/api/properties", headers=headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
