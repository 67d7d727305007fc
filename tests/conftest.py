"""Pytest configuration and shared fixtures for API tests."""

import os

# Point the app at an in-memory database BEFORE importing it
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.pop("BREVO_API_KEY", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import database
from database import get_session
from main import app
from models import Base
from tests.helpers import register


TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=database.engine,
)


@pytest.fixture(autouse=True)
def no_email(monkeypatch):
    """Never talk to the email provider from tests."""
    monkeypatch.delenv("BREVO_API_KEY", raising=False)


@pytest.fixture(scope="function")
def test_db_session():
    """Provide a test database session with all tables created."""
    Base.metadata.create_all(bind=database.engine)
    session = TestingSessionLocal()

    def override_get_session():
        request_session = TestingSessionLocal()
        try:
            yield request_session
            request_session.commit()
        except Exception:
            request_session.rollback()
            raise
        finally:
            request_session.close()

    app.dependency_overrides[get_session] = override_get_session

    yield session

    session.close()
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=database.engine)


@pytest.fixture
def client(test_db_session):
    """Provide a FastAPI test client with test database."""
    return TestClient(app)


@pytest.fixture
def owner(client):
    return register(client, "owner@example.com", "Olivia", "Owner")


@pytest.fixture
def viewer(client):
    return register(client, "viewer@example.com", "Victor", "Viewer")


@pytest.fixture
def stranger(client):
    return register(client, "stranger@example.com", "Sam", "Stranger")


@pytest.fixture
def property_payload() -> dict:
    return {
        "name": "Sunset Apartments, Unit 101",
        "address": "123 Ocean View Dr",
        "tenants": [{"name": "John Doe", "phone": "555-1234", "email": "john.doe@example.com"}],
        "lease_start": "2024-01-01",
        "lease_end": "2024-12-31",
        "security_deposit": 1000,
        "rent_amount": 1000,
        "utilities_to_track": ["Water", "Internet"],
    }


@pytest.fixture
def property_id(client, owner, property_payload) -> int:
    _, headers = owner
    response = client.post("/api/properties", json=property_payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]

