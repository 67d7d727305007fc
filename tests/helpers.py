"""Helpers shared by the test modules."""

from decimal import Decimal
from types import SimpleNamespace


def register(client, email, first_name="Test", last_name="User", password="password123"):
    """Register an account and return (user json, auth headers)."""
    response = client.post(
        "/api/register",
        json={"firstName": first_name, "lastName": last_name, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    body = response.json()
    return body["user"], {"Authorization": f"Bearer {body['token']}"}


def money(value) -> Decimal:
    """Normalise a JSON money value (string or number) for comparison."""
    return Decimal(str(value))


def record(year, month, bill, paid, utilities=()):
    """Lightweight stand-in for a Payment row."""
    return SimpleNamespace(
        year=year,
        month=month,
        rent_bill_amount=Decimal(str(bill)),
        rent_paid_amount=Decimal(str(paid)),
        utilities=[
            SimpleNamespace(category=c, bill_amount=Decimal(str(b)), paid_amount=Decimal(str(p)))
            for c, b, p in utilities
        ],
    )


def repair(status):
    return SimpleNamespace(status=status)
