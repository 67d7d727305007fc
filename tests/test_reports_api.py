"""API tests for reports, CSV export, dashboard and duplicate repairs."""

import csv
import io
from decimal import Decimal

import pytest

from tests.helpers import money


@pytest.fixture
def ledger(client, owner, property_id):
    """Two months of records plus one open and one completed repair."""
    _, headers = owner
    client.post(
        "/api/payments",
        json={
            "property_id": property_id,
            "year": 2024,
            "month": 1,
            "rent_paid_amount": 800,
            "utilities": [{"category": "Water", "bill_amount": 50, "paid_amount": 50}],
        },
        headers=headers,
    )
    client.post(
        "/api/payments",
        json={"property_id": property_id, "year": 2024, "month": 2, "rent_paid_amount": 1200},
        headers=headers,
    )
    client.post(
        "/api/repairs",
        json={"property_id": property_id, "description": "Roof leak", "cost": 300,
              "request_date": "2024-02-10T09:00:00"},
        headers=headers,
    )
    client.post(
        "/api/repairs",
        json={"property_id": property_id, "description": "Door lock", "cost": 80, "status": "Complete",
              "request_date": "2024-01-20T09:00:00"},
        headers=headers,
    )
    return headers


class TestReport:
    def test_lines_and_totals(self, client, ledger):
        body = client.get("/api/reports", headers=ledger).json()

        types = sorted(item["type"] for item in body["items"])
        # February picks up the tracked Water and Internet lines at 0/0
        assert types == ["Rent", "Rent", "Repair", "Repair", "Utility", "Utility", "Utility"]

        totals = body["totals"]
        # rent 1000 + 1200, water 50, repairs 300 + 80
        assert money(totals["bill_amount"]) == Decimal("2630")
        assert money(totals["paid_amount"]) == Decimal("2130")
        assert money(totals["balance"]) == Decimal("500")

    def test_newest_first(self, client, ledger):
        dates = [item["date"] for item in client.get("/api/reports", headers=ledger).json()["items"]]
        assert dates == sorted(dates, reverse=True)

    def test_filter_by_type_and_status(self, client, ledger):
        rent = client.get("/api/reports", params={"type": "Rent", "status": "outstanding"}, headers=ledger).json()
        assert [money(i["balance"]) for i in rent["items"]] == [Decimal("200")]

        open_repairs = client.get("/api/reports", params={"repair_status": "open"}, headers=ledger).json()
        assert [i["category"] for i in open_repairs["items"]] == ["Roof leak"]

    def test_date_window(self, client, ledger):
        body = client.get(
            "/api/reports",
            params={"start_date": "2024-02-01", "end_date": "2024-02-28"},
            headers=ledger,
        ).json()
        assert sorted(i["type"] for i in body["items"]) == ["Rent", "Repair", "Utility", "Utility"]

    def test_csv_export(self, client, ledger):
        response = client.get("/api/reports/export", params={"type": "Rent"}, headers=ledger)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        rows = list(csv.reader(io.StringIO(response.text)))
        assert rows[0] == ["Date", "Property Name", "Tenant Name", "Type", "Category",
                           "Bill Amount", "Paid Amount", "Balance"]
        assert len(rows) == 3
        assert rows[1][2] == "John Doe"


def test_dashboard(client, ledger, property_id):
    body = client.get("/api/reports/dashboard", headers=ledger).json()

    assert money(body["total_billed"]) == Decimal("2630")
    assert money(body["total_collected"]) == Decimal("2130")
    assert money(body["total_outstanding"]) == Decimal("500")
    assert body["open_repairs"] == 1
    assert money(body["completed_repair_cost"]) == Decimal("80")
    assert body["current_month_collection_rate"] == 100.0
    # January rent shortfall and one open repair
    assert body["properties_by_health"] == [
        {"property_id": property_id, "name": "Sunset Apartments, Unit 101", "score": 85}
    ]


def test_duplicate_repairs(client, owner, property_id):
    _, headers = owner
    for _ in range(2):
        client.post(
            "/api/repairs",
            json={"property_id": property_id, "description": "Replace filter", "cost": 40},
            headers=headers,
        )
    client.post(
        "/api/repairs",
        json={"property_id": property_id, "description": "Replace filter", "cost": 45},
        headers=headers,
    )

    groups = client.get("/api/reports/duplicates/repairs", headers=headers).json()
    assert len(groups) == 1
    assert groups[0]["description"] == "Replace filter"
    assert len(groups[0]["repair_ids"]) == 2
