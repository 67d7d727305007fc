"""API tests for ledger CSV import, the monthly breakdown and the tenant report filter."""

from decimal import Decimal

import pytest

from tests.helpers import money

HEADER = "Date,Property Name,Type,Category,Bill Amount,Paid Amount\n"
PROPERTY = '"Sunset Apartments, Unit 101"'


def upload(client, headers, body, path="/api/reports/import"):
    return client.post(path, files={"file": ("ledger.csv", body.encode("utf-8"), "text/csv")}, headers=headers)


def payments_by_month(client, headers, property_id):
    body = client.get("/api/payments", params={"property_id": property_id}, headers=headers).json()
    return {(p["year"], p["month"]): p for p in body["payments"]}


class TestLedgerImport:
    def test_earlier_month_rebills_following_record(self, client, owner, property_id):
        _, headers = owner
        client.post(
            "/api/payments",
            json={"property_id": property_id, "year": 2024, "month": 2, "rent_paid_amount": 1000},
            headers=headers,
        )

        response = upload(client, headers, HEADER + f"2024-01-01,{PROPERTY},Rent,Monthly Rent,1000,700\n")

        assert response.status_code == 200, response.text
        assert response.json() == {"imported": 1, "errors": []}
        records = payments_by_month(client, headers, property_id)
        assert money(records[(2024, 1)]["rent_paid_amount"]) == Decimal("700")
        # 1000 base rent + 300 left unpaid in January
        assert money(records[(2024, 2)]["rent_bill_amount"]) == Decimal("1300")

    def test_rows_of_one_month_merge(self, client, owner, property_id):
        _, headers = owner
        body = (
            HEADER
            + f"2024-03-01,{PROPERTY},Rent,Monthly Rent,1000,1000\n"
            + f"2024-03-01,{PROPERTY},Utility,Water,60,40\n"
        )

        assert upload(client, headers, body).json()["imported"] == 2

        march = payments_by_month(client, headers, property_id)[(2024, 3)]
        water = [u for u in march["utilities"] if u["category"] == "Water"]
        assert len(water) == 1
        assert money(water[0]["bill_amount"]) == Decimal("60")
        assert money(water[0]["paid_amount"]) == Decimal("40")

    def test_utility_row_updates_existing_record(self, client, owner, property_id):
        _, headers = owner
        client.post(
            "/api/payments",
            json={
                "property_id": property_id,
                "year": 2024,
                "month": 4,
                "rent_paid_amount": 1000,
                "utilities": [{"category": "Internet", "bill_amount": 30, "paid_amount": 30}],
            },
            headers=headers,
        )

        upload(client, headers, HEADER + f"2024-04-15,{PROPERTY},Utility,Water,25,25\n")

        april = payments_by_month(client, headers, property_id)[(2024, 4)]
        lines = {u["category"]: money(u["paid_amount"]) for u in april["utilities"]}
        assert lines == {"Internet": Decimal("30"), "Water": Decimal("25")}
        assert money(april["rent_paid_amount"]) == Decimal("1000")

    def test_repair_rows(self, client, owner, property_id):
        _, headers = owner
        body = (
            HEADER
            + f"2024-05-02,{PROPERTY},Repair,Fix boiler,200,200\n"
            + f"2024-05-03,{PROPERTY},Repair,Paint hallway,150,0\n"
        )

        assert upload(client, headers, body).json()["imported"] == 2

        repairs = {r["description"]: r for r in client.get("/api/repairs", headers=headers).json()["repairs"]}
        assert repairs["Fix boiler"]["status"] == "Complete"
        assert repairs["Fix boiler"]["completion_date"] is not None
        assert repairs["Paint hallway"]["status"] == "Pending Repairmen"

    def test_invalid_rows_reported_and_skipped(self, client, owner, property_id):
        _, headers = owner
        body = (
            HEADER
            + "2024-01-01,Nowhere House,Rent,Monthly Rent,1000,1000\n"
            + f"2024-01-01,{PROPERTY},Deposit,Key,10,10\n"
            + f"2024-01-01,{PROPERTY},Rent,Monthly Rent,lots,10\n"
            + f"not-a-date,{PROPERTY},Rent,Monthly Rent,1000,10\n"
            + f"2024-06-01,{PROPERTY},Utility,,10,10\n"
            + f"2024-06-01,{PROPERTY},Rent,Monthly Rent,1000,900\n"
        )

        result = upload(client, headers, body).json()

        assert result["imported"] == 1
        assert result["errors"] == [
            {"row": 2, "message": "Property 'Nowhere House' not found."},
            {"row": 3, "message": "Invalid Type 'Deposit'. Must be Rent, Utility, or Repair."},
            {"row": 4, "message": "Bill Amount or Paid Amount is not a valid number."},
            {"row": 5, "message": "Date 'not-a-date' is not a valid date."},
            {"row": 6, "message": "Utility rows need a Category."},
        ]
        assert list(payments_by_month(client, headers, property_id)) == [(2024, 6)]

    @pytest.mark.parametrize(
        "body",
        [
            "Date,Property Name,Type\n2024-01-01,X,Rent\n",
            HEADER,
        ],
    )
    def test_bad_file_rejected(self, client, owner, body):
        _, headers = owner
        assert upload(client, headers, body).status_code == 400

    def test_shared_property_is_not_importable(self, client, owner, viewer, property_id):
        _, owner_headers = owner
        viewer_user, viewer_headers = viewer
        client.post(
            "/api/shares",
            json={"property_ids": [property_id], "viewer_email": viewer_user["email"]},
            headers=owner_headers,
        )

        result = upload(client, viewer_headers, HEADER + f"2024-01-01,{PROPERTY},Rent,Monthly Rent,1000,1000\n").json()

        assert result["imported"] == 0
        assert result["errors"][0]["message"] == "Property 'Sunset Apartments, Unit 101' not found."
        assert payments_by_month(client, owner_headers, property_id) == {}


class TestMonthlyBreakdown:
    def test_defaults_to_newest_lease_month(self, client, owner, property_id):
        _, headers = owner
        body = client.get("/api/reports/dashboard/breakdown", params={"property_id": property_id}, headers=headers).json()

        # Lease runs through 2024
        assert len(body["months"]) == 12
        assert body["months"][0] == {"year": 2024, "month": 12, "label": "Dec 2024"}
        assert body["months"][-1]["label"] == "Jan 2024"
        assert (body["year"], body["month"]) == (2024, 12)
        assert body["has_record"] is False
        assert [c["category"] for c in body["categories"]] == ["Rent", "Water", "Internet"]
        assert all(money(c["paid"]) == 0 and money(c["total"]) == 0 for c in body["categories"])

    def test_chosen_month(self, client, owner, property_id):
        _, headers = owner
        client.post(
            "/api/payments",
            json={
                "property_id": property_id,
                "year": 2024,
                "month": 3,
                "rent_paid_amount": 900,
                "utilities": [{"category": "Water", "bill_amount": 50, "paid_amount": 20}],
            },
            headers=headers,
        )

        body = client.get(
            "/api/reports/dashboard/breakdown",
            params={"property_id": property_id, "year": 2024, "month": 3},
            headers=headers,
        ).json()

        assert body["has_record"] is True
        amounts = {c["category"]: (money(c["paid"]), money(c["total"])) for c in body["categories"]}
        assert amounts["Rent"] == (Decimal("900"), Decimal("1000"))
        assert amounts["Water"] == (Decimal("20"), Decimal("50"))
        assert amounts["Internet"] == (Decimal("0"), Decimal("0"))

    def test_year_without_month(self, client, owner, property_id):
        _, headers = owner
        response = client.get(
            "/api/reports/dashboard/breakdown",
            params={"property_id": property_id, "year": 2024},
            headers=headers,
        )
        assert response.status_code == 400

    def test_stranger_gets_404(self, client, stranger, property_id):
        _, headers = stranger
        response = client.get("/api/reports/dashboard/breakdown", params={"property_id": property_id}, headers=headers)
        assert response.status_code == 404


class TestTenantFilter:
    def test_lines_of_tenant(self, client, owner, property_id):
        _, headers = owner
        tenant_id = client.get(f"/api/properties/{property_id}", headers=headers).json()["tenants"][0]["id"]
        client.post(
            "/api/payments",
            json={"property_id": property_id, "year": 2024, "month": 1, "rent_paid_amount": 1000},
            headers=headers,
        )

        body = client.get("/api/reports", params={"tenant_id": tenant_id, "type": "Rent"}, headers=headers).json()

        assert [i["tenant_name"] for i in body["items"]] == ["John Doe"]

    def test_second_tenant_has_no_lines(self, client, owner, property_payload):
        _, headers = owner
        property_payload["tenants"].append({"name": "Jane Roe"})
        created = client.post("/api/properties", json=property_payload, headers=headers).json()
        client.post(
            "/api/payments",
            json={"property_id": created["id"], "year": 2024, "month": 1, "rent_paid_amount": 1000},
            headers=headers,
        )
        jane = [t["id"] for t in created["tenants"] if t["name"] == "Jane Roe"][0]

        body = client.get("/api/reports", params={"tenant_id": jane}, headers=headers).json()

        assert body["items"] == []

    def test_unknown_tenant(self, client, owner):
        _, headers = owner
        assert client.get("/api/reports", params={"tenant_id": 9999}, headers=headers).status_code == 404
