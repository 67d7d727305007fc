"""API tests for properties and their health score."""

from decimal import Decimal

from tests.helpers import money


class TestPropertyCrud:
    def test_create_returns_tenants_and_owner(self, client, owner, property_payload):
        user, headers = owner
        response = client.post("/api/properties", json=property_payload, headers=headers)

        assert response.status_code == 201
        body = response.json()
        assert body["owner_id"] == user["id"]
        assert body["tenants"][0]["name"] == "John Doe"
        assert money(body["rent_amount"]) == Decimal("1000")
        assert body["read_only"] is False

    def test_lease_end_before_start_rejected(self, client, owner, property_payload):
        _, headers = owner
        property_payload["lease_end"] = "2023-06-30"
        response = client.post("/api/properties", json=property_payload, headers=headers)
        assert response.status_code == 422

    def test_search_matches_name_or_address(self, client, owner, property_payload):
        _, headers = owner
        client.post("/api/properties", json=property_payload, headers=headers)
        client.post(
            "/api/properties",
            json={"name": "Harbor Loft", "address": "9 Pier Rd", "rent_amount": 900},
            headers=headers,
        )

        by_name = client.get("/api/properties", params={"q": "harbor"}, headers=headers).json()
        by_address = client.get("/api/properties", params={"q": "OCEAN"}, headers=headers).json()
        everything = client.get("/api/properties", headers=headers).json()

        assert [p["name"] for p in by_name] == ["Harbor Loft"]
        assert [p["name"] for p in by_address] == ["Sunset Apartments, Unit 101"]
        assert len(everything) == 2

    def test_update_replaces_tenants(self, client, owner, property_id):
        _, headers = owner
        response = client.put(
            f"/api/properties/{property_id}",
            json={"rent_amount": 1100, "tenants": [{"name": "Jane Roe"}]},
            headers=headers,
        )

        body = response.json()
        assert money(body["rent_amount"]) == Decimal("1100")
        assert [t["name"] for t in body["tenants"]] == ["Jane Roe"]
        assert body["name"] == "Sunset Apartments, Unit 101"

    def test_update_with_bad_lease_window(self, client, owner, property_id):
        _, headers = owner
        response = client.put(f"/api/properties/{property_id}", json={"lease_end": "2023-01-01"}, headers=headers)
        assert response.status_code == 400

    def test_delete_removes_payments(self, client, owner, property_id):
        _, headers = owner
        client.post("/api/payments", json={"property_id": property_id, "year": 2024, "month": 1}, headers=headers)

        assert client.delete(f"/api/properties/{property_id}", headers=headers).status_code == 204
        assert client.get(f"/api/properties/{property_id}", headers=headers).status_code == 404
        response = client.get("/api/payments", params={"property_id": property_id}, headers=headers)
        assert response.status_code == 404

    def test_stranger_cannot_see_property(self, client, stranger, property_id):
        _, headers = stranger
        assert client.get(f"/api/properties/{property_id}", headers=headers).status_code == 404
        assert client.get("/api/properties", headers=headers).json() == []


class TestHealthScore:
    def test_neutral_without_payments(self, client, owner, property_id):
        _, headers = owner
        response = client.get(f"/api/properties/{property_id}/health-score", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"property_id": property_id, "score": 75}

    def test_penalties_for_past_shortfalls_and_open_repairs(self, client, owner, property_id):
        _, headers = owner
        client.post(
            "/api/payments",
            json={
                "property_id": property_id,
                "year": 2024,
                "month": 1,
                "rent_paid_amount": 900,
                "utilities": [{"category": "Water", "bill_amount": 50, "paid_amount": 20}],
            },
            headers=headers,
        )
        client.post(
            "/api/repairs",
            json={"property_id": property_id, "description": "Broken heater", "cost": 200},
            headers=headers,
        )

        response = client.get(f"/api/properties/{property_id}/health-score", headers=headers)
        assert response.json()["score"] == 100 - 10 - 2 - 5
