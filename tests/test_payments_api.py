"""API tests for monthly payment records and rent carry-forward."""

from decimal import Decimal

from tests.helpers import money


def create_payment(client, headers, property_id, year, month, **fields):
    payload = {"property_id": property_id, "year": year, "month": month}
    payload.update(fields)
    return client.post("/api/payments", json=payload, headers=headers)


def bills_by_month(client, headers, property_id):
    response = client.get("/api/payments", params={"property_id": property_id}, headers=headers)
    assert response.status_code == 200
    return {(p["year"], p["month"]): money(p["rent_bill_amount"]) for p in response.json()["payments"]}


class TestCreatePayment:
    def test_defaults_to_base_rent_and_tracked_utilities(self, client, owner, property_id):
        _, headers = owner
        response = create_payment(client, headers, property_id, 2024, 1)

        assert response.status_code == 201
        body = response.json()
        assert money(body["rent_bill_amount"]) == Decimal("1000")
        assert [u["category"] for u in body["utilities"]] == ["Water", "Internet"]
        assert all(money(u["bill_amount"]) == 0 for u in body["utilities"])
        assert body["payment_date"] is None

    def test_new_month_inherits_unpaid_balance(self, client, owner, property_id):
        _, headers = owner
        create_payment(client, headers, property_id, 2024, 1, rent_paid_amount=800)
        response = create_payment(client, headers, property_id, 2024, 2)

        assert money(response.json()["rent_bill_amount"]) == Decimal("1200")

    def test_payment_date_stamped_when_paid(self, client, owner, property_id):
        _, headers = owner
        response = create_payment(client, headers, property_id, 2024, 1, rent_paid_amount=1000)
        assert response.json()["payment_date"] is not None

    def test_duplicate_month_conflicts(self, client, owner, property_id):
        _, headers = owner
        create_payment(client, headers, property_id, 2024, 1)
        response = create_payment(client, headers, property_id, 2024, 1)
        assert response.status_code == 409

    def test_invalid_month_rejected(self, client, owner, property_id):
        _, headers = owner
        response = create_payment(client, headers, property_id, 2024, 13)
        assert response.status_code == 422

    def test_inserting_earlier_month_rebills_the_next(self, client, owner, property_id):
        _, headers = owner
        create_payment(client, headers, property_id, 2024, 3)
        create_payment(client, headers, property_id, 2024, 1, rent_paid_amount=600)

        assert bills_by_month(client, headers, property_id)[(2024, 3)] == Decimal("1400")

    def test_requires_authentication(self, client, property_id):
        response = client.post("/api/payments", json={"property_id": property_id, "year": 2024, "month": 1})
        assert response.status_code == 401


class TestUpdatePayment:
    def test_edit_cascades_through_following_months(self, client, owner, property_id):
        _, headers = owner
        jan = create_payment(client, headers, property_id, 2024, 1, rent_paid_amount=1000).json()
        create_payment(client, headers, property_id, 2024, 2, rent_paid_amount=500)
        create_payment(client, headers, property_id, 2024, 3)

        response = client.put(f"/api/payments/{jan['id']}", json={"rent_paid_amount": 700}, headers=headers)
        assert response.status_code == 200

        bills = bills_by_month(client, headers, property_id)
        assert bills[(2024, 2)] == Decimal("1300")
        assert bills[(2024, 3)] == Decimal("1800")

    def test_utilities_replaced(self, client, owner, property_id):
        _, headers = owner
        jan = create_payment(client, headers, property_id, 2024, 1).json()
        response = client.put(
            f"/api/payments/{jan['id']}",
            json={"utilities": [{"category": "Water", "bill_amount": 50, "paid_amount": 50}]},
            headers=headers,
        )

        body = response.json()
        assert [u["category"] for u in body["utilities"]] == ["Water"]
        assert body["payment_date"] is not None

    def test_utility_shortfall_not_carried(self, client, owner, property_id):
        _, headers = owner
        create_payment(
            client, headers, property_id, 2024, 1,
            rent_paid_amount=1000,
            utilities=[{"category": "Water", "bill_amount": 80, "paid_amount": 0}],
        )
        feb = create_payment(client, headers, property_id, 2024, 2).json()
        assert money(feb["rent_bill_amount"]) == Decimal("1000")


class TestDeletePayment:
    def test_delete_rebills_against_new_predecessor(self, client, owner, property_id):
        _, headers = owner
        create_payment(client, headers, property_id, 2024, 1, rent_paid_amount=700)
        feb = create_payment(client, headers, property_id, 2024, 2, rent_paid_amount=1300).json()
        create_payment(client, headers, property_id, 2024, 3)

        response = client.delete(f"/api/payments/{feb['id']}", headers=headers)
        assert response.status_code == 204

        bills = bills_by_month(client, headers, property_id)
        assert (2024, 2) not in bills
        assert bills[(2024, 3)] == Decimal("1300")

    def test_deleting_first_record_resets_next_to_base_rent(self, client, owner, property_id):
        _, headers = owner
        jan = create_payment(client, headers, property_id, 2024, 1, rent_paid_amount=0).json()
        create_payment(client, headers, property_id, 2024, 2)

        client.delete(f"/api/payments/{jan['id']}", headers=headers)
        assert bills_by_month(client, headers, property_id)[(2024, 2)] == Decimal("1000")

    def test_delete_unknown_payment(self, client, owner, property_id):
        _, headers = owner
        assert client.delete("/api/payments/999", headers=headers).status_code == 404


def test_list_is_newest_first(client, owner, property_id):
    _, headers = owner
    create_payment(client, headers, property_id, 2023, 12)
    create_payment(client, headers, property_id, 2024, 2)
    create_payment(client, headers, property_id, 2024, 1)

    response = client.get("/api/payments", params={"property_id": property_id}, headers=headers)
    body = response.json()
    assert body["total"] == 3
    assert [(p["year"], p["month"]) for p in body["payments"]] == [(2024, 2), (2024, 1), (2023, 12)]
