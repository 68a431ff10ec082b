"""Tests for customer API endpoints and the debt endpoints."""
import uuid
from decimal import Decimal


class TestCustomerAPI:
    """Tests for customer CRUD endpoints."""

    async def test_create_customer(self, client):
        response = await client.post(
            "/api/customers",
            json={"name": "Fatma Kaya", "email": "", "phone": "+90 555 000 1122"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Fatma Kaya"
        assert data["email"] is None
        assert Decimal(data["totalDebt"]) == Decimal("0")
        assert data["debtCurrency"] == "TRY"

    async def test_opening_balance_in_usd_is_stored_in_try(self, client):
        response = await client.post(
            "/api/customers",
            json={"name": "Export Ltd", "totalDebt": "100", "debtCurrency": "USD"}
        )

        assert response.status_code == 201
        assert Decimal(response.json()["totalDebt"]) == Decimal("3300.00")
        assert response.json()["debtCurrency"] == "TRY"

    async def test_negative_opening_balance_rejected(self, client):
        response = await client.post("/api/customers", json={"name": "Bad", "totalDebt": "-5"})

        assert response.status_code == 400

    async def test_invalid_email_rejected(self, client):
        response = await client.post("/api/customers", json={"name": "Bad", "email": "not-an-email"})

        assert response.status_code == 400

    async def test_search_is_case_insensitive(self, client, sample_customer):
        response = await client.get("/api/customers", params={"search": "DEMIR"})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Mehmet Demir"]

    async def test_update_does_not_touch_debt(self, client, sample_customer):
        """Balances cannot be edited through the customer form."""
        response = await client.put(
            f"/api/customers/{sample_customer.id}",
            json={"name": "Mehmet Demir Jr.", "totalDebt": "999"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Mehmet Demir Jr."
        assert Decimal(data["totalDebt"]) == Decimal("0")

    async def test_get_unknown_customer(self, client):
        response = await client.get(f"/api/customers/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["details"]["resource"] == "Customer"

    async def test_delete_keeps_transactions(self, client, sample_customer, sample_products):
        """Transactions survive customer deletion with their name snapshot."""
        response = await client.post(
            "/api/transactions",
            json={
                "transaction": {"customerId": str(sample_customer.id), "paymentType": "credit"},
                "items": [{"productId": str(sample_products[0].id), "quantity": 1, "price": "25.00"}]
            }
        )
        transaction_id = response.json()["id"]

        response = await client.delete(f"/api/customers/{sample_customer.id}")
        assert response.status_code == 204

        response = await client.get(f"/api/transactions/{transaction_id}")
        assert response.status_code == 200
        assert response.json()["customerId"] is None
        assert response.json()["customerName"] == "Mehmet Demir"


class TestCustomerDebtAPI:
    """Tests for debt status and direct payments."""

    async def test_debt_status(self, client, sample_customer, test_db):
        sample_customer.total_debt = Decimal("6600.00")
        await test_db.commit()

        response = await client.get(f"/api/customers/{sample_customer.id}/debt")

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["debt"]) == Decimal("6600.00")
        assert data["currency"] == "TRY"
        assert data["isOverLimit"] is True
        assert Decimal(data["debtInUsd"]) == Decimal("200.00")
        assert data["isOverLimitUsd"] is True

    async def test_direct_payment(self, client, sample_customer, test_db):
        sample_customer.total_debt = Decimal("100.00")
        await test_db.commit()

        response = await client.post(
            f"/api/customers/{sample_customer.id}/payment",
            json={"amount": "30", "currency": "TRY"}
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert Decimal(response.json()["newDebt"]) == Decimal("70.00")

    async def test_direct_payment_must_be_positive(self, client, sample_customer):
        response = await client.post(
            f"/api/customers/{sample_customer.id}/payment",
            json={"amount": "0"}
        )

        assert response.status_code == 400

    async def test_direct_payment_unknown_customer(self, client):
        response = await client.post(
            f"/api/customers/{uuid.uuid4()}/payment",
            json={"amount": "10"}
        )

        assert response.status_code == 404
