"""Tests for product API endpoints."""
import re
import uuid
from decimal import Decimal


class TestProductAPI:
    """Tests for product CRUD endpoints."""

    async def test_create_product_with_sku(self, client):
        """Test creating a product with an explicit SKU."""
        response = await client.post(
            "/api/products",
            json={
                "name": "Ayran 200ml",
                "sku": "AYR-001",
                "barcode": "8690000000035",
                "price": "7.50",
                "quantity": 20
            }
        )

        assert response.status_code == 201
        data = response.json()
        assert data["sku"] == "AYR-001"
        assert Decimal(data["price"]) == Decimal("7.50")
        assert data["currency"] == "TRY"
        assert data["quantity"] == 20
        assert data["minQuantity"] == 5
        assert data["stockStatus"] == "in_stock"

    async def test_sku_generated_from_supplier_code(self, client, sample_products, sample_supplier):
        """Supplier products are numbered after the supplier's existing products."""
        response = await client.post(
            "/api/products",
            json={"name": "Kaşar", "price": "90.00", "supplierId": str(sample_supplier.id)}
        )

        assert response.status_code == 201
        assert response.json()["sku"] == "SUP-001-003"

    async def test_sku_generated_from_name(self, client):
        response = await client.post("/api/products", json={"name": "Bulgur", "price": "30"})

        assert response.status_code == 201
        assert re.fullmatch(r"BUL-\d{6}-\d{4}", response.json()["sku"])

    async def test_duplicate_sku_rejected(self, client, sample_products):
        response = await client.post(
            "/api/products",
            json={"name": "Copy", "sku": sample_products[0].sku, "price": "1"}
        )

        assert response.status_code == 409

    async def test_duplicate_barcode_rejected(self, client, sample_products):
        response = await client.post(
            "/api/products",
            json={"name": "Copy", "barcode": sample_products[0].barcode, "price": "1"}
        )

        assert response.status_code == 409

    async def test_unknown_supplier_rejected(self, client):
        response = await client.post(
            "/api/products",
            json={"name": "Orphan", "price": "1", "supplierId": str(uuid.uuid4())}
        )

        assert response.status_code == 404

    async def test_validation_error_is_400(self, client):
        """Missing required fields produce a field-level 400."""
        response = await client.post("/api/products", json={"price": "-1"})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["validation_errors"]}
        assert any("name" in field for field in fields)
        assert any("price" in field for field in fields)

    async def test_list_and_search(self, client, sample_products):
        response = await client.get("/api/products")
        assert response.status_code == 200
        assert len(response.json()) == 3

        response = await client.get("/api/products", params={"search": "peynir"})
        assert [p["name"] for p in response.json()] == ["Beyaz Peynir"]

        response = await client.get("/api/products", params={"search": "8690000000011"})
        assert [p["name"] for p in response.json()] == ["Süt 1L"]

    async def test_low_stock(self, client, sample_products):
        """Products at or below their minimum, emptiest first."""
        response = await client.get("/api/products/low-stock")

        assert response.status_code == 200
        names = [p["name"] for p in response.json()]
        assert names == ["Zeytinyağı 1L", "Beyaz Peynir"]
        assert response.json()[0]["stockStatus"] == "out_of_stock"

    async def test_barcode_lookup(self, client, sample_products):
        response = await client.get("/api/products/barcode/8690000000028")

        assert response.status_code == 200
        assert response.json()["name"] == "Beyaz Peynir"

    async def test_barcode_lookup_falls_back_to_sku(self, client, sample_products):
        response = await client.get("/api/products/barcode/ZEY-250101-1234")

        assert response.status_code == 200
        assert response.json()["name"] == "Zeytinyağı 1L"

    async def test_barcode_lookup_not_found(self, client, sample_products):
        response = await client.get("/api/products/barcode/0000000000000")

        assert response.status_code == 404

    async def test_get_update_delete(self, client, sample_products):
        product_id = str(sample_products[0].id)

        response = await client.get(f"/api/products/{product_id}")
        assert response.status_code == 200

        response = await client.put(
            f"/api/products/{product_id}",
            json={"price": "27.50", "quantity": 40, "minQuantity": 8}
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["price"]) == Decimal("27.50")
        assert data["quantity"] == 40
        assert data["minQuantity"] == 8
        assert data["name"] == "Süt 1L"

        response = await client.delete(f"/api/products/{product_id}")
        assert response.status_code == 204

        response = await client.get(f"/api/products/{product_id}")
        assert response.status_code == 404

    async def test_update_to_taken_sku_rejected(self, client, sample_products):
        response = await client.put(
            f"/api/products/{sample_products[0].id}",
            json={"sku": sample_products[1].sku}
        )

        assert response.status_code == 409

    async def test_delete_keeps_invoice_lines(self, client, sample_products):
        """Deleting a sold product leaves the line item with its name."""
        milk = sample_products[0]
        response = await client.post(
            "/api/transactions",
            json={
                "transaction": {"customerName": "Walk-in"},
                "items": [{"productId": str(milk.id), "quantity": 1, "price": "25.00"}]
            }
        )
        transaction_id = response.json()["id"]

        response = await client.delete(f"/api/products/{milk.id}")
        assert response.status_code == 204

        response = await client.get(f"/api/transactions/{transaction_id}/items")
        items = response.json()
        assert items[0]["productName"] == "Süt 1L"
        assert items[0]["productId"] is None

    async def test_sales_history(self, client, sample_products):
        milk = sample_products[0]
        for quantity in (1, 2):
            await client.post(
                "/api/transactions",
                json={
                    "transaction": {"customerName": "Walk-in"},
                    "items": [{"productId": str(milk.id), "quantity": quantity, "price": "25.00"}]
                }
            )

        response = await client.get(f"/api/products/{milk.id}/sales-history")

        assert response.status_code == 200
        data = response.json()
        assert data["totalQuantitySold"] == 3
        assert data["totalSales"] == 2
        assert {entry["customerName"] for entry in data["salesHistory"]} == {"Walk-in"}
        assert all(entry["transactionNumber"].startswith("INV-") for entry in data["salesHistory"])

    async def test_sales_history_unknown_product(self, client):
        response = await client.get(f"/api/products/{uuid.uuid4()}/sales-history")

        assert response.status_code == 404
