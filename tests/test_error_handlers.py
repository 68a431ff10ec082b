"""Tests for error responses and request middleware."""
from sqlalchemy.exc import IntegrityError

from app.error_handlers import (
    BusinessRuleError,
    DuplicateResourceError,
    ResourceNotFoundError,
    describe_integrity_error,
)


class TestExceptions:
    """Tests for application exception types."""

    def test_status_codes(self):
        assert ResourceNotFoundError("Product", "x").status_code == 404
        assert DuplicateResourceError("Product", "sku", "A").status_code == 409
        assert BusinessRuleError("nope").status_code == 400

    def test_business_rule_details(self):
        error = BusinessRuleError("Payment amount exceeds the outstanding total", outstanding="10.00")
        assert error.details == {"outstanding": "10.00"}


class TestIntegrityErrorMapping:
    """Tests for translating database constraint violations."""

    def integrity_error(self, message):
        return IntegrityError("INSERT INTO ...", {}, Exception(message))

    def test_sqlite_unique_sku(self):
        code, message, details = describe_integrity_error(
            self.integrity_error("UNIQUE constraint failed: products.sku")
        )

        assert code == 409
        assert details == {"resource": "Product", "field": "sku"}
        assert "sku" in message

    def test_postgres_unique_supplier_code(self):
        code, _, details = describe_integrity_error(self.integrity_error(
            'duplicate key value violates unique constraint "uq_suppliers_supplier_code"'
        ))

        assert code == 409
        assert details["resource"] == "Supplier"

    def test_negative_debt_check(self):
        code, _, details = describe_integrity_error(
            self.integrity_error("CHECK constraint failed: ck_customers_total_debt_non_negative")
        )

        assert code == 400
        assert details["field"] == "total_debt"

    def test_unknown_violation_falls_back_to_conflict(self):
        code, message, details = describe_integrity_error(self.integrity_error("something odd"))

        assert code == 409
        assert message == "Data integrity constraint violated"
        assert details == {}


class TestErrorResponses:
    """Tests for the JSON error bodies."""

    async def test_unknown_route(self, client):
        response = await client.get("/api/does-not-exist")

        assert response.status_code == 404
        assert response.json()["path"] == "/api/does-not-exist"

    async def test_malformed_uuid_is_400(self, client):
        response = await client.get("/api/products/not-a-uuid")

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    async def test_process_time_header(self, client):
        response = await client.get("/api/health")

        assert response.headers["X-Process-Time"].endswith("ms")
