"""Tests for invoice posting and transaction edits."""
import pytest
import uuid
from decimal import Decimal
from sqlalchemy import select, func

from app.error_handlers import BusinessRuleError, ResourceNotFoundError
from app.models import Transaction, TransactionItem
from app.schemas.transaction import (
    InvoiceCreate,
    TransactionIn,
    TransactionItemIn,
    TransactionUpdate
)
from app.services import invoicing, transactions


async def count(db, model):
    result = await db.execute(select(func.count(model.id)))
    return result.scalar()


class TestComputeTotal:
    """Tests for server-side totals."""

    def test_discount_and_tax(self):
        items = [
            TransactionItemIn(product_id=uuid.uuid4(), quantity=2, price=Decimal("10.00")),
            TransactionItemIn(product_id=uuid.uuid4(), quantity=1, price=Decimal("5.00"), total=Decimal("4.00")),
        ]
        assert invoicing.compute_total(items, Decimal("3"), Decimal("1.50")) == Decimal("22.50")

    def test_total_never_negative(self):
        items = [TransactionItemIn(product_id=uuid.uuid4(), quantity=1, price=Decimal("5.00"))]
        assert invoicing.compute_total(items, Decimal("10"), Decimal("0")) == Decimal("0.00")


class TestPostInvoice:
    """Tests for posting invoices."""

    async def test_creates_transaction_items_and_decrements_stock(self, test_db, sample_products):
        """N items produce one transaction, N items and N stock decrements."""
        milk, cheese, _ = sample_products
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_name="Walk-in"),
            items=[
                TransactionItemIn(product_id=milk.id, quantity=4, price=Decimal("25.00")),
                TransactionItemIn(product_id=cheese.id, quantity=2, price=Decimal("120.00")),
            ]
        )

        transaction = await invoicing.post_invoice(test_db, invoice)

        assert transaction.transaction_number.startswith("INV-")
        assert transaction.total == Decimal("340.00")
        assert transaction.status == "completed"
        assert transaction.transaction_type == "sale"
        assert sorted(item.product_name for item in transaction.items) == ["Beyaz Peynir", "Süt 1L"]
        assert await count(test_db, Transaction) == 1
        assert await count(test_db, TransactionItem) == 2

        await test_db.refresh(milk)
        await test_db.refresh(cheese)
        assert milk.quantity == 6
        assert cheese.quantity == 1

    async def test_stock_is_clamped_at_zero(self, test_db, sample_products):
        """Selling more than is on hand leaves the quantity at zero."""
        cheese = sample_products[1]
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_name="Walk-in"),
            items=[TransactionItemIn(product_id=cheese.id, quantity=10, price=Decimal("120.00"))]
        )

        await invoicing.post_invoice(test_db, invoice)

        await test_db.refresh(cheese)
        assert cheese.quantity == 0

    async def test_customer_name_taken_from_customer(self, test_db, sample_customer, sample_products):
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_id=sample_customer.id),
            items=[TransactionItemIn(product_id=sample_products[0].id, quantity=1, price=Decimal("25.00"))]
        )

        transaction = await invoicing.post_invoice(test_db, invoice)

        assert transaction.customer_name == "Mehmet Demir"
        assert transaction.customer_id == sample_customer.id

    async def test_explicit_total_is_kept(self, test_db, sample_products):
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_name="Walk-in", total=Decimal("20.00")),
            items=[TransactionItemIn(product_id=sample_products[0].id, quantity=1, price=Decimal("25.00"))]
        )

        transaction = await invoicing.post_invoice(test_db, invoice)

        assert transaction.total == Decimal("20.00")

    async def test_customer_name_required(self, test_db, sample_products):
        invoice = InvoiceCreate(
            transaction=TransactionIn(),
            items=[TransactionItemIn(product_id=sample_products[0].id, quantity=1, price=Decimal("25.00"))]
        )

        with pytest.raises(BusinessRuleError):
            await invoicing.post_invoice(test_db, invoice)

    async def test_empty_items_rejected(self, test_db):
        invoice = InvoiceCreate(transaction=TransactionIn(customer_name="Walk-in"), items=[])

        with pytest.raises(BusinessRuleError):
            await invoicing.post_invoice(test_db, invoice)

    async def test_unknown_product_writes_nothing(self, test_db, sample_products):
        milk_id = sample_products[0].id
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_name="Walk-in"),
            items=[
                TransactionItemIn(product_id=milk_id, quantity=1, price=Decimal("25.00")),
                TransactionItemIn(product_id=uuid.uuid4(), quantity=1, price=Decimal("1.00")),
            ]
        )

        with pytest.raises(ResourceNotFoundError):
            await invoicing.post_invoice(test_db, invoice)

        assert await count(test_db, Transaction) == 0
        milk = sample_products[0]
        await test_db.refresh(milk)
        assert milk.quantity == 10

    async def test_unknown_customer(self, test_db, sample_products):
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_id=uuid.uuid4()),
            items=[TransactionItemIn(product_id=sample_products[0].id, quantity=1, price=Decimal("25.00"))]
        )

        with pytest.raises(ResourceNotFoundError):
            await invoicing.post_invoice(test_db, invoice)

    async def test_failure_rolls_back_everything(self, test_db, sample_customer, sample_products, monkeypatch):
        """A failing debt update undoes the invoice, its items and the stock change."""
        async def broken_add_debt(*args, **kwargs):
            raise RuntimeError("ledger unavailable")

        monkeypatch.setattr(invoicing, "add_debt", broken_add_debt)
        milk = sample_products[0]
        invoice = InvoiceCreate(
            transaction=TransactionIn(customer_id=sample_customer.id, payment_type="credit"),
            items=[TransactionItemIn(product_id=milk.id, quantity=3, price=Decimal("25.00"))]
        )

        with pytest.raises(RuntimeError):
            await invoicing.post_invoice(test_db, invoice)

        assert await count(test_db, Transaction) == 0
        assert await count(test_db, TransactionItem) == 0
        await test_db.refresh(milk)
        await test_db.refresh(sample_customer)
        assert milk.quantity == 10
        assert sample_customer.total_debt == Decimal("0")


class TestTransactionEdits:
    """Tests for direct edits, which have no stock or ledger effects."""

    async def post(self, db, customer, product, payment_type="credit"):
        return await invoicing.post_invoice(
            db,
            InvoiceCreate(
                transaction=TransactionIn(customer_id=customer.id, payment_type=payment_type),
                items=[TransactionItemIn(product_id=product.id, quantity=2, price=Decimal("25.00"))]
            )
        )

    async def test_update_overwrites_fields_only(self, test_db, sample_customer, sample_products):
        sale = await self.post(test_db, sample_customer, sample_products[0])

        updated = await transactions.update_transaction(
            test_db, sale.id, TransactionUpdate(total=Decimal("10.00"), status="cancelled")
        )

        assert updated.total == Decimal("10.00")
        assert updated.status == "cancelled"
        await test_db.refresh(sample_customer)
        assert sample_customer.total_debt == Decimal("50.00")

    async def test_replace_items(self, test_db, sample_customer, sample_products):
        milk, cheese, _ = sample_products
        sale = await self.post(test_db, sample_customer, milk)

        replaced = await transactions.replace_items(
            test_db,
            sale.id,
            [TransactionItemIn(product_id=cheese.id, quantity=3, price=Decimal("100.00"))]
        )

        assert len(replaced.items) == 1
        assert replaced.items[0].product_name == "Beyaz Peynir"
        assert replaced.items[0].total == Decimal("300.00")
        await test_db.refresh(cheese)
        assert cheese.quantity == 3

    async def test_replace_items_unknown_transaction(self, test_db, sample_products):
        with pytest.raises(ResourceNotFoundError):
            await transactions.replace_items(
                test_db,
                uuid.uuid4(),
                [TransactionItemIn(product_id=sample_products[0].id, quantity=1, price=Decimal("1.00"))]
            )

    async def test_list_search_and_limit(self, test_db, sample_customer, sample_products):
        for _ in range(3):
            await self.post(test_db, sample_customer, sample_products[0], payment_type="cash")

        assert len(await transactions.list_transactions(test_db, limit=2)) == 2
        assert len(await transactions.list_transactions(test_db, limit=10, offset=2)) == 1
        assert len(await transactions.list_transactions(test_db, search="mehmet")) == 3
        assert await transactions.list_transactions(test_db, search="nobody") == []

    async def test_limit_is_capped(self, test_db):
        """Oversized limits are reduced to the maximum page size."""
        assert await transactions.list_transactions(test_db, limit=10_000) == []
