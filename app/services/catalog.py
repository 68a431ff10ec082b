"""
Products and suppliers.
"""
from typing import Optional, Sequence
import uuid
from sqlalchemy import select, update, delete, func, and_, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.error_handlers import DuplicateResourceError, ResourceNotFoundError
from app.logging_config import get_logger
from app.models.product import Product
from app.models.supplier import Supplier
from app.models.transaction import TransactionItem
from app.schemas.product import ProductCreate, ProductUpdate
from app.schemas.supplier import SupplierCreate, SupplierUpdate
from app.services.codes import (
    generate_product_code_for_supplier,
    generate_sku,
    generate_supplier_code
)

logger = get_logger("catalog")

MAX_CODE_ATTEMPTS = 100


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------

async def get_product(db: AsyncSession, product_id: uuid.UUID) -> Product:
    result = await db.execute(select(Product).where(Product.id == product_id))
    product = result.scalar_one_or_none()
    if product is None:
        raise ResourceNotFoundError("Product", product_id)
    return product


async def list_products(db: AsyncSession, search: Optional[str] = None) -> Sequence[Product]:
    """All products, newest first; ``search`` matches name, SKU or barcode."""
    query = select(Product)

    if search:
        search_pattern = f"%{search}%"
        query = query.where(
            or_(
                Product.name.ilike(search_pattern),
                Product.sku.ilike(search_pattern),
                Product.barcode.ilike(search_pattern)
            )
        )

    result = await db.execute(query.order_by(Product.created_at.desc()))
    return result.scalars().all()


async def list_low_stock(db: AsyncSession) -> Sequence[Product]:
    """Active products at or below their reorder threshold, emptiest first."""
    result = await db.execute(
        select(Product)
        .where(
            and_(
                Product.is_active == True,
                Product.quantity <= Product.min_quantity
            )
        )
        .order_by(Product.quantity.asc())
    )
    return result.scalars().all()


async def find_by_barcode(db: AsyncSession, code: str) -> Product:
    """Look a product up by barcode, falling back to its SKU."""
    result = await db.execute(select(Product).where(Product.barcode == code))
    product = result.scalar_one_or_none()

    if product is None:
        result = await db.execute(select(Product).where(Product.sku == code))
        product = result.scalar_one_or_none()

    if product is None:
        raise ResourceNotFoundError("Product", code)
    return product


async def _sku_taken(db: AsyncSession, sku: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = select(Product.id).where(Product.sku == sku)
    if exclude_id is not None:
        query = query.where(Product.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def _barcode_taken(db: AsyncSession, barcode: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = select(Product.id).where(Product.barcode == barcode)
    if exclude_id is not None:
        query = query.where(Product.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def next_product_sku(db: AsyncSession, name: str, supplier: Optional[Supplier] = None) -> str:
    """
    Generate an unused SKU.

    Products of a supplier get ``<supplier code>-<NNN>`` numbered after the
    supplier's product count; other products get a name-based code.
    """
    if supplier is not None and supplier.supplier_code:
        result = await db.execute(
            select(func.count(Product.id)).where(Product.supplier_id == supplier.id)
        )
        count = result.scalar() or 0
        for offset in range(1, MAX_CODE_ATTEMPTS + 1):
            candidate = generate_product_code_for_supplier(supplier.supplier_code, count + offset)
            if not await _sku_taken(db, candidate):
                return candidate
    else:
        for _ in range(MAX_CODE_ATTEMPTS):
            candidate = generate_sku(name)
            if not await _sku_taken(db, candidate):
                return candidate

    raise RuntimeError(f"Could not generate a unique SKU for '{name}'")


async def create_product(db: AsyncSession, product_data: ProductCreate) -> Product:
    """Create a product, generating its SKU when none is supplied."""
    supplier = None
    if product_data.supplier_id is not None:
        supplier = await get_supplier(db, product_data.supplier_id)

    if product_data.sku:
        if await _sku_taken(db, product_data.sku):
            raise DuplicateResourceError("Product", "sku", product_data.sku)
        sku = product_data.sku
    else:
        sku = await next_product_sku(db, product_data.name, supplier)

    if product_data.barcode and await _barcode_taken(db, product_data.barcode):
        raise DuplicateResourceError("Product", "barcode", product_data.barcode)

    new_product = Product(
        **product_data.model_dump(exclude={"sku", "currency"}),
        sku=sku,
        currency=product_data.currency.value
    )
    db.add(new_product)
    await db.commit()
    await db.refresh(new_product)

    logger.info(f"[PRODUCT] Created {new_product.sku} ({new_product.name})")
    return new_product


async def update_product(db: AsyncSession, product_id: uuid.UUID, product_data: ProductUpdate) -> Product:
    """Update the provided fields of a product."""
    product = await get_product(db, product_id)
    update_data = product_data.model_dump(exclude_unset=True)

    if update_data.get("sku") and await _sku_taken(db, update_data["sku"], exclude_id=product.id):
        raise DuplicateResourceError("Product", "sku", update_data["sku"])
    if update_data.get("barcode") and await _barcode_taken(db, update_data["barcode"], exclude_id=product.id):
        raise DuplicateResourceError("Product", "barcode", update_data["barcode"])
    if update_data.get("supplier_id") is not None:
        await get_supplier(db, update_data["supplier_id"])

    for field, value in update_data.items():
        if field in ("sku", "name", "price", "currency", "quantity", "min_quantity", "is_active") and value is None:
            continue
        if hasattr(value, "value"):
            value = value.value
        setattr(product, field, value)

    await db.commit()
    await db.refresh(product)

    logger.info(f"[PRODUCT] Updated {product.sku}")
    return product


async def delete_product(db: AsyncSession, product_id: uuid.UUID) -> None:
    """Hard-delete a product; sold line items keep their name snapshot."""
    product = await get_product(db, product_id)
    sku = product.sku

    try:
        await db.execute(
            update(TransactionItem)
            .where(TransactionItem.product_id == product.id)
            .values(product_id=None)
            .execution_options(synchronize_session=False)
        )
        await db.execute(delete(Product).where(Product.id == product.id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"[PRODUCT] Deleted {sku}")


# ---------------------------------------------------------------------------
# Suppliers
# ---------------------------------------------------------------------------

async def get_supplier(db: AsyncSession, supplier_id: uuid.UUID) -> Supplier:
    result = await db.execute(select(Supplier).where(Supplier.id == supplier_id))
    supplier = result.scalar_one_or_none()
    if supplier is None:
        raise ResourceNotFoundError("Supplier", supplier_id)
    return supplier


async def list_suppliers(db: AsyncSession, search: Optional[str] = None) -> Sequence[Supplier]:
    query = select(Supplier)
    if search:
        query = query.where(Supplier.name.ilike(f"%{search}%"))
    result = await db.execute(query.order_by(Supplier.created_at.desc()))
    return result.scalars().all()


async def _supplier_code_taken(db: AsyncSession, code: str, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = select(Supplier.id).where(Supplier.supplier_code == code)
    if exclude_id is not None:
        query = query.where(Supplier.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def next_supplier_code(db: AsyncSession) -> str:
    """``SUP-###`` numbered after the current supplier count, skipping used codes."""
    result = await db.execute(select(func.count(Supplier.id)))
    count = result.scalar() or 0

    for offset in range(1, MAX_CODE_ATTEMPTS + 1):
        candidate = generate_supplier_code(count + offset)
        if not await _supplier_code_taken(db, candidate):
            return candidate

    raise RuntimeError("Could not generate a unique supplier code")


async def create_supplier(db: AsyncSession, supplier_data: SupplierCreate) -> Supplier:
    if supplier_data.supplier_code:
        if await _supplier_code_taken(db, supplier_data.supplier_code):
            raise DuplicateResourceError("Supplier", "supplier_code", supplier_data.supplier_code)
        code = supplier_data.supplier_code
    else:
        code = await next_supplier_code(db)

    supplier = Supplier(**supplier_data.model_dump(exclude={"supplier_code"}), supplier_code=code)
    db.add(supplier)
    await db.commit()
    await db.refresh(supplier)

    logger.info(f"[SUPPLIER] Created {supplier.supplier_code} ({supplier.name})")
    return supplier


async def update_supplier(db: AsyncSession, supplier_id: uuid.UUID, supplier_data: SupplierUpdate) -> Supplier:
    supplier = await get_supplier(db, supplier_id)
    update_data = supplier_data.model_dump(exclude_unset=True)

    code = update_data.get("supplier_code")
    if code and await _supplier_code_taken(db, code, exclude_id=supplier.id):
        raise DuplicateResourceError("Supplier", "supplier_code", code)

    for field, value in update_data.items():
        if field in ("supplier_code", "name", "is_active") and value is None:
            continue
        setattr(supplier, field, value)

    await db.commit()
    await db.refresh(supplier)

    logger.info(f"[SUPPLIER] Updated {supplier.supplier_code}")
    return supplier


async def delete_supplier(db: AsyncSession, supplier_id: uuid.UUID) -> int:
    """
    Delete a supplier together with all of its products.

    Returns the number of products removed.
    """
    supplier = await get_supplier(db, supplier_id)
    code = supplier.supplier_code
    product_ids = select(Product.id).where(Product.supplier_id == supplier.id)

    try:
        await db.execute(
            update(TransactionItem)
            .where(TransactionItem.product_id.in_(product_ids))
            .values(product_id=None)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(
            delete(Product)
            .where(Product.supplier_id == supplier.id)
            .execution_options(synchronize_session=False)
        )
        await db.execute(delete(Supplier).where(Supplier.id == supplier.id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    removed = result.rowcount or 0
    logger.info(f"[SUPPLIER] Deleted {code} with {removed} products")
    return removed


async def list_supplier_products(db: AsyncSession, supplier_id: uuid.UUID) -> Sequence[Product]:
    """Active products of a supplier, newest first."""
    await get_supplier(db, supplier_id)
    result = await db.execute(
        select(Product)
        .where(
            and_(
                Product.supplier_id == supplier_id,
                Product.is_active == True
            )
        )
        .order_by(Product.created_at.desc())
    )
    return result.scalars().all()
