"""
Products API endpoints for inventory management.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.schemas.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductSalesHistory
)
from app.services import catalog, reports

router = APIRouter(
    prefix="/products",
    tags=["Products"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[ProductResponse])
async def list_products(
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    """
    List products, newest first.

    - **search**: Case-insensitive match on name, SKU or barcode
    """
    return await catalog.list_products(db, search=search)


@router.get("/low-stock", response_model=List[ProductResponse])
async def get_low_stock_products(db: AsyncSession = Depends(get_db)):
    """Active products at or below their minimum quantity."""
    return await catalog.list_low_stock(db)


@router.get("/barcode/{barcode}", response_model=ProductResponse)
async def get_product_by_barcode(
    barcode: str,
    db: AsyncSession = Depends(get_db)
):
    """Find a product by barcode; SKU is tried when no barcode matches."""
    return await catalog.find_by_barcode(db, barcode)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_data: ProductCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a new product.

    - **sku**: Optional, generated from the supplier code or the name
    - **minQuantity**: Reorder threshold, defaults to 5
    """
    return await catalog.create_product(db, product_data)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Get a specific product by ID."""
    return await catalog.get_product(db, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: uuid.UUID,
    product_data: ProductUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update a product. Only provided fields are changed."""
    return await catalog.update_product(db, product_id, product_data)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Delete a product. Past invoice lines keep the product name."""
    await catalog.delete_product(db, product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{product_id}/sales-history", response_model=ProductSalesHistory)
async def get_product_sales_history(
    product_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Every invoice line of a product, newest first."""
    return await reports.product_sales_history(db, product_id)
