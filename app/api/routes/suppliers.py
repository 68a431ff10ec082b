"""
Suppliers API endpoints.
"""
from typing import List, Optional
import uuid
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.security import get_current_user
from app.schemas.product import ProductResponse
from app.schemas.supplier import SupplierCreate, SupplierUpdate, SupplierResponse
from app.services import catalog

router = APIRouter(
    prefix="/suppliers",
    tags=["Suppliers"],
    dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=List[SupplierResponse])
async def list_suppliers(
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    return await catalog.list_suppliers(db, search=search)


@router.post("", response_model=SupplierResponse, status_code=status.HTTP_201_CREATED)
async def create_supplier(
    supplier_data: SupplierCreate,
    db: AsyncSession = Depends(get_db)
):
    """
    Create a supplier.

    - **supplierCode**: Optional, generated as SUP-### when omitted
    """
    return await catalog.create_supplier(db, supplier_data)


@router.get("/{supplier_id}", response_model=SupplierResponse)
async def get_supplier(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    return await catalog.get_supplier(db, supplier_id)


@router.put("/{supplier_id}", response_model=SupplierResponse)
async def update_supplier(
    supplier_id: uuid.UUID,
    supplier_data: SupplierUpdate,
    db: AsyncSession = Depends(get_db)
):
    return await catalog.update_supplier(db, supplier_id, supplier_data)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_supplier(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Delete a supplier and all of its products."""
    await catalog.delete_supplier(db, supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{supplier_id}/products", response_model=List[ProductResponse])
async def get_supplier_products(
    supplier_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Active products of a supplier, newest first."""
    return await catalog.list_supplier_products(db, supplier_id)
