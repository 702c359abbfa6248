"""Supplier endpoints."""

from fastapi import APIRouter, Depends, status

from stockroom.api.dependencies import get_sup_store
from stockroom.application.dto.requests import SupplierCreateRequest
from stockroom.application.dto.responses import SupplierResponse
from stockroom.core.entities.catalog import Supplier
from stockroom.infrastructure.storage.sqlite import SQLiteSupplierStore

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("", response_model=list[SupplierResponse])
async def list_suppliers(
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> list[SupplierResponse]:
    """List suppliers by name."""
    suppliers = await store.list_suppliers()
    return [SupplierResponse.from_entity(s) for s in suppliers]


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_supplier(
    request: SupplierCreateRequest,
    store: SQLiteSupplierStore = Depends(get_sup_store),
) -> SupplierResponse:
    """Register a supplier."""
    supplier = await store.create_supplier(
        Supplier(
            name=request.name,
            email=request.email,
            phone=request.phone,
            address=request.address,
        )
    )
    return SupplierResponse.from_entity(supplier)
