"""
Dependency injection container for FastAPI.

Provides stores, use cases and the calling actor to route handlers.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import HTTPException, Path, Query, Request, status

from stockroom.application.use_cases import (
    ApplyMovementUseCase,
    CancelPurchaseOrderUseCase,
    CreateProductUseCase,
    CreatePurchaseOrderUseCase,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetDashboardStatsUseCase,
    GetReportStatisticsUseCase,
    ReceivePurchaseOrderUseCase,
    TransitionPurchaseOrderUseCase,
    UpdateUserProfileUseCase,
)
from stockroom.application.dto.requests import SQLITE_MAX_INTEGER
from stockroom.config import get_settings
from stockroom.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteInventoryStore,
    SQLitePurchaseOrderStore,
    SQLiteSupplierStore,
    SQLiteUserStore,
    get_catalog_store,
    get_inventory_store,
    get_purchase_order_store,
    get_supplier_store,
    get_user_store,
)


# Integer primary key taken from the URL path
RecordId = Annotated[int, Path(ge=1, le=SQLITE_MAX_INTEGER)]

MAX_PAGE = 1_000_000


# Identity
def get_actor_id(request: Request) -> str:
    """
    Actor identity supplied by the upstream identity provider.

    Read from the configured header; requests without it are rejected.
    """
    header = get_settings().api.actor_header
    actor_id = (request.headers.get(header) or "").strip()
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {header} header",
        )
    return actor_id


# Store dependencies
async def get_cat_store() -> SQLiteCatalogStore:
    """Get catalog store."""
    return await get_catalog_store()


async def get_sup_store() -> SQLiteSupplierStore:
    """Get supplier store."""
    return await get_supplier_store()


async def get_inv_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


async def get_po_store() -> SQLitePurchaseOrderStore:
    """Get purchase order store."""
    return await get_purchase_order_store()


async def get_usr_store() -> SQLiteUserStore:
    """Get user store."""
    return await get_user_store()


# Use case dependencies
def get_apply_movement_use_case() -> ApplyMovementUseCase:
    """Get apply movement use case."""
    return ApplyMovementUseCase()


def get_create_product_use_case() -> CreateProductUseCase:
    """Get create product use case."""
    return CreateProductUseCase()


def get_create_purchase_order_use_case() -> CreatePurchaseOrderUseCase:
    """Get create purchase order use case."""
    return CreatePurchaseOrderUseCase()


def get_receive_purchase_order_use_case() -> ReceivePurchaseOrderUseCase:
    """Get receive purchase order use case."""
    return ReceivePurchaseOrderUseCase()


def get_cancel_purchase_order_use_case() -> CancelPurchaseOrderUseCase:
    """Get cancel purchase order use case."""
    return CancelPurchaseOrderUseCase()


def get_transition_purchase_order_use_case() -> TransitionPurchaseOrderUseCase:
    """Get purchase order status transition use case."""
    return TransitionPurchaseOrderUseCase()


def get_dashboard_stats_use_case() -> GetDashboardStatsUseCase:
    """Get dashboard stats use case."""
    return GetDashboardStatsUseCase()


def get_report_statistics_use_case() -> GetReportStatisticsUseCase:
    """Get report statistics use case."""
    return GetReportStatisticsUseCase()


def get_create_user_use_case() -> CreateUserUseCase:
    """Get create user use case."""
    return CreateUserUseCase()


def get_update_user_profile_use_case() -> UpdateUserProfileUseCase:
    """Get update user profile use case."""
    return UpdateUserProfileUseCase()


def get_delete_user_use_case() -> DeleteUserUseCase:
    """Get delete user use case."""
    return DeleteUserUseCase()


# Pagination
@dataclass
class PageParams:
    """Resolved page number and size for paged listings."""

    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def get_page_params(
    page: int = Query(default=1, ge=1, le=MAX_PAGE, description="1-based page number"),
    limit: int | None = Query(default=None, ge=1, description="Page size"),
) -> PageParams:
    """Page parameters with the configured default and maximum size applied."""
    settings = get_settings().inventory
    size = limit or settings.default_page_size
    return PageParams(page=page, limit=min(size, settings.max_page_size))
