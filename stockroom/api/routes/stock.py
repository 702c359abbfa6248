"""Stock level and stock alert endpoints."""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from stockroom.api.dependencies import PageParams, get_cat_store, get_page_params
from stockroom.application.dto.responses import (
    PaginatedResponse,
    ProductListResponse,
    ProductResponse,
    StockAlertsResponse,
)
from stockroom.core.services.stock_reports import classify_alerts
from stockroom.infrastructure.storage.sqlite import SQLiteCatalogStore

router = APIRouter(prefix="/api", tags=["stock"])


@router.get("/stock", response_model=ProductListResponse)
async def list_stock(
    search: str | None = Query(default=None, description="Match name or SKU"),
    stock_filter: Literal["all", "low", "out"] = Query(default="all"),
    paging: PageParams = Depends(get_page_params),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductListResponse:
    """Stock levels by product name; low means in stock but at or below threshold."""
    total = await store.count_products(search=search, stock_filter=stock_filter)
    products = await store.list_products(
        search=search,
        stock_filter=stock_filter,
        order_by="name",
        limit=paging.limit,
        offset=paging.offset,
    )
    return ProductListResponse(
        items=[ProductResponse.from_entity(p) for p in products],
        total=total,
        page=paging.page,
        limit=paging.limit,
        total_pages=PaginatedResponse.page_count(total, paging.limit),
    )


@router.get("/stock-alerts", response_model=StockAlertsResponse)
async def stock_alerts(
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> StockAlertsResponse:
    """Products at or below their alert threshold, lowest stock first."""
    products = await store.list_products(stock_filter="alert", order_by="stock", limit=None)
    alerts = classify_alerts(products)
    return StockAlertsResponse(
        out_of_stock=[ProductResponse.from_entity(p) for p in alerts.out_of_stock],
        low_stock=[ProductResponse.from_entity(p) for p in alerts.low_stock],
        total=alerts.total,
    )
