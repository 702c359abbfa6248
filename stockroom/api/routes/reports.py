"""Reporting endpoints: aggregated statistics and CSV exports."""

from datetime import UTC, datetime
from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from stockroom.api.dependencies import (
    get_cat_store,
    get_inv_store,
    get_po_store,
    get_report_statistics_use_case,
)
from stockroom.application.dto.responses import ErrorResponse, ReportStatisticsResponse
from stockroom.application.use_cases.get_report_statistics import GetReportStatisticsUseCase
from stockroom.config import get_logger
from stockroom.infrastructure.export import movements_csv, orders_csv, products_csv
from stockroom.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteInventoryStore,
    SQLitePurchaseOrderStore,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])

EXPORT_FILENAMES = {
    "products": "products.csv",
    "transactions": "stock-transactions.csv",
    "orders": "purchase-orders.csv",
}


@router.get(
    "/statistics",
    response_model=ReportStatisticsResponse,
    responses={400: {"model": ErrorResponse}},
)
async def report_statistics(
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    use_case: GetReportStatisticsUseCase = Depends(get_report_statistics_use_case),
) -> ReportStatisticsResponse:
    """Category stock, movement totals, supplier orders and the monthly trend."""
    report = await use_case.execute(start=start_date, end=end_date)
    return use_case.to_response(report)


@router.get("/export/{kind}", response_class=StreamingResponse)
async def export_csv(
    kind: Literal["products", "transactions", "orders"],
    catalog: SQLiteCatalogStore = Depends(get_cat_store),
    inventory: SQLiteInventoryStore = Depends(get_inv_store),
    orders: SQLitePurchaseOrderStore = Depends(get_po_store),
) -> StreamingResponse:
    """Download products, stock transactions or purchase orders as CSV."""
    if kind == "products":
        content = products_csv(await catalog.list_products(order_by="name", limit=None))
    elif kind == "transactions":
        content = movements_csv(await inventory.list_movements(limit=None))
    else:
        content = orders_csv(await orders.list_orders(limit=None))

    logger.info("csv_exported", kind=kind, bytes=len(content.encode("utf-8")))
    stamp = datetime.now(UTC).strftime("%Y%m%d")
    filename = f"{stamp}-{EXPORT_FILENAMES[kind]}"
    return StreamingResponse(
        iter([content]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
