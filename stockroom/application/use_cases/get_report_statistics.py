"""Report Statistics Use Case."""

from dataclasses import dataclass
from datetime import UTC, datetime

from stockroom.application.dto.responses import (
    CategoryStatsResponse,
    MonthlyStatsResponse,
    MovementStatsResponse,
    ReportStatisticsResponse,
    SupplierStatsResponse,
)
from stockroom.config import get_logger, get_settings
from stockroom.core.exceptions import ValidationError
from stockroom.core.interfaces.catalog_store import ICatalogStore, ISupplierStore
from stockroom.core.interfaces.inventory_store import IInventoryStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.core.services.stock_reports import (
    CategoryStockStats,
    MonthlyMovementStats,
    MovementStats,
    SupplierOrderStats,
    category_stats,
    month_window_start,
    monthly_stats,
    movement_stats,
    supplier_order_stats,
)

logger = get_logger(__name__)


@dataclass
class ReportStatistics:
    """All aggregates shown on the reports page."""

    categories: list[CategoryStockStats]
    movements: MovementStats
    suppliers: list[SupplierOrderStats]
    monthly: list[MonthlyMovementStats]


class GetReportStatisticsUseCase:
    """
    Aggregate stock, movement and purchasing figures.

    The optional date range filters movement and supplier order totals;
    category stock is always current and the monthly trend always covers
    the configured number of recent months.
    """

    def __init__(
        self,
        catalog_store: ICatalogStore | None = None,
        supplier_store: ISupplierStore | None = None,
        inventory_store: IInventoryStore | None = None,
        purchase_order_store: IPurchaseOrderStore | None = None,
    ):
        self._catalog_store = catalog_store
        self._supplier_store = supplier_store
        self._inventory_store = inventory_store
        self._purchase_order_store = purchase_order_store

    async def _load_stores(self) -> None:
        from stockroom.infrastructure.storage.sqlite import (
            get_catalog_store,
            get_inventory_store,
            get_purchase_order_store,
            get_supplier_store,
        )

        if self._catalog_store is None:
            self._catalog_store = await get_catalog_store()
        if self._supplier_store is None:
            self._supplier_store = await get_supplier_store()
        if self._inventory_store is None:
            self._inventory_store = await get_inventory_store()
        if self._purchase_order_store is None:
            self._purchase_order_store = await get_purchase_order_store()

    async def execute(
        self,
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> ReportStatistics:
        """Execute report statistics use case."""
        if start is not None and end is not None and start > end:
            raise ValidationError("start_date", "must not be after end_date", start)

        months = get_settings().inventory.report_months
        now = now or datetime.now(UTC)
        await self._load_stores()

        categories = await self._catalog_store.list_categories()
        products = await self._catalog_store.list_products(limit=None)
        movements = await self._inventory_store.list_movements(
            start=start, end=end, limit=None
        )
        suppliers = await self._supplier_store.list_suppliers()
        orders = await self._purchase_order_store.list_orders(
            start=start, end=end, limit=None
        )
        recent = await self._inventory_store.list_movements(
            start=month_window_start(now, months), limit=None
        )

        report = ReportStatistics(
            categories=category_stats(categories, products),
            movements=movement_stats(movements),
            suppliers=supplier_order_stats(suppliers, orders),
            monthly=monthly_stats(recent, now, months),
        )
        logger.info(
            "report_statistics_computed",
            categories=len(report.categories),
            movements=len(movements),
            orders=len(orders),
        )
        return report

    def to_response(self, report: ReportStatistics) -> ReportStatisticsResponse:
        """Convert result to API response."""
        return ReportStatisticsResponse(
            category_stats=[
                CategoryStatsResponse(
                    category_id=c.category_id,
                    name=c.name,
                    total_stock=c.total_stock,
                    product_count=c.product_count,
                    low_stock_count=c.low_stock_count,
                )
                for c in report.categories
            ],
            movement_stats=MovementStatsResponse(
                total_in=report.movements.total_in,
                total_out=report.movements.total_out,
                in_count=report.movements.in_count,
                out_count=report.movements.out_count,
                net_change=report.movements.net_change,
            ),
            supplier_stats=[
                SupplierStatsResponse(
                    supplier_id=s.supplier_id,
                    name=s.name,
                    order_count=s.order_count,
                    total_amount=s.total_amount,
                )
                for s in report.suppliers
            ],
            monthly_stats=[
                MonthlyStatsResponse(month=m.label, total_in=m.total_in, total_out=m.total_out)
                for m in report.monthly
            ],
        )
