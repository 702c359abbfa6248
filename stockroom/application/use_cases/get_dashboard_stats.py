"""Dashboard Stats Use Case."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from stockroom.application.dto.responses import (
    DashboardCounters,
    DashboardStatsResponse,
    ProductResponse,
    StockMovementResponse,
)
from stockroom.config import get_logger, get_settings
from stockroom.core.entities.catalog import Product
from stockroom.core.entities.inventory import StockMovement
from stockroom.core.entities.purchase_order import OrderStatus
from stockroom.core.interfaces.catalog_store import ICatalogStore
from stockroom.core.interfaces.inventory_store import IInventoryStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


@dataclass
class DashboardStats:
    """Dashboard counters with the most urgent alerts and latest movements."""

    total_products: int
    out_of_stock_products: int
    low_stock_products: int
    pending_orders: int
    monthly_movements: int
    stock_alerts: list[Product] = field(default_factory=list)
    recent_movements: list[StockMovement] = field(default_factory=list)


class GetDashboardStatsUseCase:
    """Collect the dashboard counters and short lists."""

    def __init__(
        self,
        catalog_store: ICatalogStore | None = None,
        inventory_store: IInventoryStore | None = None,
        purchase_order_store: IPurchaseOrderStore | None = None,
    ):
        self._catalog_store = catalog_store
        self._inventory_store = inventory_store
        self._purchase_order_store = purchase_order_store

    async def _get_stores(
        self,
    ) -> tuple[ICatalogStore, IInventoryStore, IPurchaseOrderStore]:
        from stockroom.infrastructure.storage.sqlite import (
            get_catalog_store,
            get_inventory_store,
            get_purchase_order_store,
        )

        if self._catalog_store is None:
            self._catalog_store = await get_catalog_store()
        if self._inventory_store is None:
            self._inventory_store = await get_inventory_store()
        if self._purchase_order_store is None:
            self._purchase_order_store = await get_purchase_order_store()
        return self._catalog_store, self._inventory_store, self._purchase_order_store

    async def execute(self, now: datetime | None = None) -> DashboardStats:
        """Execute dashboard stats use case."""
        settings = get_settings().inventory
        now = now or datetime.now(UTC)
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

        catalog, inventory, orders = await self._get_stores()

        stats = DashboardStats(
            total_products=await catalog.count_products(),
            out_of_stock_products=await catalog.count_products(stock_filter="out"),
            low_stock_products=await catalog.count_products(stock_filter="low"),
            pending_orders=await orders.count_orders(status=OrderStatus.PENDING),
            monthly_movements=await inventory.count_movements(start=month_start),
            stock_alerts=await catalog.list_products(
                stock_filter="alert",
                order_by="stock",
                limit=settings.dashboard_alert_limit,
            ),
            recent_movements=await inventory.list_movements(
                limit=settings.dashboard_recent_limit
            ),
        )

        logger.info(
            "dashboard_stats_computed",
            total_products=stats.total_products,
            alerts=len(stats.stock_alerts),
        )
        return stats

    def to_response(self, stats: DashboardStats) -> DashboardStatsResponse:
        """Convert result to API response."""
        return DashboardStatsResponse(
            stats=DashboardCounters(
                total_products=stats.total_products,
                out_of_stock_products=stats.out_of_stock_products,
                low_stock_products=stats.low_stock_products,
                pending_orders=stats.pending_orders,
                monthly_movements=stats.monthly_movements,
            ),
            stock_alerts=[ProductResponse.from_entity(p) for p in stats.stock_alerts],
            recent_movements=[
                StockMovementResponse.from_entity(m) for m in stats.recent_movements
            ],
        )
