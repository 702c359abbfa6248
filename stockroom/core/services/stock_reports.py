"""
Stock reporting aggregations.

Pure functions over already-loaded entities: category stock totals,
movement totals, supplier order totals, monthly in/out trend and stock
alert classification. Result sets are small, so everything is folded in
memory.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from stockroom.core.entities.catalog import Category, Product, Supplier
from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.core.entities.purchase_order import PurchaseOrder


@dataclass
class CategoryStockStats:
    """Stock totals for one category."""

    category_id: int | None
    name: str
    total_stock: int = 0
    product_count: int = 0
    low_stock_count: int = 0  # products at or below their threshold


@dataclass
class MovementStats:
    """Quantity and count totals per direction."""

    total_in: int = 0
    total_out: int = 0
    in_count: int = 0
    out_count: int = 0

    @property
    def net_change(self) -> int:
        return self.total_in - self.total_out


@dataclass
class SupplierOrderStats:
    """Purchase order totals for one supplier."""

    supplier_id: int | None
    name: str
    order_count: int = 0
    total_amount: float = 0.0


@dataclass
class MonthlyMovementStats:
    """In/out quantities for one calendar month."""

    year: int
    month: int
    total_in: int = 0
    total_out: int = 0

    @property
    def label(self) -> str:
        return f"{self.year}/{self.month}"


@dataclass
class StockAlerts:
    """Products needing replenishment, split by severity."""

    out_of_stock: list[Product] = field(default_factory=list)
    low_stock: list[Product] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.out_of_stock) + len(self.low_stock)


def category_stats(
    categories: Iterable[Category], products: Iterable[Product]
) -> list[CategoryStockStats]:
    """Aggregate product stock per category, in category order."""
    by_category: dict[int | None, list[Product]] = defaultdict(list)
    for product in products:
        by_category[product.category_id].append(product)

    stats = []
    for category in categories:
        members = by_category.get(category.id, [])
        stats.append(
            CategoryStockStats(
                category_id=category.id,
                name=category.name,
                total_stock=sum(p.current_stock for p in members),
                product_count=len(members),
                low_stock_count=sum(1 for p in members if p.needs_attention),
            )
        )
    return stats


def movement_stats(movements: Iterable[StockMovement]) -> MovementStats:
    """Sum movement quantities and counts per direction."""
    stats = MovementStats()
    for movement in movements:
        if movement.direction == MovementDirection.IN:
            stats.total_in += movement.quantity
            stats.in_count += 1
        else:
            stats.total_out += movement.quantity
            stats.out_count += 1
    return stats


def supplier_order_stats(
    suppliers: Iterable[Supplier], orders: Iterable[PurchaseOrder]
) -> list[SupplierOrderStats]:
    """Count orders and sum their totals per supplier, in supplier order."""
    by_supplier: dict[int, list[PurchaseOrder]] = defaultdict(list)
    for order in orders:
        by_supplier[order.supplier_id].append(order)

    stats = []
    for supplier in suppliers:
        placed = by_supplier.get(supplier.id, []) if supplier.id is not None else []
        stats.append(
            SupplierOrderStats(
                supplier_id=supplier.id,
                name=supplier.name,
                order_count=len(placed),
                total_amount=round(sum(o.total_amount for o in placed), 2),
            )
        )
    return stats


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def monthly_stats(
    movements: Iterable[StockMovement],
    now: datetime,
    months: int = 6,
) -> list[MonthlyMovementStats]:
    """
    In/out totals for the last `months` calendar months, oldest first.

    The current month is the last bucket; movements outside the window are
    ignored.
    """
    buckets: dict[tuple[int, int], MonthlyMovementStats] = {}
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        buckets[(year, month)] = MonthlyMovementStats(year=year, month=month)

    for movement in movements:
        bucket = buckets.get((movement.created_at.year, movement.created_at.month))
        if bucket is None:
            continue
        if movement.direction == MovementDirection.IN:
            bucket.total_in += movement.quantity
        else:
            bucket.total_out += movement.quantity

    return list(buckets.values())


def month_window_start(now: datetime, months: int) -> datetime:
    """First instant of the oldest month covered by monthly_stats."""
    year, month = _shift_month(now.year, now.month, -(months - 1))
    return now.replace(
        year=year, month=month, day=1, hour=0, minute=0, second=0, microsecond=0
    )


def classify_alerts(products: Iterable[Product]) -> StockAlerts:
    """Split products at or below their threshold into out-of-stock and low."""
    alerts = StockAlerts()
    for product in products:
        if product.is_out_of_stock:
            alerts.out_of_stock.append(product)
        elif product.is_low_stock:
            alerts.low_stock.append(product)
    return alerts
