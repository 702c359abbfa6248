"""Tests for stock reporting aggregations."""

from datetime import UTC, datetime

from stockroom.core.entities.catalog import Category, Product, Supplier
from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.core.entities.purchase_order import PurchaseOrder
from stockroom.core.services.stock_reports import (
    category_stats,
    classify_alerts,
    month_window_start,
    monthly_stats,
    movement_stats,
    supplier_order_stats,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _product(pid: int, category_id: int, stock: int, threshold: int = 2) -> Product:
    return Product(
        id=pid, name=f"P{pid}", sku=f"SKU-{pid}", category_id=category_id,
        current_stock=stock, min_stock_level=threshold,
    )


def _movement(direction: str, qty: int, when: datetime = NOW) -> StockMovement:
    return StockMovement(
        product_id=1, direction=MovementDirection(direction), quantity=qty,
        reason="test", actor_id="a", created_at=when,
    )


class TestCategoryStats:
    def test_totals_per_category(self):
        categories = [Category(id=1, name="Tools"), Category(id=2, name="Paint")]
        products = [_product(1, 1, 10), _product(2, 1, 1), _product(3, 2, 0)]

        stats = category_stats(categories, products)

        assert [s.name for s in stats] == ["Tools", "Paint"]
        assert stats[0].total_stock == 11
        assert stats[0].product_count == 2
        assert stats[0].low_stock_count == 1
        assert stats[1].low_stock_count == 1

    def test_empty_category(self):
        stats = category_stats([Category(id=9, name="Empty")], [])
        assert stats[0].total_stock == 0
        assert stats[0].product_count == 0


class TestMovementStats:
    def test_sums_by_direction(self):
        stats = movement_stats([_movement("IN", 5), _movement("IN", 3), _movement("OUT", 4)])
        assert stats.total_in == 8
        assert stats.in_count == 2
        assert stats.total_out == 4
        assert stats.out_count == 1
        assert stats.net_change == 4

    def test_no_movements(self):
        assert movement_stats([]).net_change == 0


class TestSupplierOrderStats:
    def test_counts_orders_per_supplier(self):
        suppliers = [Supplier(id=1, name="Acme"), Supplier(id=2, name="Bolt Co")]
        orders = [
            PurchaseOrder(supplier_id=1, total_amount=10.5),
            PurchaseOrder(supplier_id=1, total_amount=4.25),
        ]
        stats = supplier_order_stats(suppliers, orders)
        assert stats[0].order_count == 2
        assert stats[0].total_amount == 14.75
        assert stats[1].order_count == 0


class TestMonthlyStats:
    def test_window_is_oldest_first_and_ends_this_month(self):
        stats = monthly_stats([], NOW, months=6)
        assert [s.label for s in stats] == [
            "2025/10", "2025/11", "2025/12", "2026/1", "2026/2", "2026/3",
        ]

    def test_buckets_movements_and_ignores_older(self):
        movements = [
            _movement("IN", 5),
            _movement("OUT", 2),
            _movement("IN", 7, datetime(2026, 1, 31, 23, 0, tzinfo=UTC)),
            _movement("IN", 100, datetime(2024, 1, 1, tzinfo=UTC)),
        ]
        stats = {s.label: s for s in monthly_stats(movements, NOW, months=3)}
        assert stats["2026/3"].total_in == 5
        assert stats["2026/3"].total_out == 2
        assert stats["2026/1"].total_in == 7
        assert sum(s.total_in for s in stats.values()) == 12

    def test_window_start(self):
        start = month_window_start(NOW, 6)
        assert start == datetime(2025, 10, 1, tzinfo=UTC)


class TestClassifyAlerts:
    def test_splits_out_and_low(self):
        alerts = classify_alerts([_product(1, 1, 0), _product(2, 1, 2), _product(3, 1, 9)])
        assert [p.id for p in alerts.out_of_stock] == [1]
        assert [p.id for p in alerts.low_stock] == [2]
        assert alerts.total == 2
