"""Tests for catalog, ledger and purchase order entities."""

from stockroom.core.entities.catalog import Product
from stockroom.core.entities.inventory import MovementDirection, StockDiscrepancy, StockMovement
from stockroom.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderLineItem,
)


def _product(stock: int, threshold: int = 5) -> Product:
    return Product(
        id=1, name="Hinge", sku="H-1", category_id=1, price=2.5,
        current_stock=stock, min_stock_level=threshold,
    )


class TestProduct:
    def test_out_of_stock(self):
        product = _product(0)
        assert product.is_out_of_stock
        assert not product.is_low_stock
        assert product.needs_attention

    def test_low_stock_is_at_or_below_threshold(self):
        assert _product(5).is_low_stock
        assert _product(1).is_low_stock
        assert not _product(6).is_low_stock

    def test_stock_value(self):
        assert _product(4).stock_value == 10.0

    def test_zero_threshold_only_alerts_when_empty(self):
        assert not _product(1, threshold=0).needs_attention
        assert _product(0, threshold=0).needs_attention


class TestStockMovement:
    def test_signed_quantity(self):
        inbound = StockMovement(
            product_id=1, direction=MovementDirection.IN, quantity=4,
            reason="delivery", actor_id="a",
        )
        outbound = inbound.model_copy(update={"direction": MovementDirection.OUT})
        assert inbound.signed_quantity == 4
        assert outbound.signed_quantity == -4

    def test_same_request_ignores_reason_and_actor(self):
        first = StockMovement(
            product_id=1, direction=MovementDirection.OUT, quantity=2,
            reason="sale", actor_id="a",
        )
        retry = first.model_copy(update={"reason": "sale (retry)", "actor_id": "b"})
        different = first.model_copy(update={"quantity": 3})
        assert first.same_request_as(retry)
        assert not first.same_request_as(different)

    def test_created_at_is_aware(self):
        movement = StockMovement(
            product_id=1, direction="IN", quantity=1, reason="r", actor_id="a",
        )
        assert movement.direction is MovementDirection.IN
        assert movement.created_at.tzinfo is not None


class TestStockDiscrepancy:
    def test_difference(self):
        gap = StockDiscrepancy(product_id=1, sku="H-1", recorded_stock=7, ledger_stock=10)
        assert gap.difference == -3


class TestPurchaseOrder:
    def test_defaults_to_pending(self):
        order = PurchaseOrder(supplier_id=1)
        assert order.status == OrderStatus.PENDING
        assert not order.status.is_terminal

    def test_terminal_states(self):
        assert OrderStatus.RECEIVED.is_terminal
        assert OrderStatus.CANCELLED.is_terminal

    def test_compute_total(self):
        items = [
            PurchaseOrderLineItem(product_id=1, quantity=3, unit_price=1.1),
            PurchaseOrderLineItem(product_id=2, quantity=2, unit_price=0.35),
        ]
        assert items[0].line_total == 3 * 1.1
        assert PurchaseOrder.compute_total(items) == 4.0

    def test_compute_total_empty(self):
        assert PurchaseOrder.compute_total([]) == 0
