"""
CSV exports for products, stock movements and purchase orders.

Output starts with a UTF-8 byte order mark so spreadsheet tools pick the
right encoding.
"""

import csv
import io
from collections.abc import Iterable, Sequence
from datetime import datetime

from stockroom.core.entities.catalog import Product
from stockroom.core.entities.inventory import StockMovement
from stockroom.core.entities.purchase_order import PurchaseOrder

BOM = "\ufeff"

PRODUCT_COLUMNS = ["name", "sku", "category", "price", "current_stock", "min_stock_level"]
MOVEMENT_COLUMNS = ["created_at", "direction", "product_name", "sku", "quantity", "reason", "actor_id"]
ORDER_COLUMNS = ["order_date", "supplier", "status", "expected_date", "total_amount"]


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def _render(header: Sequence[str], rows: Iterable[Sequence[object]]) -> str:
    output = io.StringIO()
    output.write(BOM)
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return output.getvalue()


def products_csv(products: Iterable[Product]) -> str:
    return _render(
        PRODUCT_COLUMNS,
        (
            [
                p.name,
                p.sku,
                p.category_name or "",
                p.price,
                p.current_stock,
                p.min_stock_level,
            ]
            for p in products
        ),
    )


def movements_csv(movements: Iterable[StockMovement]) -> str:
    return _render(
        MOVEMENT_COLUMNS,
        (
            [
                _iso(m.created_at),
                m.direction.value,
                m.product_name or "",
                m.product_sku or "",
                m.quantity,
                m.reason,
                m.actor_id,
            ]
            for m in movements
        ),
    )


def orders_csv(orders: Iterable[PurchaseOrder]) -> str:
    return _render(
        ORDER_COLUMNS,
        (
            [
                _iso(o.order_date),
                o.supplier_name or "",
                o.status.value,
                o.expected_date.isoformat() if o.expected_date else "",
                o.total_amount,
            ]
            for o in orders
        ),
    )
