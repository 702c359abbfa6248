"""
Stock ledger posting inside an open write transaction.

This is the only code path that writes products.current_stock after a
product exists. Callers own the transaction: everything posted here commits
or rolls back with the rest of their unit of work.
"""

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.catalog import Product
from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stockroom.infrastructure.storage.sqlite.base import (
    PRODUCT_SELECT,
    row_to_product,
    to_db_time,
)

logger = get_logger(__name__)

# Largest value an SQLite INTEGER column holds
MAX_STOCK = 2**63 - 1


async def fetch_product(conn: aiosqlite.Connection, product_id: int) -> Product | None:
    """Read a product through the caller's connection."""
    cursor = await conn.execute(f"{PRODUCT_SELECT} WHERE p.id = ?", (product_id,))
    row = await cursor.fetchone()
    if row is None:
        return None
    return row_to_product(row)


async def post_movement(conn: aiosqlite.Connection, movement: StockMovement) -> Product:
    """
    Adjust the product's stock and append the movement record.

    The stock change is a conditional update, so an OUT movement only lands
    when enough stock is on hand at the moment the update runs, and an IN
    movement only when the new balance still fits an INTEGER column. Sets
    movement.id and returns the product after the change.
    """
    if movement.quantity > MAX_STOCK:
        raise ValidationError("quantity", f"must be at most {MAX_STOCK}", movement.quantity)
    changed_at = to_db_time(movement.created_at)

    if movement.direction == MovementDirection.OUT:
        cursor = await conn.execute(
            """
            UPDATE products
            SET current_stock = current_stock - ?, updated_at = ?
            WHERE id = ? AND current_stock >= ?
            """,
            (movement.quantity, changed_at, movement.product_id, movement.quantity),
        )
    else:
        cursor = await conn.execute(
            """
            UPDATE products
            SET current_stock = current_stock + ?, updated_at = ?
            WHERE id = ? AND current_stock <= ? - ?
            """,
            (movement.quantity, changed_at, movement.product_id, MAX_STOCK, movement.quantity),
        )

    if cursor.rowcount == 0:
        current = await fetch_product(conn, movement.product_id)
        if current is None:
            raise ProductNotFoundError(movement.product_id)
        if movement.direction == MovementDirection.IN:
            raise ValidationError(
                "quantity",
                f"would raise stock above {MAX_STOCK} (current {current.current_stock})",
                movement.quantity,
            )
        raise InsufficientStockError(
            product_id=movement.product_id,
            requested=movement.quantity,
            available=current.current_stock,
        )

    cursor = await conn.execute(
        """
        INSERT INTO stock_movements (
            product_id, direction, quantity, reason, actor_id,
            purchase_order_id, idempotency_key, created_at
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            movement.product_id,
            movement.direction.value,
            movement.quantity,
            movement.reason,
            movement.actor_id,
            movement.purchase_order_id,
            movement.idempotency_key,
            changed_at,
        ),
    )
    movement.id = cursor.lastrowid

    product = await fetch_product(conn, movement.product_id)
    if product is None:
        raise ProductNotFoundError(movement.product_id)
    movement.product_name = product.name
    movement.product_sku = product.sku

    logger.info(
        "stock_movement_posted",
        movement_id=movement.id,
        product_id=movement.product_id,
        direction=movement.direction.value,
        qty=movement.quantity,
        new_stock=product.current_stock,
    )
    return product
