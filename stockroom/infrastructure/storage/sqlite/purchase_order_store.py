"""SQLite implementation of purchase order storage and receiving."""

from collections import defaultdict
from datetime import datetime
from typing import Any

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.catalog import utcnow
from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderLineItem,
)
from stockroom.core.exceptions import (
    OrderStatusConflictError,
    ProductNotFoundError,
    PurchaseOrderNotFoundError,
    SupplierNotFoundError,
)
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    parse_db_date,
    parse_db_time,
    to_db_time,
)
from stockroom.infrastructure.storage.sqlite.ledger import post_movement

logger = get_logger(__name__)

ORDER_SELECT = """
    SELECT o.*, s.name AS supplier_name
    FROM purchase_orders o
    LEFT JOIN suppliers s ON s.id = o.supplier_id
"""

ITEM_SELECT = """
    SELECT i.*, p.name AS product_name, p.sku AS product_sku
    FROM purchase_order_items i
    LEFT JOIN products p ON p.id = i.product_id
"""


def receipt_reason(order_id: int) -> str:
    """Reason recorded on movements posted by receiving an order."""
    return f"received from order {order_id}"


def _order_filters(
    status: OrderStatus | None,
    start: datetime | None,
    end: datetime | None,
) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if status is not None:
        clauses.append("o.status = ?")
        params.append(OrderStatus(status).value)
    if start is not None:
        clauses.append("o.order_date >= ?")
        params.append(to_db_time(start))
    if end is not None:
        clauses.append("o.order_date <= ?")
        params.append(to_db_time(end))
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SQLitePurchaseOrderStore(SQLiteStore, IPurchaseOrderStore):
    """SQLite implementation of purchase orders, line items and receiving."""

    async def create_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Create an order with its line items; the total is fixed here."""
        now = utcnow()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                "SELECT 1 FROM suppliers WHERE id = ?", (order.supplier_id,)
            )
            if await cursor.fetchone() is None:
                raise SupplierNotFoundError(order.supplier_id)

            product_ids = sorted({item.product_id for item in order.line_items})
            if product_ids:
                placeholders = ", ".join("?" for _ in product_ids)
                cursor = await conn.execute(
                    f"SELECT id FROM products WHERE id IN ({placeholders})",
                    product_ids,
                )
                found = {row["id"] for row in await cursor.fetchall()}
                missing = [pid for pid in product_ids if pid not in found]
                if missing:
                    raise ProductNotFoundError(missing)

            order.status = OrderStatus.PENDING
            order.total_amount = PurchaseOrder.compute_total(order.line_items)
            cursor = await conn.execute(
                """
                INSERT INTO purchase_orders (
                    supplier_id, status, order_date, expected_date,
                    total_amount, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    order.supplier_id,
                    order.status.value,
                    to_db_time(order.order_date),
                    order.expected_date.isoformat() if order.expected_date else None,
                    order.total_amount,
                    to_db_time(now),
                    to_db_time(now),
                ),
            )
            order_id = cursor.lastrowid

            await conn.executemany(
                """
                INSERT INTO purchase_order_items (order_id, product_id, quantity, unit_price)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (order_id, item.product_id, item.quantity, item.unit_price)
                    for item in order.line_items
                ],
            )

            created = await self._fetch_order(conn, order_id)
            if created is None:
                raise PurchaseOrderNotFoundError(order_id)
            logger.info(
                "purchase_order_created",
                order_id=order_id,
                supplier_id=order.supplier_id,
                line_items=len(order.line_items),
                total_amount=order.total_amount,
            )
            return created

    async def get_order(self, order_id: int) -> PurchaseOrder | None:
        """Get order with line items by ID."""
        async with self._connection() as conn:
            return await self._fetch_order(conn, order_id)

    async def list_orders(
        self,
        status: OrderStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[PurchaseOrder]:
        """List orders, newest first, with their line items."""
        where, params = _order_filters(status, start, end)
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"""
                {ORDER_SELECT}
                {where}
                ORDER BY o.order_date DESC, o.id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, -1 if limit is None else limit, offset),
            )
            rows = await cursor.fetchall()
            orders = [self._row_to_order(row) for row in rows]
            if not orders:
                return orders

            ids = [order.id for order in orders]
            placeholders = ", ".join("?" for _ in ids)
            cursor = await conn.execute(
                f"{ITEM_SELECT} WHERE i.order_id IN ({placeholders}) ORDER BY i.id",
                ids,
            )
            items_by_order: dict[int, list[PurchaseOrderLineItem]] = defaultdict(list)
            for row in await cursor.fetchall():
                items_by_order[row["order_id"]].append(self._row_to_item(row))
            for order in orders:
                order.line_items = items_by_order.get(order.id, [])
            return orders

    async def count_orders(
        self,
        status: OrderStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        """Count orders matching the filters."""
        where, params = _order_filters(status, start, end)
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM purchase_orders o {where}", params
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def receive_order(self, order_id: int, actor_id: str) -> PurchaseOrder:
        """
        Flip the order to RECEIVED and post one IN movement per line item.

        The status flip is conditional on the order still being PENDING, so a
        second receive finds nothing to update and no line is posted twice.
        Any failure while posting rolls back the status flip as well.
        """
        now = utcnow()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE purchase_orders
                SET status = ?, received_at = ?, updated_at = ?
                WHERE id = ? AND status = ?
                """,
                (
                    OrderStatus.RECEIVED.value,
                    to_db_time(now),
                    to_db_time(now),
                    order_id,
                    OrderStatus.PENDING.value,
                ),
            )
            if cursor.rowcount == 0:
                await self._raise_not_pending(conn, order_id, "receive")

            cursor = await conn.execute(
                "SELECT * FROM purchase_order_items WHERE order_id = ? ORDER BY id",
                (order_id,),
            )
            items = await cursor.fetchall()
            for item in items:
                await post_movement(
                    conn,
                    StockMovement(
                        product_id=item["product_id"],
                        direction=MovementDirection.IN,
                        quantity=item["quantity"],
                        reason=receipt_reason(order_id),
                        actor_id=actor_id,
                        purchase_order_id=order_id,
                        created_at=now,
                    ),
                )

            order = await self._fetch_order(conn, order_id)
            if order is None:
                raise PurchaseOrderNotFoundError(order_id)
            logger.info(
                "purchase_order_received",
                order_id=order_id,
                actor_id=actor_id,
                movements=len(items),
            )
            return order

    async def cancel_order(self, order_id: int) -> PurchaseOrder:
        """Mark a PENDING order CANCELLED."""
        now = to_db_time(utcnow())
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE purchase_orders
                SET status = ?, cancelled_at = ?, updated_at = ?
                WHERE id = ? AND status = ?
                """,
                (
                    OrderStatus.CANCELLED.value,
                    now,
                    now,
                    order_id,
                    OrderStatus.PENDING.value,
                ),
            )
            if cursor.rowcount == 0:
                await self._raise_not_pending(conn, order_id, "cancel")

            order = await self._fetch_order(conn, order_id)
            if order is None:
                raise PurchaseOrderNotFoundError(order_id)
            logger.info("purchase_order_cancelled", order_id=order_id)
            return order

    async def _raise_not_pending(
        self, conn: aiosqlite.Connection, order_id: int, action: str
    ) -> None:
        """Raise NotFound or the status conflict explaining a failed transition."""
        cursor = await conn.execute(
            "SELECT status FROM purchase_orders WHERE id = ?", (order_id,)
        )
        row = await cursor.fetchone()
        if row is None:
            raise PurchaseOrderNotFoundError(order_id)
        raise OrderStatusConflictError.for_status(order_id, row["status"], action)

    async def _fetch_order(
        self, conn: aiosqlite.Connection, order_id: int
    ) -> PurchaseOrder | None:
        cursor = await conn.execute(f"{ORDER_SELECT} WHERE o.id = ?", (order_id,))
        row = await cursor.fetchone()
        if row is None:
            return None
        order = self._row_to_order(row)

        cursor = await conn.execute(
            f"{ITEM_SELECT} WHERE i.order_id = ? ORDER BY i.id", (order_id,)
        )
        order.line_items = [self._row_to_item(item) for item in await cursor.fetchall()]
        return order

    def _row_to_order(self, row: aiosqlite.Row) -> PurchaseOrder:
        return PurchaseOrder(
            id=row["id"],
            supplier_id=row["supplier_id"],
            supplier_name=row["supplier_name"],
            status=OrderStatus(row["status"]),
            order_date=parse_db_time(row["order_date"]) or utcnow(),
            expected_date=parse_db_date(row["expected_date"]),
            total_amount=float(row["total_amount"]),
            received_at=parse_db_time(row["received_at"]),
            cancelled_at=parse_db_time(row["cancelled_at"]),
            created_at=parse_db_time(row["created_at"]) or utcnow(),
            updated_at=parse_db_time(row["updated_at"]) or utcnow(),
        )

    def _row_to_item(self, row: aiosqlite.Row) -> PurchaseOrderLineItem:
        return PurchaseOrderLineItem(
            id=row["id"],
            order_id=row["order_id"],
            product_id=row["product_id"],
            quantity=int(row["quantity"]),
            unit_price=float(row["unit_price"]),
            product_name=row["product_name"],
            product_sku=row["product_sku"],
        )
