"""SQLite implementation of the stock ledger."""

from datetime import datetime
from typing import Any

from stockroom.config import get_logger
from stockroom.core.entities.inventory import (
    LedgerPosting,
    MovementDirection,
    StockDiscrepancy,
    StockMovement,
)
from stockroom.core.exceptions import IdempotencyKeyConflictError, ProductNotFoundError
from stockroom.core.interfaces.inventory_store import IInventoryStore
from stockroom.infrastructure.storage.sqlite.base import (
    MOVEMENT_SELECT,
    SQLiteStore,
    row_to_movement,
    to_db_time,
)
from stockroom.infrastructure.storage.sqlite.ledger import fetch_product, post_movement

logger = get_logger(__name__)


def _movement_filters(
    product_id: int | None,
    direction: MovementDirection | None,
    start: datetime | None,
    end: datetime | None,
    purchase_order_id: int | None,
) -> tuple[str, list[Any]]:
    """Build the WHERE clause shared by list and count queries."""
    clauses: list[str] = []
    params: list[Any] = []
    if product_id is not None:
        clauses.append("m.product_id = ?")
        params.append(product_id)
    if direction is not None:
        clauses.append("m.direction = ?")
        params.append(MovementDirection(direction).value)
    if start is not None:
        clauses.append("m.created_at >= ?")
        params.append(to_db_time(start))
    if end is not None:
        clauses.append("m.created_at <= ?")
        params.append(to_db_time(end))
    if purchase_order_id is not None:
        clauses.append("m.purchase_order_id = ?")
        params.append(purchase_order_id)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class SQLiteInventoryStore(SQLiteStore, IInventoryStore):
    """SQLite implementation of stock movement storage."""

    async def apply_movement(self, movement: StockMovement) -> LedgerPosting:
        """Post a movement, or replay the one already stored under its idempotency key."""
        async with self._write_transaction() as conn:
            if movement.idempotency_key:
                cursor = await conn.execute(
                    f"{MOVEMENT_SELECT} WHERE m.idempotency_key = ?",
                    (movement.idempotency_key,),
                )
                row = await cursor.fetchone()
                if row is not None:
                    existing = row_to_movement(row)
                    if not existing.same_request_as(movement):
                        raise IdempotencyKeyConflictError(
                            movement.idempotency_key, existing.id
                        )
                    product = await fetch_product(conn, existing.product_id)
                    if product is None:
                        raise ProductNotFoundError(existing.product_id)
                    logger.info(
                        "stock_movement_replayed",
                        movement_id=existing.id,
                        idempotency_key=movement.idempotency_key,
                    )
                    return LedgerPosting(movement=existing, product=product, replayed=True)

            product = await post_movement(conn, movement)
            return LedgerPosting(movement=movement, product=product)

    async def get_movement(self, movement_id: int) -> StockMovement | None:
        """Get movement by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"{MOVEMENT_SELECT} WHERE m.id = ?", (movement_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_movement(row)

    async def list_movements(
        self,
        product_id: int | None = None,
        direction: MovementDirection | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        purchase_order_id: int | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[StockMovement]:
        """List movements, newest first."""
        where, params = _movement_filters(
            product_id, direction, start, end, purchase_order_id
        )
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"""
                {MOVEMENT_SELECT}
                {where}
                ORDER BY m.created_at DESC, m.id DESC
                LIMIT ? OFFSET ?
                """,
                (*params, -1 if limit is None else limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_movement(row) for row in rows]

    async def count_movements(
        self,
        product_id: int | None = None,
        direction: MovementDirection | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        purchase_order_id: int | None = None,
    ) -> int:
        """Count movements matching the filters."""
        where, params = _movement_filters(
            product_id, direction, start, end, purchase_order_id
        )
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM stock_movements m {where}", params
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def find_stock_discrepancies(self) -> list[StockDiscrepancy]:
        """Compare every product's balance with the sum of its signed movements."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT
                    p.id AS product_id,
                    p.sku AS sku,
                    p.current_stock AS recorded_stock,
                    COALESCE(SUM(
                        CASE m.direction WHEN 'IN' THEN m.quantity ELSE -m.quantity END
                    ), 0) AS ledger_stock
                FROM products p
                LEFT JOIN stock_movements m ON m.product_id = p.id
                GROUP BY p.id
                HAVING p.current_stock != COALESCE(SUM(
                    CASE m.direction WHEN 'IN' THEN m.quantity ELSE -m.quantity END
                ), 0)
                ORDER BY p.id
                """
            )
            rows = await cursor.fetchall()
            discrepancies = [
                StockDiscrepancy(
                    product_id=row["product_id"],
                    sku=row["sku"],
                    recorded_stock=row["recorded_stock"],
                    ledger_stock=row["ledger_stock"],
                )
                for row in rows
            ]
            if discrepancies:
                logger.warning(
                    "stock_discrepancies_found",
                    count=len(discrepancies),
                    product_ids=[d.product_id for d in discrepancies],
                )
            return discrepancies
