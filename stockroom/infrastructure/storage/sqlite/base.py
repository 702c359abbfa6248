"""Shared plumbing for SQLite stores: pool access, time encoding, row mapping."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime

import aiosqlite

from stockroom.core.entities.catalog import Product
from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool

PRODUCT_SELECT = """
    SELECT p.*, c.name AS category_name
    FROM products p
    LEFT JOIN categories c ON c.id = p.category_id
"""

MOVEMENT_SELECT = """
    SELECT m.*, p.name AS product_name, p.sku AS product_sku
    FROM stock_movements m
    LEFT JOIN products p ON p.id = m.product_id
"""


class SQLiteStore:
    """
    Base for stores backed by a ConnectionPool.

    Stores built without a pool use the global one from settings.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    async def _get_pool(self) -> ConnectionPool:
        if self._pool is None:
            self._pool = await get_pool()
        return self._pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            yield conn

    @asynccontextmanager
    async def _write_transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Transaction holding the database write lock from its first statement."""
        pool = await self._get_pool()
        async with pool.transaction(immediate=True) as conn:
            yield conn


def to_db_time(value: datetime) -> str:
    """Encode a datetime as sortable UTC ISO text. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def now_db_time() -> str:
    return to_db_time(datetime.now(UTC))


def parse_db_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_db_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


def row_to_product(row: aiosqlite.Row) -> Product:
    """Convert a PRODUCT_SELECT row to a Product entity."""
    return Product(
        id=row["id"],
        name=row["name"],
        sku=row["sku"],
        description=row["description"],
        category_id=row["category_id"],
        category_name=row["category_name"],
        price=float(row["price"]),
        current_stock=int(row["current_stock"]),
        min_stock_level=int(row["min_stock_level"]),
        created_at=parse_db_time(row["created_at"]) or datetime.now(UTC),
        updated_at=parse_db_time(row["updated_at"]) or datetime.now(UTC),
    )


def row_to_movement(row: aiosqlite.Row) -> StockMovement:
    """Convert a MOVEMENT_SELECT row to a StockMovement entity."""
    return StockMovement(
        id=row["id"],
        product_id=row["product_id"],
        direction=MovementDirection(row["direction"]),
        quantity=int(row["quantity"]),
        reason=row["reason"],
        actor_id=row["actor_id"],
        purchase_order_id=row["purchase_order_id"],
        idempotency_key=row["idempotency_key"],
        created_at=parse_db_time(row["created_at"]) or datetime.now(UTC),
        product_name=row["product_name"],
        product_sku=row["product_sku"],
    )
