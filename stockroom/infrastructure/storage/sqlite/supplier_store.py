"""SQLite implementation of supplier storage."""

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.catalog import Supplier, utcnow
from stockroom.core.interfaces.catalog_store import ISupplierStore
from stockroom.infrastructure.storage.sqlite.base import (
    SQLiteStore,
    now_db_time,
    parse_db_time,
)

logger = get_logger(__name__)


class SQLiteSupplierStore(SQLiteStore, ISupplierStore):
    """SQLite implementation of supplier storage."""

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a new supplier."""
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO suppliers (name, email, phone, address, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (supplier.name, supplier.email, supplier.phone, supplier.address, now),
            )
            supplier.id = cursor.lastrowid
            supplier.created_at = parse_db_time(now)
            logger.info("supplier_created", supplier_id=supplier.id, name=supplier.name)
            return supplier

    async def get_supplier(self, supplier_id: int) -> Supplier | None:
        """Get supplier by ID."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers WHERE id = ?", (supplier_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_supplier(row)

    async def list_suppliers(self) -> list[Supplier]:
        """List suppliers ordered by name."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM suppliers ORDER BY name COLLATE NOCASE, id"
            )
            rows = await cursor.fetchall()
            return [self._row_to_supplier(row) for row in rows]

    def _row_to_supplier(self, row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            address=row["address"],
            created_at=parse_db_time(row["created_at"]) or utcnow(),
        )
