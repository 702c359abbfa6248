"""SQLite implementation of category and product storage."""

from typing import Any

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.catalog import Category, Product, utcnow
from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.core.exceptions import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateSkuError,
    ProductInUseError,
    ProductNotFoundError,
)
from stockroom.core.interfaces.catalog_store import (
    ICatalogStore,
    ProductOrder,
    StockFilter,
)
from stockroom.infrastructure.storage.sqlite.base import (
    PRODUCT_SELECT,
    SQLiteStore,
    now_db_time,
    parse_db_time,
    row_to_product,
)
from stockroom.infrastructure.storage.sqlite.ledger import fetch_product, post_movement

logger = get_logger(__name__)

OPENING_STOCK_REASON = "opening stock"

_STOCK_FILTERS: dict[str, str] = {
    "all": "",
    "low": "p.current_stock > 0 AND p.current_stock <= p.min_stock_level",
    "out": "p.current_stock = 0",
    "alert": "p.current_stock <= p.min_stock_level",
}

_PRODUCT_ORDER: dict[str, str] = {
    "created": "p.created_at DESC, p.id DESC",
    "name": "p.name COLLATE NOCASE, p.id",
    "stock": "p.current_stock, p.name COLLATE NOCASE",
}


def _product_filters(
    search: str | None,
    category_id: int | None,
    stock_filter: StockFilter,
) -> tuple[str, list[Any]]:
    clauses: list[str] = []
    params: list[Any] = []
    if search:
        pattern = f"%{search.strip()}%"
        clauses.append("(p.name LIKE ? OR p.sku LIKE ? OR p.description LIKE ?)")
        params.extend([pattern, pattern, pattern])
    if category_id is not None:
        clauses.append("p.category_id = ?")
        params.append(category_id)
    stock_clause = _STOCK_FILTERS.get(stock_filter, "")
    if stock_clause:
        clauses.append(stock_clause)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


def _row_to_category(row: aiosqlite.Row) -> Category:
    keys = row.keys()
    return Category(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        product_count=row["product_count"] if "product_count" in keys else 0,
        created_at=parse_db_time(row["created_at"]) or utcnow(),
        updated_at=parse_db_time(row["updated_at"]) or utcnow(),
    )


class SQLiteCatalogStore(SQLiteStore, ICatalogStore):
    """SQLite implementation of category and product storage."""

    # Categories

    async def create_category(self, category: Category) -> Category:
        """Create a new category."""
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO categories (name, description, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                """,
                (category.name, category.description, now, now),
            )
            category.id = cursor.lastrowid
            category.created_at = parse_db_time(now)
            category.updated_at = category.created_at
            logger.info("category_created", category_id=category.id, name=category.name)
            return category

    async def get_category(self, category_id: int) -> Category | None:
        """Get category by ID, with its product count."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT c.*, (
                    SELECT COUNT(*) FROM products p WHERE p.category_id = c.id
                ) AS product_count
                FROM categories c
                WHERE c.id = ?
                """,
                (category_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return _row_to_category(row)

    async def list_categories(self) -> list[Category]:
        """List categories ordered by name, with product counts."""
        async with self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT c.*, COUNT(p.id) AS product_count
                FROM categories c
                LEFT JOIN products p ON p.category_id = c.id
                GROUP BY c.id
                ORDER BY c.name COLLATE NOCASE, c.id
                """
            )
            rows = await cursor.fetchall()
            return [_row_to_category(row) for row in rows]

    async def update_category(self, category: Category) -> Category:
        """Update category name and description."""
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE categories SET name = ?, description = ?, updated_at = ?
                WHERE id = ?
                """,
                (category.name, category.description, now, category.id),
            )
            if cursor.rowcount == 0:
                raise CategoryNotFoundError(category.id)
            category.updated_at = parse_db_time(now)
            logger.info("category_updated", category_id=category.id)
            return category

    async def delete_category(self, category_id: int) -> None:
        """Delete a category that has no products."""
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM products WHERE category_id = ?", (category_id,)
            )
            product_count = (await cursor.fetchone())[0]
            if product_count:
                raise CategoryInUseError(category_id, product_count)

            cursor = await conn.execute(
                "DELETE FROM categories WHERE id = ?", (category_id,)
            )
            if cursor.rowcount == 0:
                raise CategoryNotFoundError(category_id)
            logger.info("category_deleted", category_id=category_id)

    # Products

    async def create_product(self, product: Product, actor_id: str) -> Product:
        """Insert the product at zero stock, then book its opening stock as a movement."""
        opening_stock = product.current_stock
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                "SELECT id FROM products WHERE sku = ?", (product.sku,)
            )
            existing = await cursor.fetchone()
            if existing is not None:
                raise DuplicateSkuError(product.sku, existing["id"])

            cursor = await conn.execute(
                "SELECT 1 FROM categories WHERE id = ?", (product.category_id,)
            )
            if await cursor.fetchone() is None:
                raise CategoryNotFoundError(product.category_id)

            cursor = await conn.execute(
                """
                INSERT INTO products (
                    name, sku, description, category_id, price,
                    current_stock, min_stock_level, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, 0, ?, ?, ?)
                """,
                (
                    product.name,
                    product.sku,
                    product.description,
                    product.category_id,
                    product.price,
                    product.min_stock_level,
                    now,
                    now,
                ),
            )
            product_id = cursor.lastrowid

            if opening_stock > 0:
                await post_movement(
                    conn,
                    StockMovement(
                        product_id=product_id,
                        direction=MovementDirection.IN,
                        quantity=opening_stock,
                        reason=OPENING_STOCK_REASON,
                        actor_id=actor_id,
                    ),
                )

            created = await fetch_product(conn, product_id)
            if created is None:
                raise ProductNotFoundError(product_id)
            logger.info(
                "product_created",
                product_id=product_id,
                sku=product.sku,
                opening_stock=opening_stock,
            )
            return created

    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        async with self._connection() as conn:
            return await fetch_product(conn, product_id)

    async def get_product_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU."""
        async with self._connection() as conn:
            cursor = await conn.execute(f"{PRODUCT_SELECT} WHERE p.sku = ?", (sku,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return row_to_product(row)

    async def get_products(self, product_ids: list[int]) -> list[Product]:
        """Get all existing products among the given IDs."""
        ids = sorted(set(product_ids))
        if not ids:
            return []
        placeholders = ", ".join("?" for _ in ids)
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"{PRODUCT_SELECT} WHERE p.id IN ({placeholders}) ORDER BY p.id",
                ids,
            )
            rows = await cursor.fetchall()
            return [row_to_product(row) for row in rows]

    async def list_products(
        self,
        search: str | None = None,
        category_id: int | None = None,
        stock_filter: StockFilter = "all",
        order_by: ProductOrder = "created",
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[Product]:
        """List products matching the filters."""
        where, params = _product_filters(search, category_id, stock_filter)
        order = _PRODUCT_ORDER.get(order_by, _PRODUCT_ORDER["created"])
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"""
                {PRODUCT_SELECT}
                {where}
                ORDER BY {order}
                LIMIT ? OFFSET ?
                """,
                (*params, -1 if limit is None else limit, offset),
            )
            rows = await cursor.fetchall()
            return [row_to_product(row) for row in rows]

    async def count_products(
        self,
        search: str | None = None,
        category_id: int | None = None,
        stock_filter: StockFilter = "all",
    ) -> int:
        """Count products matching the filters."""
        where, params = _product_filters(search, category_id, stock_filter)
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"SELECT COUNT(*) FROM products p {where}", params
            )
            row = await cursor.fetchone()
            return row[0] if row else 0

    async def update_product(self, product: Product) -> Product:
        """Update descriptive fields; current_stock is left to the ledger."""
        now = now_db_time()
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                "SELECT id FROM products WHERE sku = ? AND id != ?",
                (product.sku, product.id),
            )
            clash = await cursor.fetchone()
            if clash is not None:
                raise DuplicateSkuError(product.sku, clash["id"])

            cursor = await conn.execute(
                "SELECT 1 FROM categories WHERE id = ?", (product.category_id,)
            )
            if await cursor.fetchone() is None:
                raise CategoryNotFoundError(product.category_id)

            cursor = await conn.execute(
                """
                UPDATE products SET
                    name = ?,
                    sku = ?,
                    description = ?,
                    category_id = ?,
                    price = ?,
                    min_stock_level = ?,
                    updated_at = ?
                WHERE id = ?
                """,
                (
                    product.name,
                    product.sku,
                    product.description,
                    product.category_id,
                    product.price,
                    product.min_stock_level,
                    now,
                    product.id,
                ),
            )
            if cursor.rowcount == 0:
                raise ProductNotFoundError(product.id)

            updated = await fetch_product(conn, product.id)
            if updated is None:
                raise ProductNotFoundError(product.id)
            logger.info("product_updated", product_id=product.id)
            return updated

    async def delete_product(self, product_id: int) -> None:
        """Delete a product that has no stock movements."""
        async with self._write_transaction() as conn:
            cursor = await conn.execute(
                "SELECT COUNT(*) FROM stock_movements WHERE product_id = ?",
                (product_id,),
            )
            movement_count = (await cursor.fetchone())[0]
            if movement_count:
                raise ProductInUseError(product_id, movement_count)

            cursor = await conn.execute(
                "DELETE FROM products WHERE id = ?", (product_id,)
            )
            if cursor.rowcount == 0:
                raise ProductNotFoundError(product_id)
            logger.info("product_deleted", product_id=product_id)
