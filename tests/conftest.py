"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Generator
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio

from stockroom.config import reset_settings
from stockroom.core.entities.catalog import Category, Product, Supplier
from stockroom.core.entities.purchase_order import PurchaseOrder, PurchaseOrderLineItem
from stockroom.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteCatalogStore,
    SQLiteInventoryStore,
    SQLitePurchaseOrderStore,
    SQLiteSupplierStore,
    SQLiteUserStore,
    close_pool,
    reset_stores,
)
from stockroom.infrastructure.storage.sqlite.migrations import initialize_database

ACTOR = "clerk-1"


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Point the global settings at a per-test data directory."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STORAGE_POOL_SIZE", "2")
    reset_settings()
    reset_stores()
    yield
    reset_stores()
    reset_settings()


@pytest_asyncio.fixture
async def db_path(tmp_path: Path) -> Path:
    """Temporary database migrated to the latest schema."""
    path = tmp_path / "stockroom-test.db"
    results = await initialize_database(path, create_backup_before=False)
    assert results and all(r.success for r in results)
    return path


@pytest_asyncio.fixture
async def pool(db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Connection pool bound to the temporary database."""
    pool = ConnectionPool(db_path, pool_size=4, busy_timeout=5000)
    yield pool
    await pool.close()
    await close_pool()


@pytest.fixture
def catalog_store(pool: ConnectionPool) -> SQLiteCatalogStore:
    return SQLiteCatalogStore(pool)


@pytest.fixture
def supplier_store(pool: ConnectionPool) -> SQLiteSupplierStore:
    return SQLiteSupplierStore(pool)


@pytest.fixture
def inventory_store(pool: ConnectionPool) -> SQLiteInventoryStore:
    return SQLiteInventoryStore(pool)


@pytest.fixture
def purchase_order_store(pool: ConnectionPool) -> SQLitePurchaseOrderStore:
    return SQLitePurchaseOrderStore(pool)


@pytest.fixture
def user_store(pool: ConnectionPool) -> SQLiteUserStore:
    return SQLiteUserStore(pool)


@pytest_asyncio.fixture
async def category(catalog_store: SQLiteCatalogStore) -> Category:
    return await catalog_store.create_category(
        Category(name="Fasteners", description="Screws, bolts and nails")
    )


@pytest_asyncio.fixture
async def supplier(supplier_store: SQLiteSupplierStore) -> Supplier:
    return await supplier_store.create_supplier(
        Supplier(name="Acme Hardware", email="orders@acme.example")
    )


@pytest_asyncio.fixture
async def product(catalog_store: SQLiteCatalogStore, category: Category) -> Product:
    """Product P with 10 units of opening stock."""
    return await catalog_store.create_product(
        Product(
            name="Wood screw 4x40",
            sku="WS-440",
            category_id=category.id,
            price=0.25,
            current_stock=10,
            min_stock_level=3,
        ),
        actor_id=ACTOR,
    )


@pytest_asyncio.fixture
async def pending_order(
    purchase_order_store: SQLitePurchaseOrderStore,
    supplier: Supplier,
    product: Product,
) -> PurchaseOrder:
    """PENDING order for 5 units of the seeded product."""
    return await purchase_order_store.create_order(
        PurchaseOrder(
            supplier_id=supplier.id,
            expected_date=date(2026, 11, 2),
            line_items=[
                PurchaseOrderLineItem(product_id=product.id, quantity=5, unit_price=0.2)
            ],
        )
    )
