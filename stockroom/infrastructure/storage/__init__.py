"""Storage infrastructure implementations."""

from stockroom.infrastructure.storage.sqlite import (
    SQLiteCatalogStore,
    SQLiteInventoryStore,
    SQLitePurchaseOrderStore,
    SQLiteSupplierStore,
    SQLiteUserStore,
    close_pool,
    get_pool,
)

__all__ = [
    # SQLite stores
    "SQLiteCatalogStore",
    "SQLiteSupplierStore",
    "SQLiteInventoryStore",
    "SQLitePurchaseOrderStore",
    "SQLiteUserStore",
    # Connection pool
    "get_pool",
    "close_pool",
]
