"""SQLite storage implementations."""

from stockroom.infrastructure.storage.sqlite.catalog_store import SQLiteCatalogStore
from stockroom.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_pool,
)
from stockroom.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from stockroom.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderStore,
)
from stockroom.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from stockroom.infrastructure.storage.sqlite.user_store import SQLiteUserStore

# Singleton instances
_catalog_store: SQLiteCatalogStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_purchase_order_store: SQLitePurchaseOrderStore | None = None
_user_store: SQLiteUserStore | None = None


async def get_catalog_store() -> SQLiteCatalogStore:
    """Get singleton catalog store instance."""
    global _catalog_store
    if _catalog_store is None:
        _catalog_store = SQLiteCatalogStore()
    return _catalog_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store instance."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_purchase_order_store() -> SQLitePurchaseOrderStore:
    """Get singleton purchase order store instance."""
    global _purchase_order_store
    if _purchase_order_store is None:
        _purchase_order_store = SQLitePurchaseOrderStore()
    return _purchase_order_store


async def get_user_store() -> SQLiteUserStore:
    """Get singleton user store instance."""
    global _user_store
    if _user_store is None:
        _user_store = SQLiteUserStore()
    return _user_store


def reset_stores() -> None:
    """Drop store singletons so the next getters bind to a fresh pool."""
    global _catalog_store, _supplier_store, _inventory_store, _purchase_order_store, _user_store
    _catalog_store = None
    _supplier_store = None
    _inventory_store = None
    _purchase_order_store = None
    _user_store = None


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    # Store classes
    "SQLiteCatalogStore",
    "SQLiteSupplierStore",
    "SQLiteInventoryStore",
    "SQLitePurchaseOrderStore",
    "SQLiteUserStore",
    # Factory functions
    "get_catalog_store",
    "get_supplier_store",
    "get_inventory_store",
    "get_purchase_order_store",
    "get_user_store",
    "reset_stores",
]
