"""Core interfaces (ports) for dependency injection."""

from stockroom.core.interfaces.catalog_store import (
    ICatalogStore,
    ISupplierStore,
    ProductOrder,
    StockFilter,
)
from stockroom.core.interfaces.inventory_store import IInventoryStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.core.interfaces.user_store import IUserStore

__all__ = [
    "ICatalogStore",
    "ISupplierStore",
    "IInventoryStore",
    "IPurchaseOrderStore",
    "IUserStore",
    "StockFilter",
    "ProductOrder",
]
