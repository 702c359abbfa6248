"""Core domain entities."""

from stockroom.core.entities.catalog import Category, Product, Supplier
from stockroom.core.entities.inventory import (
    LedgerPosting,
    MovementDirection,
    StockDiscrepancy,
    StockMovement,
)
from stockroom.core.entities.purchase_order import (
    OrderStatus,
    PurchaseOrder,
    PurchaseOrderLineItem,
)
from stockroom.core.entities.user import User, UserRole

__all__ = [
    # Catalog
    "Category",
    "Product",
    "Supplier",
    # Ledger
    "MovementDirection",
    "StockMovement",
    "LedgerPosting",
    "StockDiscrepancy",
    # Purchasing
    "OrderStatus",
    "PurchaseOrder",
    "PurchaseOrderLineItem",
    # Users
    "User",
    "UserRole",
]
