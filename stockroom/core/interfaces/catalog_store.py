"""Abstract interfaces for catalog storage."""

from abc import ABC, abstractmethod
from typing import Literal

from stockroom.core.entities.catalog import Category, Product, Supplier

StockFilter = Literal["all", "low", "out", "alert"]
ProductOrder = Literal["created", "name", "stock"]


class ICatalogStore(ABC):
    """Interface for category and product persistence."""

    # Categories

    @abstractmethod
    async def create_category(self, category: Category) -> Category:
        """Create a new category."""
        pass

    @abstractmethod
    async def get_category(self, category_id: int) -> Category | None:
        """Get category by ID."""
        pass

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """List categories ordered by name, with product counts."""
        pass

    @abstractmethod
    async def update_category(self, category: Category) -> Category:
        """Update category name and description."""
        pass

    @abstractmethod
    async def delete_category(self, category_id: int) -> None:
        """Delete a category that has no products."""
        pass

    # Products

    @abstractmethod
    async def create_product(self, product: Product, actor_id: str) -> Product:
        """
        Create a product.

        A non-zero product.current_stock is booked as an opening IN movement
        in the same transaction as the product row.
        """
        pass

    @abstractmethod
    async def get_product(self, product_id: int) -> Product | None:
        """Get product by ID."""
        pass

    @abstractmethod
    async def get_product_by_sku(self, sku: str) -> Product | None:
        """Get product by SKU."""
        pass

    @abstractmethod
    async def get_products(self, product_ids: list[int]) -> list[Product]:
        """Get all existing products among the given IDs."""
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def count_products(
        self,
        search: str | None = None,
        category_id: int | None = None,
        stock_filter: StockFilter = "all",
    ) -> int:
        """Count products matching the filters."""
        pass

    @abstractmethod
    async def update_product(self, product: Product) -> Product:
        """Update descriptive product fields. Never touches current_stock."""
        pass

    @abstractmethod
    async def delete_product(self, product_id: int) -> None:
        """Delete a product that has no stock movements."""
        pass


class ISupplierStore(ABC):
    """Interface for supplier persistence."""

    @abstractmethod
    async def create_supplier(self, supplier: Supplier) -> Supplier:
        """Create a new supplier."""
        pass

    @abstractmethod
    async def get_supplier(self, supplier_id: int) -> Supplier | None:
        """Get supplier by ID."""
        pass

    @abstractmethod
    async def list_suppliers(self) -> list[Supplier]:
        """List suppliers ordered by name."""
        pass
