"""Catalog domain entities: categories, products, suppliers."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(UTC)


class Category(BaseModel):
    """Product grouping."""

    id: int | None = None
    name: str
    description: str | None = None
    product_count: int = 0  # populated by list queries only
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Product(BaseModel):
    """
    Catalog product with its materialized stock balance.

    current_stock is owned by the stock ledger once the product exists;
    min_stock_level is an alerting threshold, not a floor.
    """

    id: int | None = None
    name: str
    sku: str
    description: str | None = None
    category_id: int
    category_name: str | None = None
    price: float = 0.0
    current_stock: int = 0
    min_stock_level: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_out_of_stock(self) -> bool:
        return self.current_stock == 0

    @property
    def is_low_stock(self) -> bool:
        """In stock but at or below the alert threshold."""
        return 0 < self.current_stock <= self.min_stock_level

    @property
    def needs_attention(self) -> bool:
        return self.current_stock <= self.min_stock_level

    @property
    def stock_value(self) -> float:
        return self.current_stock * self.price


class Supplier(BaseModel):
    """Vendor that purchase orders are placed with."""

    id: int | None = None
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
