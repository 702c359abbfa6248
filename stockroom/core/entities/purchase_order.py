"""Purchase order domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from stockroom.core.entities.catalog import utcnow


class OrderStatus(str, Enum):
    """Purchase order lifecycle. PENDING is the only non-terminal state."""

    PENDING = "PENDING"
    RECEIVED = "RECEIVED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


class PurchaseOrderLineItem(BaseModel):
    """One product/quantity/price entry of a purchase order."""

    id: int | None = None
    order_id: int | None = None
    product_id: int
    quantity: int
    unit_price: float
    product_name: str | None = None
    product_sku: str | None = None

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


class PurchaseOrder(BaseModel):
    """Order placed with a supplier; line items are fixed at creation."""

    id: int | None = None
    supplier_id: int
    supplier_name: str | None = None
    status: OrderStatus = OrderStatus.PENDING
    order_date: datetime = Field(default_factory=utcnow)
    expected_date: date | None = None
    total_amount: float = 0.0
    line_items: list[PurchaseOrderLineItem] = Field(default_factory=list)
    received_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @staticmethod
    def compute_total(items: list[PurchaseOrderLineItem]) -> float:
        return round(sum(item.line_total for item in items), 2)
