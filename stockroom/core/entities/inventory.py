"""Stock ledger domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from stockroom.core.entities.catalog import Product, utcnow


class MovementDirection(str, Enum):
    """Direction of a stock movement."""

    IN = "IN"
    OUT = "OUT"


class StockMovement(BaseModel):
    """
    Immutable record of one change to a product's stock.

    quantity is always positive; direction carries the sign.
    """

    id: int | None = None
    product_id: int
    direction: MovementDirection
    quantity: int
    reason: str
    actor_id: str
    purchase_order_id: int | None = None
    idempotency_key: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    # Denormalized product fields for listings and exports
    product_name: str | None = None
    product_sku: str | None = None

    @property
    def signed_quantity(self) -> int:
        """Quantity with the sign applied to the product's balance."""
        if self.direction == MovementDirection.OUT:
            return -self.quantity
        return self.quantity

    def same_request_as(self, other: "StockMovement") -> bool:
        """True when both movements describe the same stock change."""
        return (
            self.product_id == other.product_id
            and self.direction == other.direction
            and self.quantity == other.quantity
        )


class LedgerPosting(BaseModel):
    """A movement together with the product state it produced."""

    movement: StockMovement
    product: Product
    replayed: bool = False  # True when an idempotency key matched a stored movement


class StockDiscrepancy(BaseModel):
    """Product whose materialized balance disagrees with its movement log."""

    product_id: int
    sku: str
    recorded_stock: int
    ledger_stock: int

    @property
    def difference(self) -> int:
        return self.recorded_stock - self.ledger_stock
