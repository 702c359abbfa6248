"""Abstract interface for the stock ledger."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockroom.core.entities.inventory import (
    LedgerPosting,
    MovementDirection,
    StockDiscrepancy,
    StockMovement,
)


class IInventoryStore(ABC):
    """Interface for stock movement persistence."""

    @abstractmethod
    async def apply_movement(self, movement: StockMovement) -> LedgerPosting:
        """
        Record a movement and adjust the product's stock as one unit.

        Raises ProductNotFoundError, InsufficientStockError or
        IdempotencyKeyConflictError; nothing is written when it raises.
        """
        pass

    @abstractmethod
    async def get_movement(self, movement_id: int) -> StockMovement | None:
        """Get movement by ID."""
        pass

    @abstractmethod
    async def list_movements(
        self,
        product_id: int | None = None,
        direction: MovementDirection | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        purchase_order_id: int | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[StockMovement]:
        """List movements, newest first."""
        pass

    @abstractmethod
    async def count_movements(
        self,
        product_id: int | None = None,
        direction: MovementDirection | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        purchase_order_id: int | None = None,
    ) -> int:
        """Count movements matching the filters."""
        pass

    @abstractmethod
    async def find_stock_discrepancies(self) -> list[StockDiscrepancy]:
        """Products whose current_stock differs from the sum of their movements."""
        pass
