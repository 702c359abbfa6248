"""Abstract interface for purchase order storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockroom.core.entities.purchase_order import OrderStatus, PurchaseOrder


class IPurchaseOrderStore(ABC):
    """Interface for purchase orders and their line items."""

    @abstractmethod
    async def create_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Create an order with its line items."""
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> PurchaseOrder | None:
        """Get order with line items by ID."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: OrderStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int | None = 100,
        offset: int = 0,
    ) -> list[PurchaseOrder]:
        """List orders, newest first. Date bounds apply to order_date."""
        pass

    @abstractmethod
    async def count_orders(
        self,
        status: OrderStatus | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> int:
        """Count orders matching the filters."""
        pass

    @abstractmethod
    async def receive_order(self, order_id: int, actor_id: str) -> PurchaseOrder:
        """
        Mark a PENDING order RECEIVED and post one IN movement per line item.

        All or nothing: any failure leaves the order PENDING with no movements.
        """
        pass

    @abstractmethod
    async def cancel_order(self, order_id: int) -> PurchaseOrder:
        """Mark a PENDING order CANCELLED. Never touches stock."""
        pass
