"""Cancel Purchase Order Use Case."""

from stockroom.application.dto.responses import PurchaseOrderResponse
from stockroom.config import get_logger
from stockroom.core.entities.purchase_order import OrderStatus, PurchaseOrder
from stockroom.core.exceptions import OrderStatusConflictError, PurchaseOrderNotFoundError
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


class CancelPurchaseOrderUseCase:
    """Mark a PENDING order CANCELLED. Stock is never touched."""

    def __init__(
        self,
        purchase_order_store: IPurchaseOrderStore | None = None,
    ):
        self._purchase_order_store = purchase_order_store

    async def _get_purchase_order_store(self) -> IPurchaseOrderStore:
        if self._purchase_order_store is None:
            from stockroom.infrastructure.storage.sqlite import get_purchase_order_store

            self._purchase_order_store = await get_purchase_order_store()
        return self._purchase_order_store

    async def execute(self, order_id: int) -> PurchaseOrder:
        """Execute cancel purchase order use case."""
        store = await self._get_purchase_order_store()
        order = await store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        if order.status != OrderStatus.PENDING:
            raise OrderStatusConflictError.for_status(order_id, order.status.value, "cancel")

        cancelled = await store.cancel_order(order_id)
        logger.info("cancel_purchase_order_complete", order_id=order_id)
        return cancelled

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.from_entity(order)
