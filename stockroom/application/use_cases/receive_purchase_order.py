"""Receive Purchase Order Use Case: book every line item into stock."""

from stockroom.application.dto.responses import PurchaseOrderResponse
from stockroom.application.use_cases.apply_movement import require_actor
from stockroom.config import get_logger
from stockroom.core.entities.purchase_order import OrderStatus, PurchaseOrder
from stockroom.core.exceptions import OrderStatusConflictError, PurchaseOrderNotFoundError
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


class ReceivePurchaseOrderUseCase:
    """
    Mark a PENDING order RECEIVED and post one IN movement per line item.

    The status read here only produces a clear error early; the store's
    conditional update is what guarantees a single receipt.
    """

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

    async def execute(self, order_id: int, actor_id: str) -> PurchaseOrder:
        """Execute receive purchase order use case."""
        actor = require_actor(actor_id)
        logger.info("receive_purchase_order_started", order_id=order_id, actor_id=actor)

        store = await self._get_purchase_order_store()
        order = await store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        if order.status != OrderStatus.PENDING:
            raise OrderStatusConflictError.for_status(order_id, order.status.value, "receive")

        received = await store.receive_order(order_id, actor)

        logger.info(
            "receive_purchase_order_complete",
            order_id=order_id,
            line_items=len(received.line_items),
            units=sum(item.quantity for item in received.line_items),
        )
        return received

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.from_entity(order)
