"""Transition Purchase Order Use Case: generic status update."""

from stockroom.application.dto.responses import PurchaseOrderResponse
from stockroom.application.use_cases.cancel_purchase_order import CancelPurchaseOrderUseCase
from stockroom.application.use_cases.receive_purchase_order import (
    ReceivePurchaseOrderUseCase,
)
from stockroom.core.entities.purchase_order import OrderStatus, PurchaseOrder
from stockroom.core.exceptions import ValidationError


class TransitionPurchaseOrderUseCase:
    """Route a requested status to the receive or cancel operation."""

    def __init__(
        self,
        receive_use_case: ReceivePurchaseOrderUseCase | None = None,
        cancel_use_case: CancelPurchaseOrderUseCase | None = None,
    ):
        self._receive = receive_use_case or ReceivePurchaseOrderUseCase()
        self._cancel = cancel_use_case or CancelPurchaseOrderUseCase()

    async def execute(self, order_id: int, status: str, actor_id: str) -> PurchaseOrder:
        """Execute transition use case."""
        try:
            target = OrderStatus((status or "").strip().upper())
        except ValueError:
            raise ValidationError(
                "status", "must be one of PENDING, RECEIVED, CANCELLED", status
            ) from None

        if target == OrderStatus.RECEIVED:
            return await self._receive.execute(order_id, actor_id)
        if target == OrderStatus.CANCELLED:
            return await self._cancel.execute(order_id)
        raise ValidationError("status", "an order cannot be moved back to PENDING", status)

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.from_entity(order)
