"""Purchase order endpoints, including receiving."""

from fastapi import APIRouter, Depends, Query

from stockroom.api.dependencies import (
    PageParams,
    RecordId,
    get_actor_id,
    get_cancel_purchase_order_use_case,
    get_create_purchase_order_use_case,
    get_page_params,
    get_po_store,
    get_receive_purchase_order_use_case,
    get_transition_purchase_order_use_case,
)
from stockroom.application.dto.requests import (
    PurchaseOrderCreateRequest,
    PurchaseOrderStatusRequest,
)
from stockroom.application.dto.responses import (
    ErrorResponse,
    PaginatedResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
)
from stockroom.application.use_cases.cancel_purchase_order import CancelPurchaseOrderUseCase
from stockroom.application.use_cases.create_purchase_order import CreatePurchaseOrderUseCase
from stockroom.application.use_cases.receive_purchase_order import (
    ReceivePurchaseOrderUseCase,
)
from stockroom.application.use_cases.transition_purchase_order import (
    TransitionPurchaseOrderUseCase,
)
from stockroom.core.entities.purchase_order import OrderStatus
from stockroom.core.exceptions import PurchaseOrderNotFoundError, ValidationError
from stockroom.infrastructure.storage.sqlite import SQLitePurchaseOrderStore

router = APIRouter(prefix="/api/purchase-orders", tags=["purchase-orders"])

_TRANSITION_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.get("", response_model=PurchaseOrderListResponse)
async def list_orders(
    status: str | None = Query(default=None, description="PENDING, RECEIVED or CANCELLED"),
    paging: PageParams = Depends(get_page_params),
    store: SQLitePurchaseOrderStore = Depends(get_po_store),
) -> PurchaseOrderListResponse:
    """Orders with line items, newest first."""
    order_status = None
    if status:
        try:
            order_status = OrderStatus(status.strip().upper())
        except ValueError:
            raise ValidationError(
                "status", "must be one of PENDING, RECEIVED, CANCELLED", status
            ) from None

    total = await store.count_orders(status=order_status)
    orders = await store.list_orders(
        status=order_status, limit=paging.limit, offset=paging.offset
    )
    return PurchaseOrderListResponse(
        items=[PurchaseOrderResponse.from_entity(o) for o in orders],
        total=total,
        page=paging.page,
        limit=paging.limit,
        total_pages=PaginatedResponse.page_count(total, paging.limit),
    )


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_order(
    request: PurchaseOrderCreateRequest,
    use_case: CreatePurchaseOrderUseCase = Depends(get_create_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Place a purchase order. It starts PENDING."""
    order = await use_case.execute(request)
    return use_case.to_response(order)


@router.get(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: RecordId,
    store: SQLitePurchaseOrderStore = Depends(get_po_store),
) -> PurchaseOrderResponse:
    """Order details with line items."""
    order = await store.get_order(order_id)
    if order is None:
        raise PurchaseOrderNotFoundError(order_id)
    return PurchaseOrderResponse.from_entity(order)


@router.put(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def update_order_status(
    order_id: RecordId,
    request: PurchaseOrderStatusRequest,
    actor_id: str = Depends(get_actor_id),
    use_case: TransitionPurchaseOrderUseCase = Depends(get_transition_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Move a PENDING order to RECEIVED or CANCELLED."""
    order = await use_case.execute(order_id, request.status, actor_id)
    return use_case.to_response(order)


@router.put(
    "/{order_id}/receive",
    response_model=PurchaseOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def receive_order(
    order_id: RecordId,
    actor_id: str = Depends(get_actor_id),
    use_case: ReceivePurchaseOrderUseCase = Depends(get_receive_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Receive an order: every line item is booked into stock in one transaction."""
    order = await use_case.execute(order_id, actor_id)
    return use_case.to_response(order)


@router.put(
    "/{order_id}/cancel",
    response_model=PurchaseOrderResponse,
    responses=_TRANSITION_ERRORS,
)
async def cancel_order(
    order_id: RecordId,
    use_case: CancelPurchaseOrderUseCase = Depends(get_cancel_purchase_order_use_case),
) -> PurchaseOrderResponse:
    """Cancel a PENDING order."""
    order = await use_case.execute(order_id)
    return use_case.to_response(order)
