"""Stock ledger endpoints: list, read and post movements."""

from datetime import datetime

from fastapi import APIRouter, Depends, Header, Query, Response, status

from stockroom.api.dependencies import (
    PageParams,
    RecordId,
    get_actor_id,
    get_apply_movement_use_case,
    get_inv_store,
    get_page_params,
)
from stockroom.application.dto.requests import SQLITE_MAX_INTEGER, StockMovementRequest
from stockroom.application.dto.responses import (
    ApplyMovementResponse,
    ErrorResponse,
    PaginatedResponse,
    StockMovementListResponse,
    StockMovementResponse,
)
from stockroom.application.use_cases.apply_movement import (
    ApplyMovementUseCase,
    parse_direction,
)
from stockroom.core.exceptions import MovementNotFoundError
from stockroom.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/stock-transactions", tags=["stock-transactions"])


@router.get("", response_model=StockMovementListResponse)
async def list_movements(
    product_id: int | None = Query(default=None, ge=1, le=SQLITE_MAX_INTEGER),
    direction: str | None = Query(default=None, description="IN or OUT"),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    paging: PageParams = Depends(get_page_params),
    store: SQLiteInventoryStore = Depends(get_inv_store),
) -> StockMovementListResponse:
    """Ledger entries, newest first."""
    parsed_direction = parse_direction(direction) if direction else None
    filters = {
        "product_id": product_id,
        "direction": parsed_direction,
        "start": start_date,
        "end": end_date,
    }
    total = await store.count_movements(**filters)
    movements = await store.list_movements(
        **filters, limit=paging.limit, offset=paging.offset
    )
    return StockMovementListResponse(
        items=[StockMovementResponse.from_entity(m) for m in movements],
        total=total,
        page=paging.page,
        limit=paging.limit,
        total_pages=PaginatedResponse.page_count(total, paging.limit),
    )


@router.get(
    "/{movement_id}",
    response_model=StockMovementResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_movement(
    movement_id: RecordId,
    store: SQLiteInventoryStore = Depends(get_inv_store),
) -> StockMovementResponse:
    """One ledger entry."""
    movement = await store.get_movement(movement_id)
    if movement is None:
        raise MovementNotFoundError(movement_id)
    return StockMovementResponse.from_entity(movement)


@router.post(
    "",
    response_model=ApplyMovementResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def apply_movement(
    request: StockMovementRequest,
    response: Response,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    actor_id: str = Depends(get_actor_id),
    use_case: ApplyMovementUseCase = Depends(get_apply_movement_use_case),
) -> ApplyMovementResponse:
    """Post an IN or OUT movement. A replayed Idempotency-Key answers 200."""
    posting = await use_case.execute(request, actor_id, idempotency_key=idempotency_key)
    if posting.replayed:
        response.status_code = status.HTTP_200_OK
    return use_case.to_response(posting)
