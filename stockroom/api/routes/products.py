"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from stockroom.api.dependencies import (
    PageParams,
    RecordId,
    get_actor_id,
    get_cat_store,
    get_create_product_use_case,
    get_page_params,
)
from stockroom.application.dto.requests import (
    SQLITE_MAX_INTEGER,
    ProductCreateRequest,
    ProductUpdateRequest,
)
from stockroom.application.dto.responses import (
    ErrorResponse,
    PaginatedResponse,
    ProductListResponse,
    ProductResponse,
)
from stockroom.application.use_cases.create_product import CreateProductUseCase
from stockroom.config import get_logger
from stockroom.core.exceptions import ProductNotFoundError
from stockroom.infrastructure.storage.sqlite import SQLiteCatalogStore

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    search: str | None = Query(default=None, description="Match name, SKU or description"),
    category_id: int | None = Query(default=None, ge=1, le=SQLITE_MAX_INTEGER),
    paging: PageParams = Depends(get_page_params),
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductListResponse:
    """List products, newest first."""
    total = await store.count_products(search=search, category_id=category_id)
    products = await store.list_products(
        search=search,
        category_id=category_id,
        limit=paging.limit,
        offset=paging.offset,
    )
    return ProductListResponse(
        items=[ProductResponse.from_entity(p) for p in products],
        total=total,
        page=paging.page,
        limit=paging.limit,
        total_pages=PaginatedResponse.page_count(total, paging.limit),
    )


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_product(
    request: ProductCreateRequest,
    actor_id: str = Depends(get_actor_id),
    use_case: CreateProductUseCase = Depends(get_create_product_use_case),
) -> ProductResponse:
    """Create a product; opening stock is recorded as an IN movement."""
    product = await use_case.execute(request, actor_id)
    return use_case.to_response(product)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: RecordId,
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductResponse:
    """Get product details."""
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductResponse.from_entity(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_product(
    product_id: RecordId,
    request: ProductUpdateRequest,
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> ProductResponse:
    """Update descriptive fields. Stock is changed only through stock transactions."""
    product = await store.get_product(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)

    product.name = request.name
    product.sku = request.sku
    product.description = request.description
    product.category_id = request.category_id
    product.price = request.price
    product.min_stock_level = request.min_stock_level
    updated = await store.update_product(product)
    return ProductResponse.from_entity(updated)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: RecordId,
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> Response:
    """Delete a product without stock history."""
    await store.delete_product(product_id)
    logger.info("product_delete_requested", product_id=product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
