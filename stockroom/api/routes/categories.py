"""Category management endpoints."""

from fastapi import APIRouter, Depends, Response, status

from stockroom.api.dependencies import RecordId, get_cat_store
from stockroom.application.dto.requests import CategoryRequest
from stockroom.application.dto.responses import CategoryResponse, ErrorResponse
from stockroom.core.entities.catalog import Category
from stockroom.core.exceptions import CategoryNotFoundError
from stockroom.infrastructure.storage.sqlite import SQLiteCatalogStore

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> list[CategoryResponse]:
    """List categories with their product counts."""
    categories = await store.list_categories()
    return [CategoryResponse.from_entity(c) for c in categories]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    request: CategoryRequest,
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> CategoryResponse:
    """Create a category."""
    category = await store.create_category(
        Category(name=request.name, description=request.description)
    )
    return CategoryResponse.from_entity(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_category(
    category_id: RecordId,
    request: CategoryRequest,
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> CategoryResponse:
    """Rename a category or change its description."""
    existing = await store.get_category(category_id)
    if existing is None:
        raise CategoryNotFoundError(category_id)
    existing.name = request.name
    existing.description = request.description
    updated = await store.update_category(existing)
    return CategoryResponse.from_entity(updated)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_category(
    category_id: RecordId,
    store: SQLiteCatalogStore = Depends(get_cat_store),
) -> Response:
    """Delete a category that has no products."""
    await store.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
