"""Create Product Use Case: catalog entry plus opening stock."""

from stockroom.application.dto.requests import ProductCreateRequest
from stockroom.application.dto.responses import ProductResponse
from stockroom.application.use_cases.apply_movement import require_actor, validate_quantity
from stockroom.config import get_logger
from stockroom.core.entities.catalog import Product
from stockroom.core.exceptions import CategoryNotFoundError, DuplicateSkuError
from stockroom.core.interfaces.catalog_store import ICatalogStore

logger = get_logger(__name__)


class CreateProductUseCase:
    """Create a product; opening stock is booked as a ledger movement."""

    def __init__(
        self,
        catalog_store: ICatalogStore | None = None,
    ):
        self._catalog_store = catalog_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from stockroom.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def execute(self, request: ProductCreateRequest, actor_id: str) -> Product:
        """Execute create product use case."""
        actor = require_actor(actor_id)
        if request.current_stock:
            validate_quantity(request.current_stock, "current_stock")
        store = await self._get_catalog_store()

        if await store.get_category(request.category_id) is None:
            raise CategoryNotFoundError(request.category_id)
        existing = await store.get_product_by_sku(request.sku)
        if existing is not None:
            raise DuplicateSkuError(request.sku, existing.id)

        product = await store.create_product(
            Product(
                name=request.name,
                sku=request.sku,
                description=request.description,
                category_id=request.category_id,
                price=request.price,
                current_stock=request.current_stock,
                min_stock_level=request.min_stock_level,
            ),
            actor_id=actor,
        )

        logger.info(
            "create_product_complete",
            product_id=product.id,
            sku=product.sku,
            opening_stock=product.current_stock,
        )
        return product

    def to_response(self, product: Product) -> ProductResponse:
        """Convert result to API response."""
        return ProductResponse.from_entity(product)
