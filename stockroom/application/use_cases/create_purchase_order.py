"""Create Purchase Order Use Case."""

import math
from datetime import UTC, datetime

from stockroom.application.dto.requests import PurchaseOrderCreateRequest
from stockroom.application.dto.responses import PurchaseOrderResponse
from stockroom.application.use_cases.apply_movement import validate_quantity
from stockroom.config import get_logger
from stockroom.core.entities.purchase_order import PurchaseOrder, PurchaseOrderLineItem
from stockroom.core.exceptions import (
    ProductNotFoundError,
    SupplierNotFoundError,
    ValidationError,
)
from stockroom.core.interfaces.catalog_store import ICatalogStore, ISupplierStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore

logger = get_logger(__name__)


class CreatePurchaseOrderUseCase:
    """Place a PENDING order; the total is computed once from the line items."""

    def __init__(
        self,
        purchase_order_store: IPurchaseOrderStore | None = None,
        supplier_store: ISupplierStore | None = None,
        catalog_store: ICatalogStore | None = None,
    ):
        self._purchase_order_store = purchase_order_store
        self._supplier_store = supplier_store
        self._catalog_store = catalog_store

    async def _get_purchase_order_store(self) -> IPurchaseOrderStore:
        if self._purchase_order_store is None:
            from stockroom.infrastructure.storage.sqlite import get_purchase_order_store

            self._purchase_order_store = await get_purchase_order_store()
        return self._purchase_order_store

    async def _get_supplier_store(self) -> ISupplierStore:
        if self._supplier_store is None:
            from stockroom.infrastructure.storage.sqlite import get_supplier_store

            self._supplier_store = await get_supplier_store()
        return self._supplier_store

    async def _get_catalog_store(self) -> ICatalogStore:
        if self._catalog_store is None:
            from stockroom.infrastructure.storage.sqlite import get_catalog_store

            self._catalog_store = await get_catalog_store()
        return self._catalog_store

    async def execute(self, request: PurchaseOrderCreateRequest) -> PurchaseOrder:
        """Execute create purchase order use case."""
        if not request.items:
            raise ValidationError("items", "at least one line item is required")

        line_items = []
        for index, item in enumerate(request.items):
            validate_quantity(item.quantity, f"items[{index}].quantity")
            if not math.isfinite(item.unit_price):
                raise ValidationError(
                    f"items[{index}].unit_price", "must be a finite number", item.unit_price
                )
            if item.unit_price < 0:
                raise ValidationError(
                    f"items[{index}].unit_price", "must not be negative", item.unit_price
                )
            line_items.append(
                PurchaseOrderLineItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                )
            )

        total_amount = PurchaseOrder.compute_total(line_items)
        if not math.isfinite(total_amount):
            raise ValidationError("items", "order total is too large", total_amount)

        supplier_store = await self._get_supplier_store()
        if await supplier_store.get_supplier(request.supplier_id) is None:
            raise SupplierNotFoundError(request.supplier_id)

        catalog_store = await self._get_catalog_store()
        wanted = sorted({item.product_id for item in line_items})
        found = {p.id for p in await catalog_store.get_products(wanted)}
        missing = [pid for pid in wanted if pid not in found]
        if missing:
            raise ProductNotFoundError(missing)

        order = PurchaseOrder(
            supplier_id=request.supplier_id,
            order_date=request.order_date or datetime.now(UTC),
            expected_date=request.expected_date,
            line_items=line_items,
            total_amount=total_amount,
        )

        store = await self._get_purchase_order_store()
        created = await store.create_order(order)

        logger.info(
            "create_purchase_order_complete",
            order_id=created.id,
            supplier_id=created.supplier_id,
            total_amount=created.total_amount,
        )
        return created

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.from_entity(order)
