"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, Field

from stockroom.core.entities.catalog import Category, Product, Supplier
from stockroom.core.entities.inventory import StockMovement
from stockroom.core.entities.purchase_order import PurchaseOrder, PurchaseOrderLineItem
from stockroom.core.entities.user import User


def _now() -> datetime:
    return datetime.now(UTC)


# --- Catalog ---


class CategoryResponse(BaseModel):
    """Category with its product count."""

    id: int
    name: str
    description: str | None = None
    product_count: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        return cls(
            id=category.id,  # type: ignore[arg-type]
            name=category.name,
            description=category.description,
            product_count=category.product_count,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class SupplierResponse(BaseModel):
    """Supplier contact record."""

    id: int
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, supplier: Supplier) -> "SupplierResponse":
        return cls(
            id=supplier.id,  # type: ignore[arg-type]
            name=supplier.name,
            email=supplier.email,
            phone=supplier.phone,
            address=supplier.address,
            created_at=supplier.created_at,
        )


class UserResponse(BaseModel):
    """User account as shown to other users."""

    id: str
    email: str
    name: str
    role: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            role=user.role.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ProductResponse(BaseModel):
    """Product with its current stock and alert status."""

    id: int
    name: str
    sku: str
    description: str | None = None
    category_id: int
    category_name: str | None = None
    price: float
    current_stock: int
    min_stock_level: int
    stock_status: str = Field(..., description="OUT, LOW or OK")
    stock_value: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        if product.is_out_of_stock:
            stock_status = "OUT"
        elif product.is_low_stock:
            stock_status = "LOW"
        else:
            stock_status = "OK"
        return cls(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            sku=product.sku,
            description=product.description,
            category_id=product.category_id,
            category_name=product.category_name,
            price=product.price,
            current_stock=product.current_stock,
            min_stock_level=product.min_stock_level,
            stock_status=stock_status,
            stock_value=round(product.stock_value, 2),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


# --- Stock ledger ---


class StockMovementResponse(BaseModel):
    """One ledger entry."""

    id: int
    product_id: int
    product_name: str | None = None
    product_sku: str | None = None
    direction: str
    quantity: int
    reason: str
    actor_id: str
    purchase_order_id: int | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, movement: StockMovement) -> "StockMovementResponse":
        return cls(
            id=movement.id,  # type: ignore[arg-type]
            product_id=movement.product_id,
            product_name=movement.product_name,
            product_sku=movement.product_sku,
            direction=movement.direction.value,
            quantity=movement.quantity,
            reason=movement.reason,
            actor_id=movement.actor_id,
            purchase_order_id=movement.purchase_order_id,
            created_at=movement.created_at,
        )


class ApplyMovementResponse(BaseModel):
    """Result of posting a movement: the entry and the product after it."""

    movement: StockMovementResponse
    product: ProductResponse
    replayed: bool = Field(
        default=False,
        description="True when the idempotency key matched an earlier movement",
    )


class StockAlertsResponse(BaseModel):
    """Products at or below their alert threshold."""

    out_of_stock: list[ProductResponse] = Field(default_factory=list)
    low_stock: list[ProductResponse] = Field(default_factory=list)
    total: int = 0


# --- Purchasing ---


class PurchaseOrderLineItemResponse(BaseModel):
    """One line of a purchase order."""

    id: int
    product_id: int
    product_name: str | None = None
    product_sku: str | None = None
    quantity: int
    unit_price: float
    line_total: float

    @classmethod
    def from_entity(cls, item: PurchaseOrderLineItem) -> "PurchaseOrderLineItemResponse":
        return cls(
            id=item.id,  # type: ignore[arg-type]
            product_id=item.product_id,
            product_name=item.product_name,
            product_sku=item.product_sku,
            quantity=item.quantity,
            unit_price=item.unit_price,
            line_total=round(item.line_total, 2),
        )


class PurchaseOrderResponse(BaseModel):
    """Purchase order with line items."""

    id: int
    supplier_id: int
    supplier_name: str | None = None
    status: str
    order_date: datetime
    expected_date: date | None = None
    total_amount: float
    line_items: list[PurchaseOrderLineItemResponse] = Field(default_factory=list)
    received_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: PurchaseOrder) -> "PurchaseOrderResponse":
        return cls(
            id=order.id,  # type: ignore[arg-type]
            supplier_id=order.supplier_id,
            supplier_name=order.supplier_name,
            status=order.status.value,
            order_date=order.order_date,
            expected_date=order.expected_date,
            total_amount=order.total_amount,
            line_items=[
                PurchaseOrderLineItemResponse.from_entity(item) for item in order.line_items
            ],
            received_at=order.received_at,
            cancelled_at=order.cancelled_at,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


# --- Pagination ---


class PaginatedResponse(BaseModel):
    """Base for paged list responses."""

    total: int
    page: int
    limit: int
    total_pages: int

    @staticmethod
    def page_count(total: int, limit: int) -> int:
        return (total + limit - 1) // limit if limit > 0 else 0


class ProductListResponse(PaginatedResponse):
    items: list[ProductResponse] = Field(default_factory=list)


class StockMovementListResponse(PaginatedResponse):
    items: list[StockMovementResponse] = Field(default_factory=list)


class PurchaseOrderListResponse(PaginatedResponse):
    items: list[PurchaseOrderResponse] = Field(default_factory=list)


# --- Dashboard / Reports ---


class DashboardCounters(BaseModel):
    total_products: int
    out_of_stock_products: int
    low_stock_products: int
    pending_orders: int
    monthly_movements: int = Field(..., description="Movements since the first of this month")


class DashboardStatsResponse(BaseModel):
    """Dashboard counters, most urgent alerts and latest movements."""

    stats: DashboardCounters
    stock_alerts: list[ProductResponse] = Field(default_factory=list)
    recent_movements: list[StockMovementResponse] = Field(default_factory=list)


class CategoryStatsResponse(BaseModel):
    category_id: int | None = None
    name: str
    total_stock: int
    product_count: int
    low_stock_count: int


class MovementStatsResponse(BaseModel):
    total_in: int
    total_out: int
    in_count: int
    out_count: int
    net_change: int


class SupplierStatsResponse(BaseModel):
    supplier_id: int | None = None
    name: str
    order_count: int
    total_amount: float


class MonthlyStatsResponse(BaseModel):
    month: str = Field(..., description="Year/month label, e.g. 2024/3")
    total_in: int
    total_out: int


class ReportStatisticsResponse(BaseModel):
    """Aggregated statistics for the reports page."""

    category_stats: list[CategoryStatsResponse] = Field(default_factory=list)
    movement_stats: MovementStatsResponse
    supplier_stats: list[SupplierStatsResponse] = Field(default_factory=list)
    monthly_stats: list[MonthlyStatsResponse] = Field(default_factory=list)


# --- System ---


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str
    version: str
    uptime_seconds: float


class DatabaseHealthResponse(BaseModel):
    """Database reachability and schema version."""

    status: str
    schema_version: str | None = None
    latency_ms: float | None = None
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_STOCK)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    details: dict | None = Field(default=None, description="Structured error context")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=_now)
