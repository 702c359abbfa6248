"""
Domain exceptions for the Stockroom service.

Every failure a ledger, catalog or purchase-order operation can report has
its own type and a stable machine-readable code.
"""

from typing import Any


class StockroomError(Exception):
    """Base exception for all Stockroom errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Validation Exceptions
class ValidationError(StockroomError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


# Not Found Exceptions
class NotFoundError(StockroomError):
    """Referenced entity does not exist."""

    pass


class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: int | list[int]):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


class CategoryNotFoundError(NotFoundError):
    """Category not found."""

    def __init__(self, category_id: int):
        super().__init__(
            f"Category not found: {category_id}",
            code="CATEGORY_NOT_FOUND",
            details={"category_id": category_id},
        )


class SupplierNotFoundError(NotFoundError):
    """Supplier not found."""

    def __init__(self, supplier_id: int):
        super().__init__(
            f"Supplier not found: {supplier_id}",
            code="SUPPLIER_NOT_FOUND",
            details={"supplier_id": supplier_id},
        )


class PurchaseOrderNotFoundError(NotFoundError):
    """Purchase order not found."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Purchase order not found: {order_id}",
            code="PURCHASE_ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class MovementNotFoundError(NotFoundError):
    """Stock movement not found."""

    def __init__(self, movement_id: int):
        super().__init__(
            f"Stock movement not found: {movement_id}",
            code="MOVEMENT_NOT_FOUND",
            details={"movement_id": movement_id},
        )


class UserNotFoundError(NotFoundError):
    """User not found."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


# Business rule rejections
class InsufficientStockError(StockroomError):
    """Outbound movement would drive stock below zero."""

    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_STOCK",
            details={
                "product_id": product_id,
                "requested": requested,
                "available": available,
            },
        )


# Conflict Exceptions
class ConflictError(StockroomError):
    """Operation conflicts with the current state of a resource."""

    pass


class OrderStatusConflictError(ConflictError):
    """Purchase order is not PENDING, so it cannot transition."""

    @classmethod
    def for_status(
        cls, order_id: int, status: str, action: str
    ) -> "OrderStatusConflictError":
        """Pick the conflict type matching the order's terminal status."""
        if status == "RECEIVED":
            return OrderAlreadyReceivedError(order_id, action)
        if status == "CANCELLED":
            return OrderCancelledError(order_id, action)
        return cls(
            f"Cannot {action} purchase order {order_id} in status {status}",
            code="ORDER_STATUS_CONFLICT",
            details={"order_id": order_id, "status": status, "action": action},
        )


class OrderAlreadyReceivedError(OrderStatusConflictError):
    """Purchase order has already been received."""

    def __init__(self, order_id: int, action: str = "receive"):
        super().__init__(
            f"Purchase order {order_id} has already been received; cannot {action}",
            code="ORDER_ALREADY_RECEIVED",
            details={"order_id": order_id, "status": "RECEIVED", "action": action},
        )


class OrderCancelledError(OrderStatusConflictError):
    """Purchase order has been cancelled."""

    def __init__(self, order_id: int, action: str = "receive"):
        super().__init__(
            f"Purchase order {order_id} is cancelled; cannot {action}",
            code="ORDER_CANCELLED",
            details={"order_id": order_id, "status": "CANCELLED", "action": action},
        )


class DuplicateSkuError(ConflictError):
    """Another product already uses this SKU."""

    def __init__(self, sku: str, existing_id: int | None = None):
        super().__init__(
            f"SKU already registered: {sku}",
            code="DUPLICATE_SKU",
            details={"sku": sku, "existing_id": existing_id},
        )


class CategoryInUseError(ConflictError):
    """Category still has products assigned."""

    def __init__(self, category_id: int, product_count: int):
        super().__init__(
            f"Category {category_id} has {product_count} product(s) and cannot be deleted",
            code="CATEGORY_IN_USE",
            details={"category_id": category_id, "product_count": product_count},
        )


class ProductInUseError(ConflictError):
    """Product has ledger history and cannot be deleted."""

    def __init__(self, product_id: int, movement_count: int):
        super().__init__(
            f"Product {product_id} has {movement_count} stock movement(s) and cannot be deleted",
            code="PRODUCT_IN_USE",
            details={"product_id": product_id, "movement_count": movement_count},
        )


class IdempotencyKeyConflictError(ConflictError):
    """Idempotency key was already used for a different movement."""

    def __init__(self, key: str, existing_movement_id: int):
        super().__init__(
            f"Idempotency key '{key}' was already used for a different movement",
            code="IDEMPOTENCY_KEY_REUSED",
            details={"key": key, "existing_movement_id": existing_movement_id},
        )


class DuplicateEmailError(ConflictError):
    """Another user already has this email address."""

    def __init__(self, email: str, existing_id: str | None = None):
        super().__init__(
            f"Email already registered: {email}",
            code="DUPLICATE_EMAIL",
            details={"email": email, "existing_id": existing_id},
        )


class UserExistsError(ConflictError):
    """A user with this id is already registered."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User already registered: {user_id}",
            code="USER_EXISTS",
            details={"user_id": user_id},
        )


# Storage Exceptions
class StorageError(StockroomError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed; nothing was written."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )
