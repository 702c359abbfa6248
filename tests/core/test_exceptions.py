"""Tests for domain exceptions."""

from stockroom.core.exceptions import (
    ConflictError,
    DatabaseError,
    DuplicateSkuError,
    IdempotencyKeyConflictError,
    InsufficientStockError,
    NotFoundError,
    OrderAlreadyReceivedError,
    OrderCancelledError,
    OrderStatusConflictError,
    ProductNotFoundError,
    StockroomError,
    StorageError,
    ValidationError,
)


class TestStockroomError:
    def test_defaults_code_to_class_name(self):
        err = StockroomError("boom")
        assert err.code == "StockroomError"
        assert err.details == {}
        assert str(err) == "boom"

    def test_to_dict(self):
        err = StockroomError("boom", code="X", details={"a": 1})
        assert err.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestValidationError:
    def test_carries_field_and_value(self):
        err = ValidationError("quantity", "must be greater than zero", 0)
        assert err.code == "VALIDATION_ERROR"
        assert err.details["field"] == "quantity"
        assert err.details["value"] == "0"
        assert "quantity" in err.message

    def test_value_is_truncated(self):
        err = ValidationError("reason", "too long", "x" * 500)
        assert len(err.details["value"]) == 100

    def test_none_value(self):
        err = ValidationError("reason", "must not be empty")
        assert err.details["value"] is None


class TestLedgerErrors:
    def test_insufficient_stock_details(self):
        err = InsufficientStockError(product_id=7, requested=10, available=6)
        assert err.code == "INSUFFICIENT_STOCK"
        assert err.details == {"product_id": 7, "requested": 10, "available": 6}
        assert not isinstance(err, ConflictError)

    def test_product_not_found_accepts_list(self):
        err = ProductNotFoundError([3, 9])
        assert isinstance(err, NotFoundError)
        assert err.details["product_id"] == [3, 9]

    def test_idempotency_conflict(self):
        err = IdempotencyKeyConflictError("key-1", 42)
        assert isinstance(err, ConflictError)
        assert err.details["existing_movement_id"] == 42

    def test_database_error_is_storage_error(self):
        err = DatabaseError("query", "database is locked")
        assert isinstance(err, StorageError)
        assert err.code == "DATABASE_ERROR"


class TestOrderStatusConflict:
    def test_for_received(self):
        err = OrderStatusConflictError.for_status(5, "RECEIVED", "receive")
        assert isinstance(err, OrderAlreadyReceivedError)
        assert err.code == "ORDER_ALREADY_RECEIVED"

    def test_for_cancelled(self):
        err = OrderStatusConflictError.for_status(5, "CANCELLED", "cancel")
        assert isinstance(err, OrderCancelledError)
        assert err.details["action"] == "cancel"

    def test_for_other_status(self):
        err = OrderStatusConflictError.for_status(5, "PENDING", "reopen")
        assert type(err) is OrderStatusConflictError
        assert err.code == "ORDER_STATUS_CONFLICT"

    def test_all_are_conflicts(self):
        assert isinstance(OrderAlreadyReceivedError(1), ConflictError)
        assert isinstance(DuplicateSkuError("A-1"), ConflictError)
