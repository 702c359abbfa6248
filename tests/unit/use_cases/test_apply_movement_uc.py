"""Tests for ApplyMovementUseCase."""

from unittest.mock import AsyncMock

import pytest

from stockroom.application.dto.requests import StockMovementRequest
from stockroom.application.use_cases.apply_movement import (
    MAX_IDEMPOTENCY_KEY_LENGTH,
    ApplyMovementUseCase,
    parse_direction,
    require_actor,
    validate_quantity,
)
from stockroom.config import reset_settings
from stockroom.core.entities.catalog import Product
from stockroom.core.entities.inventory import LedgerPosting, MovementDirection, StockMovement
from stockroom.core.exceptions import InsufficientStockError, ValidationError


def _posting(movement: StockMovement, stock: int, replayed: bool = False) -> LedgerPosting:
    movement = movement.model_copy(update={"id": 1})
    product = Product(id=movement.product_id, name="Bolt", sku="B-1", category_id=1, current_stock=stock)
    return LedgerPosting(movement=movement, product=product, replayed=replayed)


@pytest.fixture
def mock_inventory_store():
    store = AsyncMock()
    store.apply_movement.side_effect = lambda movement: _posting(movement, stock=6)
    return store


@pytest.fixture
def use_case(mock_inventory_store):
    return ApplyMovementUseCase(inventory_store=mock_inventory_store)


def _request(**overrides) -> StockMovementRequest:
    data = {"product_id": 1, "direction": "OUT", "quantity": 4, "reason": "sale"}
    data.update(overrides)
    return StockMovementRequest(**data)


class TestApplyMovementUseCase:
    async def test_posts_normalized_movement(self, use_case, mock_inventory_store):
        """Direction, reason and actor are normalized before posting."""
        posting = await use_case.execute(
            _request(direction=" out ", reason="  sale  "), actor_id=" clerk-1 "
        )

        movement = mock_inventory_store.apply_movement.call_args[0][0]
        assert movement.direction == MovementDirection.OUT
        assert movement.reason == "sale"
        assert movement.actor_id == "clerk-1"
        assert movement.idempotency_key is None
        assert posting.product.current_stock == 6

    async def test_passes_idempotency_key(self, use_case, mock_inventory_store):
        await use_case.execute(_request(), actor_id="clerk-1", idempotency_key=" k-1 ")
        movement = mock_inventory_store.apply_movement.call_args[0][0]
        assert movement.idempotency_key == "k-1"

    async def test_blank_idempotency_key_is_ignored(self, use_case, mock_inventory_store):
        await use_case.execute(_request(), actor_id="clerk-1", idempotency_key="   ")
        movement = mock_inventory_store.apply_movement.call_args[0][0]
        assert movement.idempotency_key is None

    async def test_overlong_idempotency_key(self, use_case, mock_inventory_store):
        with pytest.raises(ValidationError):
            await use_case.execute(
                _request(),
                actor_id="clerk-1",
                idempotency_key="k" * (MAX_IDEMPOTENCY_KEY_LENGTH + 1),
            )
        mock_inventory_store.apply_movement.assert_not_called()

    @pytest.mark.parametrize("quantity", [0, -3])
    async def test_rejects_non_positive_quantity(self, use_case, mock_inventory_store, quantity):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(_request(quantity=quantity), actor_id="clerk-1")
        assert exc_info.value.details["field"] == "quantity"
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_rejects_quantity_above_maximum(self, use_case, mock_inventory_store):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(_request(direction="IN", quantity=2**62), actor_id="clerk-1")
        assert exc_info.value.details["field"] == "quantity"
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_rejects_unknown_direction(self, use_case, mock_inventory_store):
        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(_request(direction="SIDEWAYS"), actor_id="clerk-1")
        assert exc_info.value.details["field"] == "direction"
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_rejects_blank_reason(self, use_case, mock_inventory_store):
        with pytest.raises(ValidationError):
            await use_case.execute(_request(reason="   "), actor_id="clerk-1")
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_rejects_missing_actor(self, use_case, mock_inventory_store):
        with pytest.raises(ValidationError):
            await use_case.execute(_request(), actor_id="")
        mock_inventory_store.apply_movement.assert_not_called()

    async def test_store_rejection_propagates(self, use_case, mock_inventory_store):
        mock_inventory_store.apply_movement.side_effect = InsufficientStockError(1, 10, 6)
        with pytest.raises(InsufficientStockError):
            await use_case.execute(_request(quantity=10), actor_id="clerk-1")

    async def test_to_response_marks_replay(self, use_case, mock_inventory_store):
        mock_inventory_store.apply_movement.side_effect = (
            lambda movement: _posting(movement, stock=6, replayed=True)
        )
        posting = await use_case.execute(_request(), actor_id="clerk-1", idempotency_key="k")
        response = use_case.to_response(posting)
        assert response.replayed is True
        assert response.movement.direction == "OUT"
        assert response.product.current_stock == 6


class TestValidators:
    def test_parse_direction_accepts_enum(self):
        assert parse_direction(MovementDirection.IN) is MovementDirection.IN
        assert parse_direction("in") is MovementDirection.IN

    def test_validate_quantity_rejects_bool(self):
        with pytest.raises(ValidationError):
            validate_quantity(True)

    def test_validate_quantity_rejects_float(self):
        with pytest.raises(ValidationError):
            validate_quantity(2.5)

    def test_require_actor_strips(self):
        assert require_actor("  ops ") == "ops"
        with pytest.raises(ValidationError):
            require_actor(None)

    def test_validate_quantity_upper_bound(self):
        assert validate_quantity(2**31 - 1) == 2**31 - 1
        with pytest.raises(ValidationError) as exc_info:
            validate_quantity(2**31, "items[2].quantity")
        assert exc_info.value.details["field"] == "items[2].quantity"

    def test_validate_quantity_uses_configured_maximum(self, monkeypatch):
        monkeypatch.setenv("INVENTORY_MAX_QUANTITY", "500")
        reset_settings()
        assert validate_quantity(500) == 500
        with pytest.raises(ValidationError):
            validate_quantity(501)
