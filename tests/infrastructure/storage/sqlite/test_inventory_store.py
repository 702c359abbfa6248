"""Tests for the SQLite stock ledger."""

import asyncio

import pytest

from stockroom.core.entities.inventory import MovementDirection, StockMovement
from stockroom.core.exceptions import (
    DatabaseError,
    IdempotencyKeyConflictError,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stockroom.infrastructure.storage.sqlite.ledger import MAX_STOCK


def _movement(product_id: int, direction: str, quantity: int, **extra) -> StockMovement:
    return StockMovement(
        product_id=product_id,
        direction=MovementDirection(direction),
        quantity=quantity,
        reason=extra.pop("reason", "manual"),
        actor_id=extra.pop("actor_id", "clerk-1"),
        **extra,
    )


async def _ledger_sum(inventory_store, product_id: int) -> int:
    movements = await inventory_store.list_movements(product_id=product_id, limit=None)
    return sum(m.signed_quantity for m in movements)


class TestApplyMovement:
    async def test_opening_stock_is_a_movement(self, inventory_store, product):
        movements = await inventory_store.list_movements(product_id=product.id)
        assert len(movements) == 1
        assert movements[0].direction == MovementDirection.IN
        assert movements[0].quantity == 10
        assert movements[0].reason == "opening stock"

    async def test_out_decrements_stock(self, inventory_store, product):
        posting = await inventory_store.apply_movement(_movement(product.id, "OUT", 4, reason="sale"))

        assert posting.product.current_stock == 6
        assert posting.movement.id is not None
        assert posting.movement.product_sku == "WS-440"
        assert not posting.replayed
        assert await _ledger_sum(inventory_store, product.id) == 6

    async def test_in_increments_stock(self, inventory_store, product):
        posting = await inventory_store.apply_movement(_movement(product.id, "IN", 7))
        assert posting.product.current_stock == 17

    async def test_out_can_empty_the_product(self, inventory_store, product):
        posting = await inventory_store.apply_movement(_movement(product.id, "OUT", 10))
        assert posting.product.current_stock == 0

    async def test_insufficient_stock_changes_nothing(self, inventory_store, catalog_store, product):
        with pytest.raises(InsufficientStockError) as exc_info:
            await inventory_store.apply_movement(_movement(product.id, "OUT", 11))

        assert exc_info.value.details["available"] == 10
        assert (await catalog_store.get_product(product.id)).current_stock == 10
        assert await inventory_store.count_movements(product_id=product.id) == 1

    async def test_unknown_product(self, inventory_store, product):
        with pytest.raises(ProductNotFoundError):
            await inventory_store.apply_movement(_movement(9999, "IN", 1))
        assert await inventory_store.count_movements() == 1

    async def test_in_cannot_overflow_stock(self, inventory_store, catalog_store, product):
        posting = await inventory_store.apply_movement(_movement(product.id, "IN", 2**62))
        assert posting.product.current_stock == 10 + 2**62

        with pytest.raises(ValidationError) as exc_info:
            await inventory_store.apply_movement(_movement(product.id, "IN", 2**62))

        assert exc_info.value.details["field"] == "quantity"
        assert (await catalog_store.get_product(product.id)).current_stock == 10 + 2**62
        assert await inventory_store.count_movements(product_id=product.id) == 2
        assert await inventory_store.find_stock_discrepancies() == []

    async def test_in_up_to_the_ceiling(self, inventory_store, product):
        posting = await inventory_store.apply_movement(
            _movement(product.id, "IN", MAX_STOCK - 10)
        )
        assert posting.product.current_stock == MAX_STOCK

        with pytest.raises(ValidationError):
            await inventory_store.apply_movement(_movement(product.id, "IN", 1))

    async def test_quantity_beyond_integer_column(self, inventory_store, product):
        with pytest.raises(ValidationError):
            await inventory_store.apply_movement(_movement(product.id, "IN", MAX_STOCK + 1))
        assert await inventory_store.count_movements(product_id=product.id) == 1

    async def test_concurrent_outs_never_oversell(self, inventory_store, catalog_store, product):
        """Two OUT 6 requests against 10 units: exactly one succeeds."""
        results = await asyncio.gather(
            inventory_store.apply_movement(_movement(product.id, "OUT", 6, actor_id="a")),
            inventory_store.apply_movement(_movement(product.id, "OUT", 6, actor_id="b")),
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, Exception)]
        rejected = [r for r in results if isinstance(r, InsufficientStockError)]
        assert len(succeeded) == 1
        assert len(rejected) == 1
        assert (await catalog_store.get_product(product.id)).current_stock == 4
        assert await _ledger_sum(inventory_store, product.id) == 4


class TestIdempotency:
    async def test_replay_returns_original(self, inventory_store, product):
        first = await inventory_store.apply_movement(
            _movement(product.id, "OUT", 3, idempotency_key="sale-001")
        )
        again = await inventory_store.apply_movement(
            _movement(product.id, "OUT", 3, idempotency_key="sale-001")
        )

        assert again.replayed
        assert again.movement.id == first.movement.id
        assert again.product.current_stock == 7
        assert await inventory_store.count_movements(product_id=product.id) == 2

    async def test_key_reuse_for_different_movement(self, inventory_store, product):
        await inventory_store.apply_movement(
            _movement(product.id, "OUT", 3, idempotency_key="sale-002")
        )
        with pytest.raises(IdempotencyKeyConflictError):
            await inventory_store.apply_movement(
                _movement(product.id, "OUT", 5, idempotency_key="sale-002")
            )
        assert await _ledger_sum(inventory_store, product.id) == 7


class TestListMovements:
    async def test_newest_first_with_filters(self, inventory_store, product):
        await inventory_store.apply_movement(_movement(product.id, "OUT", 1, reason="first"))
        await inventory_store.apply_movement(_movement(product.id, "OUT", 2, reason="second"))

        movements = await inventory_store.list_movements(product_id=product.id)
        assert [m.reason for m in movements] == ["second", "first", "opening stock"]

        outs = await inventory_store.list_movements(direction=MovementDirection.OUT)
        assert len(outs) == 2
        assert await inventory_store.count_movements(direction=MovementDirection.IN) == 1

    async def test_paging(self, inventory_store, product):
        for qty in (1, 2, 3):
            await inventory_store.apply_movement(_movement(product.id, "IN", qty))
        page = await inventory_store.list_movements(limit=2, offset=2)
        assert [m.quantity for m in page] == [1, 10]

    async def test_get_movement(self, inventory_store, product):
        posting = await inventory_store.apply_movement(_movement(product.id, "IN", 2))
        fetched = await inventory_store.get_movement(posting.movement.id)
        assert fetched is not None
        assert fetched.actor_id == "clerk-1"
        assert fetched.created_at.tzinfo is not None
        assert await inventory_store.get_movement(9999) is None


class TestLedgerIntegrity:
    async def test_balanced_ledger(self, inventory_store, product):
        await inventory_store.apply_movement(_movement(product.id, "OUT", 4))
        assert await inventory_store.find_stock_discrepancies() == []

    async def test_detects_tampered_balance(self, inventory_store, pool, product):
        async with pool.transaction() as conn:
            await conn.execute(
                "UPDATE products SET current_stock = 99 WHERE id = ?", (product.id,)
            )

        discrepancies = await inventory_store.find_stock_discrepancies()
        assert len(discrepancies) == 1
        assert discrepancies[0].recorded_stock == 99
        assert discrepancies[0].ledger_stock == 10

    async def test_movements_cannot_be_updated(self, pool, product):
        with pytest.raises(DatabaseError):
            async with pool.transaction() as conn:
                await conn.execute("UPDATE stock_movements SET quantity = 1")

    async def test_movements_cannot_be_deleted(self, inventory_store, pool, product):
        with pytest.raises(DatabaseError):
            async with pool.transaction() as conn:
                await conn.execute("DELETE FROM stock_movements")
        assert await inventory_store.count_movements() == 1
