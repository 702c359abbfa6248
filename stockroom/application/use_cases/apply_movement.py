"""Apply Movement Use Case: the single entry point for manual stock changes."""

from stockroom.application.dto.requests import StockMovementRequest
from stockroom.application.dto.responses import (
    ApplyMovementResponse,
    ProductResponse,
    StockMovementResponse,
)
from stockroom.config import get_logger, get_settings
from stockroom.core.entities.inventory import (
    LedgerPosting,
    MovementDirection,
    StockMovement,
)
from stockroom.core.exceptions import ValidationError
from stockroom.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)

MAX_IDEMPOTENCY_KEY_LENGTH = 200


def require_actor(actor_id: str | None) -> str:
    """Return the trimmed actor id or raise ValidationError."""
    actor = (actor_id or "").strip()
    if not actor:
        raise ValidationError("actor_id", "must not be empty", actor_id)
    return actor


def parse_direction(value: str | MovementDirection) -> MovementDirection:
    try:
        return MovementDirection(str(getattr(value, "value", value)).strip().upper())
    except ValueError:
        raise ValidationError("direction", "must be IN or OUT", value) from None


def validate_quantity(value: object, field: str = "quantity") -> int:
    """Positive integer no larger than the configured maximum."""
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(field, "must be an integer", value)
    if value <= 0:
        raise ValidationError(field, "must be greater than zero", value)
    maximum = get_settings().inventory.max_quantity
    if value > maximum:
        raise ValidationError(field, f"must be at most {maximum}", value)
    return value


class ApplyMovementUseCase:
    """Validate and post one IN or OUT movement against a product."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
    ):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from stockroom.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(
        self,
        request: StockMovementRequest,
        actor_id: str,
        idempotency_key: str | None = None,
    ) -> LedgerPosting:
        """Execute apply movement use case."""
        direction = parse_direction(request.direction)
        quantity = validate_quantity(request.quantity)
        reason = (request.reason or "").strip()
        if not reason:
            raise ValidationError("reason", "must not be empty", request.reason)
        actor = require_actor(actor_id)

        key = (idempotency_key or "").strip() or None
        if key is not None and len(key) > MAX_IDEMPOTENCY_KEY_LENGTH:
            raise ValidationError(
                "idempotency_key",
                f"must be at most {MAX_IDEMPOTENCY_KEY_LENGTH} characters",
                key,
            )

        logger.info(
            "apply_movement_started",
            product_id=request.product_id,
            direction=direction.value,
            quantity=quantity,
            actor_id=actor,
        )

        store = await self._get_inventory_store()
        posting = await store.apply_movement(
            StockMovement(
                product_id=request.product_id,
                direction=direction,
                quantity=quantity,
                reason=reason,
                actor_id=actor,
                idempotency_key=key,
            )
        )

        logger.info(
            "apply_movement_complete",
            movement_id=posting.movement.id,
            product_id=posting.product.id,
            new_stock=posting.product.current_stock,
            replayed=posting.replayed,
        )
        return posting

    def to_response(self, posting: LedgerPosting) -> ApplyMovementResponse:
        """Convert result to API response."""
        return ApplyMovementResponse(
            movement=StockMovementResponse.from_entity(posting.movement),
            product=ProductResponse.from_entity(posting.product),
            replayed=posting.replayed,
        )
