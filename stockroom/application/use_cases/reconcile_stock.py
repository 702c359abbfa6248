"""Reconcile Stock Use Case: compare balances with the movement log."""

from dataclasses import dataclass, field

from stockroom.config import get_logger
from stockroom.core.entities.inventory import StockDiscrepancy
from stockroom.core.interfaces.inventory_store import IInventoryStore

logger = get_logger(__name__)


@dataclass
class ReconciliationResult:
    """Outcome of a ledger reconciliation run."""

    discrepancies: list[StockDiscrepancy] = field(default_factory=list)

    @property
    def balanced(self) -> bool:
        return not self.discrepancies


class ReconcileStockUseCase:
    """Recompute every product's stock from its movements and report mismatches."""

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

    async def execute(self) -> ReconciliationResult:
        """Execute reconciliation."""
        store = await self._get_inventory_store()
        result = ReconciliationResult(discrepancies=await store.find_stock_discrepancies())
        logger.info(
            "stock_reconciliation_complete",
            balanced=result.balanced,
            discrepancies=len(result.discrepancies),
        )
        return result
