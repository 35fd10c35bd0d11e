"""Adjust Stock Use Case: signed quantity change with a non-negative floor."""

from dataclasses import dataclass

from stockroom.application.dto.responses import StockItemResponse
from stockroom.application.use_cases.activity import record_activity
from stockroom.config import get_logger
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.stock_item import ItemKind, StockItem
from stockroom.core.exceptions import ValidationError
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.item_store import IItemStore

logger = get_logger(__name__)


@dataclass
class AdjustStockResult:
    """Result of a stock adjustment."""

    item: StockItem
    delta: int


class AdjustStockUseCase:
    """Receive, issue or correct stock for one item."""

    def __init__(
        self,
        item_store: IItemStore | None = None,
        activity_log: IActivityLog | None = None,
    ):
        self._item_store = item_store
        self._activity_log = activity_log

    async def _get_item_store(self) -> IItemStore:
        if self._item_store is None:
            from stockroom.infrastructure.storage.sqlite import get_item_store

            self._item_store = await get_item_store()
        return self._item_store

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stockroom.infrastructure.storage.sqlite import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    async def execute(
        self,
        item_id: int,
        delta: int,
        reason: str | None = None,
        actor: Actor | None = None,
    ) -> AdjustStockResult:
        """Execute adjust stock use case.

        Raises:
            ValidationError: delta is zero
            ItemNotFoundError: no such item
            InsufficientStockError: the result would be negative; nothing is written
        """
        actor = actor or SYSTEM_ACTOR
        if delta == 0:
            raise ValidationError("delta", "adjustment must be non-zero", delta)

        logger.info("adjust_stock_started", item_id=item_id, delta=delta, actor=actor.username)

        item_store = await self._get_item_store()
        item = await item_store.adjust_quantity(item_id, delta)

        noun = "product" if item.kind == ItemKind.PRODUCT else "raw material"
        verb = "Added" if delta > 0 else "Deducted"
        description = f"{verb} {abs(delta)} units of {noun} {item.name}"
        if reason:
            description += f" ({reason})"
        await record_activity(await self._get_activity_log(), "adjust", description, actor)

        logger.info(
            "adjust_stock_complete",
            item_id=item_id,
            quantity=item.quantity,
            status=item.status.value,
        )
        return AdjustStockResult(item=item, delta=delta)

    def to_response(self, result: AdjustStockResult) -> StockItemResponse:
        """Convert result to API response."""
        return StockItemResponse.from_entity(result.item)
