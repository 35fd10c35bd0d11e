"""Stock item management use cases: create, read, update, delete."""

from dataclasses import dataclass

from stockroom.application.dto.requests import CreateStockItemRequest, UpdateStockItemRequest
from stockroom.application.dto.responses import StockItemListResponse, StockItemResponse
from stockroom.application.use_cases.activity import record_activity
from stockroom.config import get_logger, get_settings
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.stock_item import ItemKind, StockItem, StockStatus
from stockroom.core.exceptions import ItemNotFoundError, UniquenessConflictError
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.services.sequencer import next_id

logger = get_logger(__name__)

# Fields that may not be cleared to None by a partial update
_REQUIRED_FIELDS = frozenset({"name", "category", "reorder_level", "unit_cost", "unit"})


def kind_label(kind: ItemKind) -> str:
    return "product" if kind == ItemKind.PRODUCT else "raw material"


def sku_prefix(kind: ItemKind) -> str:
    settings = get_settings().inventory
    if kind == ItemKind.PRODUCT:
        return settings.product_sku_prefix
    return settings.material_sku_prefix


@dataclass
class StockItemResult:
    item: StockItem


@dataclass
class StockItemListResult:
    items: list[StockItem]


class _ItemUseCase:
    """Shared store resolution for the item use cases."""

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

    def to_response(self, result: StockItemResult) -> StockItemResponse:
        """Convert result to API response."""
        return StockItemResponse.from_entity(result.item)


class CreateStockItemUseCase(_ItemUseCase):
    """Add a product or raw material, assigning the next SKU of its kind."""

    async def execute(
        self, request: CreateStockItemRequest, actor: Actor | None = None
    ) -> StockItemResult:
        actor = actor or SYSTEM_ACTOR
        settings = get_settings().inventory
        store = await self._get_item_store()

        logger.info(
            "create_stock_item_started",
            kind=request.kind.value,
            name=request.name,
        )

        prefix = sku_prefix(request.kind)
        reorder_level = (
            request.reorder_level
            if request.reorder_level is not None
            else settings.default_reorder_level
        )
        attempts = settings.sequence_retries + 1

        for attempt in range(attempts):
            sku = request.sku or next_id(
                prefix,
                await store.list_skus(request.kind, prefix),
                width=settings.sequence_width,
            )
            item = StockItem(
                kind=request.kind,
                name=request.name,
                description=request.description,
                category=request.category,
                sku=sku,
                quantity=request.quantity,
                reorder_level=reorder_level,
                unit_cost=request.unit_cost,
                unit=request.unit,
                supplier=request.supplier,
            )
            try:
                item = await store.create_item(item)
                break
            except UniquenessConflictError:
                # An explicit SKU cannot be renumbered
                if request.sku or attempt == attempts - 1:
                    raise
                logger.warning("sku_conflict_retrying", sku=sku, attempt=attempt + 1)

        await record_activity(
            await self._get_activity_log(),
            "create",
            f"Added new {kind_label(item.kind)}: {item.name} (SKU: {item.sku})",
            actor,
        )

        logger.info(
            "create_stock_item_complete",
            item_id=item.id,
            sku=item.sku,
            status=item.status.value,
        )
        return StockItemResult(item=item)


class GetStockItemUseCase(_ItemUseCase):
    async def execute(self, item_id: int) -> StockItemResult:
        store = await self._get_item_store()
        item = await store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return StockItemResult(item=item)


class ListStockItemsUseCase(_ItemUseCase):
    async def execute(
        self,
        kind: ItemKind | None = None,
        status: StockStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> StockItemListResult:
        store = await self._get_item_store()
        items = await store.list_items(kind=kind, status=status, limit=limit, offset=offset)
        return StockItemListResult(items=items)

    def to_response(  # type: ignore[override]
        self, result: StockItemListResult
    ) -> StockItemListResponse:
        return StockItemListResponse(
            items=[StockItemResponse.from_entity(i) for i in result.items],
            total=len(result.items),
        )


class UpdateStockItemUseCase(_ItemUseCase):
    """Edit descriptive fields and reorder level; status follows the stored quantity."""

    async def execute(
        self,
        item_id: int,
        request: UpdateStockItemRequest,
        actor: Actor | None = None,
    ) -> StockItemResult:
        actor = actor or SYSTEM_ACTOR
        store = await self._get_item_store()

        item = await store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        previous_status = item.status
        updates = {
            field: value
            for field, value in request.model_dump(exclude_unset=True).items()
            if value is not None or field not in _REQUIRED_FIELDS
        }
        item = item.model_copy(update=updates)
        item = await store.update_item(item)

        await record_activity(
            await self._get_activity_log(),
            "update",
            f"Updated {kind_label(item.kind)}: {item.name}",
            actor,
        )

        logger.info(
            "stock_item_updated",
            item_id=item_id,
            fields=sorted(updates),
            status=item.status.value,
            status_changed=item.status != previous_status,
        )
        return StockItemResult(item=item)


class DeleteStockItemUseCase(_ItemUseCase):
    """Remove an item. Admin only."""

    async def execute(self, item_id: int, actor: Actor | None = None) -> StockItemResult:
        actor = actor or SYSTEM_ACTOR
        actor.require_admin("delete stock item")

        store = await self._get_item_store()
        item = await store.get_item(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        if not await store.delete_item(item_id):
            raise ItemNotFoundError(item_id)

        await record_activity(
            await self._get_activity_log(),
            "delete",
            f"Deleted {kind_label(item.kind)}: {item.name}",
            actor,
        )
        logger.info("stock_item_removed", item_id=item_id, actor=actor.username)
        return StockItemResult(item=item)
