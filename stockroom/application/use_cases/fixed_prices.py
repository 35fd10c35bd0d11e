"""Fixed price catalog use cases."""

from dataclasses import dataclass

from stockroom.application.dto.requests import CreateFixedPriceRequest, UpdateFixedPriceRequest
from stockroom.application.dto.responses import FixedPriceListResponse, FixedPriceResponse
from stockroom.application.use_cases.activity import record_activity
from stockroom.config import get_logger
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.exceptions import FixedPriceNotFoundError
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.fixed_price_store import IFixedPriceStore

logger = get_logger(__name__)


@dataclass
class FixedPriceResult:
    price: FixedPrice


@dataclass
class FixedPriceListResult:
    prices: list[FixedPrice]


class _FixedPriceUseCase:
    def __init__(
        self,
        fixed_price_store: IFixedPriceStore | None = None,
        activity_log: IActivityLog | None = None,
    ):
        self._fixed_price_store = fixed_price_store
        self._activity_log = activity_log

    async def _get_fixed_price_store(self) -> IFixedPriceStore:
        if self._fixed_price_store is None:
            from stockroom.infrastructure.storage.sqlite import get_fixed_price_store

            self._fixed_price_store = await get_fixed_price_store()
        return self._fixed_price_store

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stockroom.infrastructure.storage.sqlite import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    async def _require_price(self, price_id: int) -> FixedPrice:
        store = await self._get_fixed_price_store()
        price = await store.get_price(price_id)
        if price is None:
            raise FixedPriceNotFoundError(price_id)
        return price

    def to_response(self, result: FixedPriceResult) -> FixedPriceResponse:
        return FixedPriceResponse.from_entity(result.price)


class CreateFixedPriceUseCase(_FixedPriceUseCase):
    """Add a catalog price for a named item."""

    async def execute(
        self, request: CreateFixedPriceRequest, actor: Actor | None = None
    ) -> FixedPriceResult:
        actor = actor or SYSTEM_ACTOR
        store = await self._get_fixed_price_store()

        price = await store.create_price(
            FixedPrice(
                kind=request.kind,
                category=request.category,
                item_name=request.item_name,
                price=request.price,
                is_active=request.is_active,
            )
        )

        await record_activity(
            await self._get_activity_log(),
            "create",
            f"Added fixed price for {price.item_name}: ${price.price:.2f}",
            actor,
        )
        return FixedPriceResult(price=price)


class GetFixedPriceUseCase(_FixedPriceUseCase):
    async def execute(self, price_id: int) -> FixedPriceResult:
        return FixedPriceResult(price=await self._require_price(price_id))


class ListFixedPricesUseCase(_FixedPriceUseCase):
    """Catalog prices by item name, active ones only unless asked otherwise."""

    async def execute(
        self,
        kind: ItemKind | None = None,
        category: str | None = None,
        include_inactive: bool = False,
    ) -> FixedPriceListResult:
        store = await self._get_fixed_price_store()
        prices = await store.list_prices(
            kind=kind, category=category, active_only=not include_inactive
        )
        return FixedPriceListResult(prices=prices)

    def to_response(  # type: ignore[override]
        self, result: FixedPriceListResult
    ) -> FixedPriceListResponse:
        return FixedPriceListResponse(
            prices=[FixedPriceResponse.from_entity(p) for p in result.prices],
            total=len(result.prices),
        )


class UpdateFixedPriceUseCase(_FixedPriceUseCase):
    """Change the price, rename the entry or switch it on and off."""

    async def execute(
        self,
        price_id: int,
        request: UpdateFixedPriceRequest,
        actor: Actor | None = None,
    ) -> FixedPriceResult:
        actor = actor or SYSTEM_ACTOR
        price = await self._require_price(price_id)

        updates = request.model_dump(exclude_none=True)
        store = await self._get_fixed_price_store()
        price = await store.update_price(price.model_copy(update=updates))

        await record_activity(
            await self._get_activity_log(),
            "update",
            f"Updated fixed price for {price.item_name}: ${price.price:.2f}",
            actor,
        )
        logger.info("fixed_price_changed", price_id=price_id, fields=sorted(updates))
        return FixedPriceResult(price=price)


class DeleteFixedPriceUseCase(_FixedPriceUseCase):
    """Remove a catalog price. Admin only."""

    async def execute(self, price_id: int, actor: Actor | None = None) -> FixedPriceResult:
        actor = actor or SYSTEM_ACTOR
        actor.require_admin("delete fixed price")

        price = await self._require_price(price_id)
        store = await self._get_fixed_price_store()
        if not await store.delete_price(price_id):
            raise FixedPriceNotFoundError(price_id)

        await record_activity(
            await self._get_activity_log(),
            "delete",
            f"Deleted fixed price with ID: {price_id}",
            actor,
        )
        return FixedPriceResult(price=price)
