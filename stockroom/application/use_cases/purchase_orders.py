"""Purchase order use cases: create, update, delete, queries."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from stockroom.application.dto.requests import (
    CreatePurchaseOrderRequest,
    UpdatePurchaseOrderRequest,
)
from stockroom.application.dto.responses import (
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
)
from stockroom.application.use_cases.activity import record_activity
from stockroom.config import get_logger, get_settings
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.purchase_order import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.exceptions import (
    InvalidStatusTransitionError,
    ItemNotFoundError,
    PurchaseOrderNotFoundError,
    UniquenessConflictError,
    ValidationError,
)
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.fixed_price_store import IFixedPriceStore
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.core.services.sequencer import next_id

logger = get_logger(__name__)


async def save_with_po_number(
    store: IPurchaseOrderStore,
    build: Callable[[str], PurchaseOrder],
) -> PurchaseOrder:
    """Persist the order built for the next free PO number.

    The number is taken from the highest existing one; on a uniqueness
    conflict the existing numbers are re-read and the order rebuilt.
    """
    settings = get_settings().inventory
    prefix = settings.purchase_order_prefix
    attempts = settings.sequence_retries + 1

    for attempt in range(attempts):
        po_number = next_id(
            prefix,
            await store.list_po_numbers(prefix),
            width=settings.sequence_width,
        )
        try:
            return await store.create_order(build(po_number))
        except UniquenessConflictError:
            if attempt == attempts - 1:
                raise
            logger.warning("po_number_conflict_retrying", po_number=po_number, attempt=attempt + 1)

    raise UniquenessConflictError("po_number", prefix)


def new_purchase_order(
    po_number: str,
    supplier: str,
    items: list[PurchaseOrderItem],
    actor: Actor,
    notes: str | None = None,
    expected_delivery_date: date | None = None,
) -> PurchaseOrder:
    """Build a pending order priced with the configured tax, shipping and discount."""
    settings = get_settings().inventory
    return PurchaseOrder(
        po_number=po_number,
        supplier=supplier,
        expected_delivery_date=expected_delivery_date,
        tax_rate=settings.tax_rate,
        shipping_cost=settings.shipping_cost,
        discount_rate=settings.discount_rate,
        notes=notes,
        created_by=actor.username,
        # Fresh line copies per attempt, the store stamps ids onto them
        items=[item.model_copy() for item in items],
    )


@dataclass
class PurchaseOrderResult:
    order: PurchaseOrder


@dataclass
class PurchaseOrderListResult:
    orders: list[PurchaseOrder]


class _PurchaseOrderUseCase:
    """Shared store resolution for the purchase order use cases."""

    def __init__(
        self,
        purchase_order_store: IPurchaseOrderStore | None = None,
        item_store: IItemStore | None = None,
        activity_log: IActivityLog | None = None,
        fixed_price_store: IFixedPriceStore | None = None,
    ):
        self._purchase_order_store = purchase_order_store
        self._item_store = item_store
        self._activity_log = activity_log
        self._fixed_price_store = fixed_price_store

    async def _get_purchase_order_store(self) -> IPurchaseOrderStore:
        if self._purchase_order_store is None:
            from stockroom.infrastructure.storage.sqlite import get_purchase_order_store

            self._purchase_order_store = await get_purchase_order_store()
        return self._purchase_order_store

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

    async def _get_fixed_price_store(self) -> IFixedPriceStore:
        if self._fixed_price_store is None:
            from stockroom.infrastructure.storage.sqlite import get_fixed_price_store

            self._fixed_price_store = await get_fixed_price_store()
        return self._fixed_price_store

    async def _require_order(self, order_id: int) -> PurchaseOrder:
        store = await self._get_purchase_order_store()
        order = await store.get_order(order_id)
        if order is None:
            raise PurchaseOrderNotFoundError(order_id)
        return order

    def to_response(self, result: PurchaseOrderResult) -> PurchaseOrderResponse:
        """Convert result to API response."""
        return PurchaseOrderResponse.from_entity(result.order)


class CreatePurchaseOrderUseCase(_PurchaseOrderUseCase):
    """Raise a purchase order for raw materials from one supplier."""

    async def execute(
        self, request: CreatePurchaseOrderRequest, actor: Actor | None = None
    ) -> PurchaseOrderResult:
        actor = actor or SYSTEM_ACTOR
        logger.info(
            "create_purchase_order_started",
            supplier=request.supplier,
            items=len(request.items),
        )

        item_store = await self._get_item_store()
        po_store = await self._get_purchase_order_store()
        fixed_prices = await self._get_fixed_price_store()

        lines: list[PurchaseOrderItem] = []
        for line in request.items:
            material = await item_store.get_item(line.material_id)
            if material is None:
                raise ItemNotFoundError(line.material_id)
            if material.kind != ItemKind.RAW_MATERIAL:
                raise ValidationError(
                    "items", f"item {line.material_id} is not a raw material", line.material_id
                )
            unit_price = line.unit_price
            if unit_price is None:
                fixed = await fixed_prices.find_price(
                    ItemKind.RAW_MATERIAL, material.category, material.name
                )
                unit_price = fixed.price if fixed is not None else material.unit_cost
            lines.append(
                PurchaseOrderItem(
                    material_id=line.material_id,
                    material_name=material.name,
                    quantity=line.quantity,
                    unit_price=unit_price,
                )
            )

        order = await save_with_po_number(
            po_store,
            lambda po_number: new_purchase_order(
                po_number,
                request.supplier,
                lines,
                actor,
                notes=request.notes,
                expected_delivery_date=request.expected_delivery_date,
            ),
        )

        await record_activity(
            await self._get_activity_log(),
            "create",
            f"Created purchase order {order.po_number} for {order.supplier}",
            actor,
        )

        logger.info(
            "create_purchase_order_complete",
            order_id=order.id,
            po_number=order.po_number,
            total=order.total_amount,
        )
        return PurchaseOrderResult(order=order)


class UpdatePurchaseOrderUseCase(_PurchaseOrderUseCase):
    """Advance status along the allowed transitions, edit notes and delivery date."""

    async def execute(
        self,
        order_id: int,
        request: UpdatePurchaseOrderRequest,
        actor: Actor | None = None,
    ) -> PurchaseOrderResult:
        actor = actor or SYSTEM_ACTOR
        order = await self._require_order(order_id)
        requested = request.status or order.status

        if order.status.is_terminal:
            raise InvalidStatusTransitionError(
                "purchase order", order.status.value, requested.value
            )

        previous = order.status
        if requested != order.status:
            if not order.can_transition_to(requested):
                raise InvalidStatusTransitionError(
                    "purchase order", order.status.value, requested.value
                )
            order.status = requested

        if "notes" in request.model_fields_set:
            order.notes = request.notes
        if "expected_delivery_date" in request.model_fields_set:
            order.expected_delivery_date = request.expected_delivery_date

        store = await self._get_purchase_order_store()
        order = await store.update_order(order)

        if order.status != previous:
            description = f"Updated purchase order {order.po_number} status to {order.status.value}"
        else:
            description = f"Updated purchase order {order.po_number}"
        await record_activity(await self._get_activity_log(), "update", description, actor)

        changed = order.status != previous
        logger.info(
            "purchase_order_status_changed" if changed else "purchase_order_edited",
            order_id=order_id,
            previous=previous.value,
            status=order.status.value,
        )
        return PurchaseOrderResult(order=order)


class DeletePurchaseOrderUseCase(_PurchaseOrderUseCase):
    """Remove a purchase order and its lines. Admin only."""

    async def execute(self, order_id: int, actor: Actor | None = None) -> PurchaseOrderResult:
        actor = actor or SYSTEM_ACTOR
        actor.require_admin("delete purchase order")

        order = await self._require_order(order_id)
        store = await self._get_purchase_order_store()
        if not await store.delete_order(order_id):
            raise PurchaseOrderNotFoundError(order_id)

        await record_activity(
            await self._get_activity_log(),
            "delete",
            f"Deleted purchase order {order.po_number}",
            actor,
        )
        logger.info("purchase_order_removed", order_id=order_id, actor=actor.username)
        return PurchaseOrderResult(order=order)


class GetPurchaseOrderUseCase(_PurchaseOrderUseCase):
    async def execute(self, order_id: int) -> PurchaseOrderResult:
        return PurchaseOrderResult(order=await self._require_order(order_id))


class ListPurchaseOrdersUseCase(_PurchaseOrderUseCase):
    async def execute(
        self,
        status: PurchaseOrderStatus | None = None,
        supplier: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> PurchaseOrderListResult:
        store = await self._get_purchase_order_store()
        orders = await store.list_orders(
            status=status, supplier=supplier, limit=limit, offset=offset
        )
        return PurchaseOrderListResult(orders=orders)

    def to_response(  # type: ignore[override]
        self, result: PurchaseOrderListResult
    ) -> PurchaseOrderListResponse:
        return PurchaseOrderListResponse(
            orders=[PurchaseOrderResponse.from_entity(o) for o in result.orders],
            total=len(result.orders),
        )
