"""Create Work Order Use Case: deducts materials with compensation on failure."""

from dataclasses import dataclass

from stockroom.application.dto.requests import CreateWorkOrderRequest
from stockroom.application.dto.responses import WorkOrderResponse
from stockroom.application.use_cases.activity import record_activity
from stockroom.config import get_logger
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.entities.work_order import WorkOrder, WorkOrderMaterial
from stockroom.core.exceptions import ItemNotFoundError, ValidationError
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.interfaces.work_order_store import IWorkOrderStore

logger = get_logger(__name__)


async def compensate(
    item_store: IItemStore,
    applied: list[tuple[int, int]],
    order_id: int | None = None,
) -> None:
    """Undo applied adjustments, most recent first.

    ``applied`` holds ``(item_id, delta)`` pairs; each is reversed with
    ``-delta``. A failed reversal is logged and the rest are still attempted.
    """
    for item_id, delta in reversed(applied):
        try:
            await item_store.adjust_quantity(item_id, -delta)
        except Exception as e:
            logger.error(
                "work_order_compensation_failed",
                order_id=order_id,
                item_id=item_id,
                quantity=-delta,
                error=str(e),
            )


@dataclass
class CreateWorkOrderResult:
    """Result of creating a work order."""

    order: WorkOrder


class CreateWorkOrderUseCase:
    """Start production: deduct every material, then record a pending order."""

    def __init__(
        self,
        item_store: IItemStore | None = None,
        work_order_store: IWorkOrderStore | None = None,
        activity_log: IActivityLog | None = None,
    ):
        self._item_store = item_store
        self._work_order_store = work_order_store
        self._activity_log = activity_log

    async def _get_item_store(self) -> IItemStore:
        if self._item_store is None:
            from stockroom.infrastructure.storage.sqlite import get_item_store

            self._item_store = await get_item_store()
        return self._item_store

    async def _get_work_order_store(self) -> IWorkOrderStore:
        if self._work_order_store is None:
            from stockroom.infrastructure.storage.sqlite import get_work_order_store

            self._work_order_store = await get_work_order_store()
        return self._work_order_store

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stockroom.infrastructure.storage.sqlite import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    async def execute(
        self, request: CreateWorkOrderRequest, actor: Actor | None = None
    ) -> CreateWorkOrderResult:
        """Execute create work order use case.

        Either every material deduction sticks and a pending order exists, or
        every deduction already made is reversed and the original error is
        raised.
        """
        actor = actor or SYSTEM_ACTOR
        logger.info(
            "create_work_order_started",
            product_id=request.product_id,
            quantity=request.quantity,
            materials=len(request.materials),
        )

        item_store = await self._get_item_store()
        order_store = await self._get_work_order_store()

        # 1. Validate product and materials before touching stock
        product = await item_store.get_item(request.product_id)
        if product is None:
            raise ItemNotFoundError(request.product_id)
        if product.kind != ItemKind.PRODUCT:
            raise ValidationError("product_id", "item is not a product", request.product_id)

        merged: dict[int, int] = {}
        for material in request.materials:
            merged[material.material_id] = merged.get(material.material_id, 0) + material.quantity

        for material_id in merged:
            material = await item_store.get_item(material_id)
            if material is None:
                raise ItemNotFoundError(material_id)
            if material.kind != ItemKind.RAW_MATERIAL:
                raise ValidationError(
                    "materials", f"item {material_id} is not a raw material", material_id
                )

        # 2. Deduct, compensating on any failure including the final persist
        applied: list[tuple[int, int]] = []
        try:
            for material_id, quantity in merged.items():
                await item_store.adjust_quantity(material_id, -quantity)
                applied.append((material_id, -quantity))

            order = WorkOrder(
                product_id=product.id,  # type: ignore[arg-type]
                product_name=product.name,
                quantity=request.quantity,
                materials=[
                    WorkOrderMaterial(material_id=material_id, quantity=quantity)
                    for material_id, quantity in merged.items()
                ],
            )
            order = await order_store.create_order(order)
        except Exception as e:
            logger.warning(
                "create_work_order_rolling_back",
                product_id=request.product_id,
                deductions=len(applied),
                error=str(e),
            )
            await compensate(item_store, applied)
            raise

        await record_activity(
            await self._get_activity_log(),
            "create",
            f"Created work order #{order.id}: {order.quantity} x {order.product_name}",
            actor,
        )

        logger.info(
            "create_work_order_complete",
            order_id=order.id,
            product_id=order.product_id,
        )
        return CreateWorkOrderResult(order=order)

    def to_response(self, result: CreateWorkOrderResult) -> WorkOrderResponse:
        """Convert result to API response."""
        return WorkOrderResponse.from_entity(result.order)
