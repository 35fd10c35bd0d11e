"""Work order lifecycle use cases: complete, cancel, status changes, delete, queries."""

from dataclasses import dataclass
from datetime import datetime

from stockroom.application.dto.responses import WorkOrderListResponse, WorkOrderResponse
from stockroom.application.use_cases.activity import record_activity
from stockroom.application.use_cases.create_work_order import compensate
from stockroom.config import get_logger
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.work_order import WorkOrder, WorkOrderStatus
from stockroom.core.exceptions import InvalidStatusTransitionError, WorkOrderNotFoundError
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.interfaces.work_order_store import IWorkOrderStore

logger = get_logger(__name__)


@dataclass
class WorkOrderResult:
    order: WorkOrder


@dataclass
class WorkOrderListResult:
    orders: list[WorkOrder]


class _WorkOrderUseCase:
    """Shared store resolution for the work order use cases."""

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

    async def _require_active(self, order_id: int) -> WorkOrder:
        store = await self._get_work_order_store()
        order = await store.get_active(order_id)
        if order is None:
            raise WorkOrderNotFoundError(order_id, reason="not active")
        return order

    def to_response(self, result: WorkOrderResult) -> WorkOrderResponse:
        """Convert result to API response."""
        return WorkOrderResponse.from_entity(result.order)


class CompleteWorkOrderUseCase(_WorkOrderUseCase):
    """Credit the finished product and move the order to history."""

    async def execute(self, order_id: int, actor: Actor | None = None) -> WorkOrderResult:
        """Execute complete work order use case.

        Raises:
            WorkOrderNotFoundError: the order is not active
            ItemNotFoundError: the product no longer exists; the order stays active
        """
        actor = actor or SYSTEM_ACTOR
        logger.info("complete_work_order_started", order_id=order_id)

        order = await self._require_active(order_id)
        item_store = await self._get_item_store()
        order_store = await self._get_work_order_store()

        # 1. Credit the product; a failure here leaves the order untouched
        await item_store.adjust_quantity(order.product_id, order.quantity)

        # 2. Close the order; undo the credit if the move fails
        order.status = WorkOrderStatus.COMPLETED
        order.completed_at = datetime.utcnow()
        try:
            order = await order_store.move_to_history(order)
        except Exception:
            await compensate(item_store, [(order.product_id, order.quantity)], order_id)
            raise

        await record_activity(
            await self._get_activity_log(),
            "complete",
            f"Completed work order #{order.id}: added {order.quantity} units of "
            f"{order.product_name} to stock",
            actor,
        )

        logger.info(
            "complete_work_order_complete",
            order_id=order.id,
            product_id=order.product_id,
            quantity=order.quantity,
        )
        return WorkOrderResult(order=order)


class CancelWorkOrderUseCase(_WorkOrderUseCase):
    """Close an active order without any stock effect."""

    async def execute(self, order_id: int, actor: Actor | None = None) -> WorkOrderResult:
        actor = actor or SYSTEM_ACTOR
        order = await self._require_active(order_id)
        order_store = await self._get_work_order_store()

        order.status = WorkOrderStatus.CANCELLED
        order = await order_store.move_to_history(order)

        await record_activity(
            await self._get_activity_log(),
            "cancel",
            f"Cancelled work order #{order.id}: {order.quantity} x {order.product_name}",
            actor,
        )
        logger.info("work_order_cancelled", order_id=order.id)
        return WorkOrderResult(order=order)


class UpdateWorkOrderStatusUseCase(_WorkOrderUseCase):
    """Route a status change to the matching lifecycle operation."""

    async def execute(
        self,
        order_id: int,
        status: WorkOrderStatus,
        actor: Actor | None = None,
    ) -> WorkOrderResult:
        stores = {
            "item_store": await self._get_item_store(),
            "work_order_store": await self._get_work_order_store(),
            "activity_log": await self._get_activity_log(),
        }
        if status == WorkOrderStatus.COMPLETED:
            return await CompleteWorkOrderUseCase(**stores).execute(order_id, actor)
        if status == WorkOrderStatus.CANCELLED:
            return await CancelWorkOrderUseCase(**stores).execute(order_id, actor)

        actor = actor or SYSTEM_ACTOR
        order = await self._require_active(order_id)
        if not (
            status == WorkOrderStatus.IN_PROGRESS
            and order.status == WorkOrderStatus.PENDING
        ):
            raise InvalidStatusTransitionError("work order", order.status.value, status.value)

        updated = await stores["work_order_store"].update_status(order_id, status)
        if updated is None:
            raise WorkOrderNotFoundError(order_id, reason="not active")

        await record_activity(
            stores["activity_log"],
            "update",
            f"Work order #{order_id} is now {status.value}",
            actor,
        )
        return WorkOrderResult(order=updated)


class DeleteWorkOrderUseCase(_WorkOrderUseCase):
    """Discard an active order without stock effect. Admin only."""

    async def execute(self, order_id: int, actor: Actor | None = None) -> WorkOrderResult:
        actor = actor or SYSTEM_ACTOR
        actor.require_admin("delete work order")

        order = await self._require_active(order_id)
        order_store = await self._get_work_order_store()
        if not await order_store.delete_active(order_id):
            raise WorkOrderNotFoundError(order_id, reason="not active")

        await record_activity(
            await self._get_activity_log(),
            "delete",
            f"Deleted work order #{order_id}: {order.quantity} x {order.product_name}",
            actor,
        )
        logger.info("work_order_removed", order_id=order_id, actor=actor.username)
        return WorkOrderResult(order=order)


class GetWorkOrderUseCase(_WorkOrderUseCase):
    async def execute(self, order_id: int) -> WorkOrderResult:
        store = await self._get_work_order_store()
        order = await store.get_order(order_id)
        if order is None:
            raise WorkOrderNotFoundError(order_id)
        return WorkOrderResult(order=order)


class ListWorkOrdersUseCase(_WorkOrderUseCase):
    """Active orders, or with ``history=True`` the closed ones."""

    async def execute(
        self, history: bool = False, limit: int = 100, offset: int = 0
    ) -> WorkOrderListResult:
        store = await self._get_work_order_store()
        if history:
            orders = await store.list_history(limit=limit, offset=offset)
        else:
            orders = await store.list_active(limit=limit, offset=offset)
        return WorkOrderListResult(orders=orders)

    def to_response(  # type: ignore[override]
        self, result: WorkOrderListResult
    ) -> WorkOrderListResponse:
        return WorkOrderListResponse(
            orders=[WorkOrderResponse.from_entity(o) for o in result.orders],
            total=len(result.orders),
        )
