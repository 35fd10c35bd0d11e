"""Generate Low-Stock Purchase Orders Use Case: one pending PO per supplier."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date

from stockroom.application.dto.responses import (
    GeneratePurchaseOrdersResponse,
    PurchaseOrderResponse,
)
from stockroom.application.use_cases.activity import record_activity
from stockroom.application.use_cases.purchase_orders import (
    new_purchase_order,
    save_with_po_number,
)
from stockroom.application.use_cases.reports import list_all_items
from stockroom.config import get_logger, get_settings
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.purchase_order import PurchaseOrder, PurchaseOrderItem
from stockroom.core.entities.stock_item import ItemKind, StockItem
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.core.services.stock_rules import reorder_quantity

logger = get_logger(__name__)


@dataclass
class GeneratePurchaseOrdersResult:
    """Result of low-stock purchase order generation."""

    created: list[PurchaseOrder] = field(default_factory=list)
    skipped_suppliers: list[str] = field(default_factory=list)


class GenerateLowStockPurchaseOrdersUseCase:
    """Raise replenishment orders for raw materials at or below their reorder level.

    Materials are grouped by supplier. A supplier that already has a pending
    order is skipped so repeated runs do not pile up duplicates.
    """

    def __init__(
        self,
        item_store: IItemStore | None = None,
        purchase_order_store: IPurchaseOrderStore | None = None,
        activity_log: IActivityLog | None = None,
    ):
        self._item_store = item_store
        self._purchase_order_store = purchase_order_store
        self._activity_log = activity_log

    async def _get_item_store(self) -> IItemStore:
        if self._item_store is None:
            from stockroom.infrastructure.storage.sqlite import get_item_store

            self._item_store = await get_item_store()
        return self._item_store

    async def _get_purchase_order_store(self) -> IPurchaseOrderStore:
        if self._purchase_order_store is None:
            from stockroom.infrastructure.storage.sqlite import get_purchase_order_store

            self._purchase_order_store = await get_purchase_order_store()
        return self._purchase_order_store

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stockroom.infrastructure.storage.sqlite import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    async def execute(self, actor: Actor | None = None) -> GeneratePurchaseOrdersResult:
        actor = actor or SYSTEM_ACTOR
        settings = get_settings().inventory
        item_store = await self._get_item_store()
        po_store = await self._get_purchase_order_store()

        by_supplier: dict[str, list[StockItem]] = defaultdict(list)
        for material in await list_all_items(item_store, ItemKind.RAW_MATERIAL):
            if material.is_low:
                by_supplier[material.supplier or settings.unknown_supplier].append(material)

        logger.info("generate_purchase_orders_started", suppliers=len(by_supplier))

        result = GeneratePurchaseOrdersResult()
        for supplier in sorted(by_supplier):
            if await po_store.has_pending_for_supplier(supplier):
                logger.info("generate_purchase_orders_supplier_skipped", supplier=supplier)
                result.skipped_suppliers.append(supplier)
                continue

            lines = []
            for material in by_supplier[supplier]:
                quantity = reorder_quantity(material.quantity, material.reorder_level)
                if quantity <= 0:
                    continue
                lines.append(
                    PurchaseOrderItem(
                        material_id=material.id,  # type: ignore[arg-type]
                        material_name=material.name,
                        quantity=quantity,
                        unit_price=material.unit_cost,
                    )
                )
            if not lines:
                continue

            notes = (
                "Auto-generated PO for low stock items. "
                f"Generated on {date.today().isoformat()}."
            )
            order = await save_with_po_number(
                po_store,
                lambda po_number, supplier=supplier, lines=lines: new_purchase_order(
                    po_number, supplier, lines, actor, notes=notes
                ),
            )
            result.created.append(order)

        if result.created:
            await record_activity(
                await self._get_activity_log(),
                "create",
                f"Generated {len(result.created)} purchase orders for low stock items",
                actor,
            )

        logger.info(
            "generate_purchase_orders_complete",
            created=len(result.created),
            skipped=len(result.skipped_suppliers),
        )
        return result

    def to_response(self, result: GeneratePurchaseOrdersResult) -> GeneratePurchaseOrdersResponse:
        """Convert result to API response."""
        if result.created:
            message = f"Generated {len(result.created)} purchase orders"
        elif result.skipped_suppliers:
            message = "All low stock suppliers already have pending purchase orders"
        else:
            message = "No low stock raw materials found"
        return GeneratePurchaseOrdersResponse(
            created=[PurchaseOrderResponse.from_entity(o) for o in result.created],
            skipped_suppliers=result.skipped_suppliers,
            message=message,
        )
