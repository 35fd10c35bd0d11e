"""Reporting use cases: low-stock report and inventory summary."""

from dataclasses import dataclass, field

from stockroom.application.dto.responses import (
    InventorySummaryResponse,
    KindSummaryResponse,
    LowStockEntryResponse,
    LowStockReportResponse,
)
from stockroom.config import get_logger
from stockroom.core.entities.stock_item import ItemKind, StockItem, StockStatus
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.services.stock_rules import reorder_quantity

logger = get_logger(__name__)

PAGE_SIZE = 500


async def list_all_items(store: IItemStore, kind: ItemKind) -> list[StockItem]:
    """Page through every item of a kind."""
    items: list[StockItem] = []
    offset = 0
    while True:
        page = await store.list_items(kind=kind, limit=PAGE_SIZE, offset=offset)
        items.extend(page)
        if len(page) < PAGE_SIZE:
            return items
        offset += PAGE_SIZE


@dataclass
class LowStockEntry:
    item: StockItem
    reorder_needed: int


@dataclass
class LowStockReportResult:
    products: list[LowStockEntry] = field(default_factory=list)
    raw_materials: list[LowStockEntry] = field(default_factory=list)


@dataclass
class KindSummary:
    kind: ItemKind
    item_count: int = 0
    total_quantity: int = 0
    total_value: float = 0.0
    in_stock: int = 0
    low_stock: int = 0
    out_of_stock: int = 0

    def add(self, item: StockItem) -> None:
        self.item_count += 1
        self.total_quantity += item.quantity
        self.total_value += item.total_value
        if item.status == StockStatus.IN_STOCK:
            self.in_stock += 1
        elif item.status == StockStatus.LOW_STOCK:
            self.low_stock += 1
        else:
            self.out_of_stock += 1


@dataclass
class InventorySummaryResult:
    products: KindSummary
    raw_materials: KindSummary

    @property
    def total_value(self) -> float:
        return self.products.total_value + self.raw_materials.total_value


class _ReportUseCase:
    def __init__(self, item_store: IItemStore | None = None):
        self._item_store = item_store

    async def _get_item_store(self) -> IItemStore:
        if self._item_store is None:
            from stockroom.infrastructure.storage.sqlite import get_item_store

            self._item_store = await get_item_store()
        return self._item_store


class LowStockReportUseCase(_ReportUseCase):
    """Products and raw materials at or below their reorder level.

    Both kinds use the same replenishment policy.
    """

    async def execute(self) -> LowStockReportResult:
        store = await self._get_item_store()
        result = LowStockReportResult()

        for kind, bucket in (
            (ItemKind.PRODUCT, result.products),
            (ItemKind.RAW_MATERIAL, result.raw_materials),
        ):
            for item in await list_all_items(store, kind):
                if item.is_low:
                    bucket.append(
                        LowStockEntry(
                            item=item,
                            reorder_needed=reorder_quantity(item.quantity, item.reorder_level),
                        )
                    )

        logger.info(
            "low_stock_report_generated",
            products=len(result.products),
            raw_materials=len(result.raw_materials),
        )
        return result

    def to_response(self, result: LowStockReportResult) -> LowStockReportResponse:
        def entry(e: LowStockEntry) -> LowStockEntryResponse:
            return LowStockEntryResponse(
                id=e.item.id or 0,
                kind=e.item.kind.value,
                name=e.item.name,
                sku=e.item.sku,
                quantity=e.item.quantity,
                reorder_level=e.item.reorder_level,
                status=e.item.status.value,
                reorder_needed=e.reorder_needed,
                supplier=e.item.supplier,
            )

        return LowStockReportResponse(
            products=[entry(e) for e in result.products],
            raw_materials=[entry(e) for e in result.raw_materials],
            total=len(result.products) + len(result.raw_materials),
        )


class InventorySummaryUseCase(_ReportUseCase):
    """Per-kind counts, quantities and stock value."""

    async def execute(self) -> InventorySummaryResult:
        store = await self._get_item_store()
        products = KindSummary(kind=ItemKind.PRODUCT)
        materials = KindSummary(kind=ItemKind.RAW_MATERIAL)

        for item in await list_all_items(store, ItemKind.PRODUCT):
            products.add(item)
        for item in await list_all_items(store, ItemKind.RAW_MATERIAL):
            materials.add(item)

        return InventorySummaryResult(products=products, raw_materials=materials)

    def to_response(self, result: InventorySummaryResult) -> InventorySummaryResponse:
        def summary(s: KindSummary) -> KindSummaryResponse:
            return KindSummaryResponse(
                kind=s.kind.value,
                item_count=s.item_count,
                total_quantity=s.total_quantity,
                total_value=round(s.total_value, 2),
                in_stock=s.in_stock,
                low_stock=s.low_stock,
                out_of_stock=s.out_of_stock,
            )

        return InventorySummaryResponse(
            products=summary(result.products),
            raw_materials=summary(result.raw_materials),
            total_value=round(result.total_value, 2),
        )
