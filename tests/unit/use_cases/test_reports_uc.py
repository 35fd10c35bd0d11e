"""Unit tests for report use cases."""

from unittest.mock import AsyncMock

import pytest

from stockroom.application.use_cases.reports import (
    PAGE_SIZE,
    InventorySummaryUseCase,
    LowStockReportUseCase,
    list_all_items,
)
from stockroom.core.entities.stock_item import ItemKind, StockItem


def _item(item_id, kind, quantity, unit_cost=1.0):
    return StockItem(
        id=item_id,
        kind=kind,
        name=f"item-{item_id}",
        quantity=quantity,
        reorder_level=10,
        unit_cost=unit_cost,
    )


@pytest.fixture
def inventory():
    return {
        ItemKind.PRODUCT: [
            _item(1, ItemKind.PRODUCT, 25, unit_cost=40.0),
            _item(2, ItemKind.PRODUCT, 4, unit_cost=10.0),
        ],
        ItemKind.RAW_MATERIAL: [
            _item(3, ItemKind.RAW_MATERIAL, 0, unit_cost=5.0),
            _item(4, ItemKind.RAW_MATERIAL, 10, unit_cost=2.5),
            _item(5, ItemKind.RAW_MATERIAL, 11, unit_cost=1.0),
        ],
    }


@pytest.fixture
def mock_item_store(inventory):
    store = AsyncMock()

    async def list_items(kind=None, status=None, limit=100, offset=0):
        return inventory[kind][offset : offset + limit]

    store.list_items.side_effect = list_items
    return store


class TestListAllItems:
    async def test_pages_until_short_page(self):
        store = AsyncMock()
        full = [_item(i, ItemKind.PRODUCT, 1) for i in range(PAGE_SIZE)]
        store.list_items.side_effect = [full, [_item(9999, ItemKind.PRODUCT, 1)]]

        items = await list_all_items(store, ItemKind.PRODUCT)

        assert len(items) == PAGE_SIZE + 1
        assert store.list_items.await_args_list[1].kwargs["offset"] == PAGE_SIZE


class TestLowStockReport:
    """Tests for the low-stock report."""

    async def test_groups_low_items_by_kind(self, mock_item_store):
        use_case = LowStockReportUseCase(item_store=mock_item_store)

        result = await use_case.execute()

        assert [e.item.id for e in result.products] == [2]
        assert [e.item.id for e in result.raw_materials] == [3, 4]

    async def test_reorder_needed(self, mock_item_store):
        use_case = LowStockReportUseCase(item_store=mock_item_store)

        response = use_case.to_response(await use_case.execute())

        needed = {e.id: e.reorder_needed for e in response.products + response.raw_materials}
        assert needed == {2: 16, 3: 20, 4: 10}
        assert response.total == 3
        assert response.raw_materials[0].status == "out-of-stock"


class TestInventorySummary:
    async def test_counts_and_value(self, mock_item_store):
        use_case = InventorySummaryUseCase(item_store=mock_item_store)

        response = use_case.to_response(await use_case.execute())

        assert response.products.item_count == 2
        assert response.products.total_quantity == 29
        assert response.products.total_value == 1040.0
        assert response.products.in_stock == 1
        assert response.products.low_stock == 1

        assert response.raw_materials.out_of_stock == 1
        assert response.raw_materials.low_stock == 1
        assert response.raw_materials.in_stock == 1
        assert response.raw_materials.total_value == 36.0

        assert response.total_value == 1076.0
