"""Unit tests for purchase order use cases."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from stockroom.application.dto.requests import (
    CreatePurchaseOrderRequest,
    PurchaseOrderItemRequest,
    UpdatePurchaseOrderRequest,
)
from stockroom.application.use_cases.purchase_orders import (
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GetPurchaseOrderUseCase,
    UpdatePurchaseOrderUseCase,
)
from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.purchase_order import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.exceptions import (
    InvalidStatusTransitionError,
    ItemNotFoundError,
    PermissionDeniedError,
    PurchaseOrderNotFoundError,
    UniquenessConflictError,
    ValidationError,
)


@pytest.fixture
def existing_order():
    return PurchaseOrder(
        id=4,
        po_number="PO-0004",
        supplier="Textile Co",
        items=[
            PurchaseOrderItem(
                material_id=2, material_name="Linen Fabric", quantity=15, unit_price=12.5
            )
        ],
    )


@pytest.fixture
def mock_po_store(existing_order):
    store = AsyncMock()
    store.list_po_numbers.return_value = ["PO-0001", "PO-0004"]
    store.get_order.return_value = existing_order
    store.delete_order.return_value = True

    async def create_order(order):
        order.id = 5
        return order

    async def update_order(order):
        return order

    store.create_order.side_effect = create_order
    store.update_order.side_effect = update_order
    return store


@pytest.fixture
def mock_item_store(sample_material, sample_product):
    store = AsyncMock()
    by_id = {sample_material.id: sample_material, sample_product.id: sample_product}

    async def get_item(item_id):
        return by_id.get(item_id)

    store.get_item.side_effect = get_item
    return store


@pytest.fixture
def mock_fixed_price_store():
    store = AsyncMock()
    store.find_price.return_value = None
    return store


@pytest.fixture
def stores(mock_po_store, mock_item_store, mock_fixed_price_store):
    return {
        "purchase_order_store": mock_po_store,
        "item_store": mock_item_store,
        "activity_log": AsyncMock(),
        "fixed_price_store": mock_fixed_price_store,
    }


class TestCreatePurchaseOrder:
    """Tests for raising purchase orders."""

    async def test_numbers_and_prices_order(self, stores, staff):
        request = CreatePurchaseOrderRequest(
            supplier="Textile Co",
            items=[PurchaseOrderItemRequest(material_id=2, quantity=10)],
            expected_delivery_date=date(2026, 11, 1),
        )

        result = await CreatePurchaseOrderUseCase(**stores).execute(request, actor=staff)

        order = result.order
        assert order.po_number == "PO-0005"
        assert order.status == PurchaseOrderStatus.PENDING
        assert order.created_by == "bob"
        assert order.items[0].material_name == "Linen Fabric"
        assert order.items[0].unit_price == 12.5
        assert order.subtotal == 125.0
        assert order.tax_amount == 12.5
        assert order.total_amount == 212.5
        assert order.expected_delivery_date == date(2026, 11, 1)

    async def test_explicit_unit_price(self, stores, mock_fixed_price_store):
        request = CreatePurchaseOrderRequest(
            supplier="Textile Co",
            items=[PurchaseOrderItemRequest(material_id=2, quantity=2, unit_price=10.0)],
        )

        result = await CreatePurchaseOrderUseCase(**stores).execute(request)

        assert result.order.items[0].total_price == 20.0
        mock_fixed_price_store.find_price.assert_not_called()

    async def test_active_fixed_price_is_default_unit_price(self, stores, mock_fixed_price_store):
        mock_fixed_price_store.find_price.return_value = FixedPrice(
            id=3,
            kind=ItemKind.RAW_MATERIAL,
            category="Fabric",
            item_name="Linen Fabric",
            price=11.0,
        )
        request = CreatePurchaseOrderRequest(
            supplier="Textile Co",
            items=[PurchaseOrderItemRequest(material_id=2, quantity=10)],
        )

        result = await CreatePurchaseOrderUseCase(**stores).execute(request)

        mock_fixed_price_store.find_price.assert_awaited_once_with(
            ItemKind.RAW_MATERIAL, "Fabric", "Linen Fabric"
        )
        assert result.order.items[0].unit_price == 11.0
        assert result.order.subtotal == 110.0

    async def test_product_line_rejected(self, stores, mock_po_store):
        request = CreatePurchaseOrderRequest(
            supplier="Textile Co",
            items=[PurchaseOrderItemRequest(material_id=1, quantity=2)],
        )

        with pytest.raises(ValidationError):
            await CreatePurchaseOrderUseCase(**stores).execute(request)
        mock_po_store.create_order.assert_not_called()

    async def test_unknown_material(self, stores):
        request = CreatePurchaseOrderRequest(
            supplier="Textile Co",
            items=[PurchaseOrderItemRequest(material_id=77, quantity=2)],
        )

        with pytest.raises(ItemNotFoundError):
            await CreatePurchaseOrderUseCase(**stores).execute(request)

    async def test_po_number_conflict_retries(self, stores, mock_po_store):
        mock_po_store.list_po_numbers.side_effect = [["PO-0001"], ["PO-0001", "PO-0002"]]
        attempts = []

        async def create_order(order):
            attempts.append(order.po_number)
            if len(attempts) == 1:
                raise UniquenessConflictError("po_number", order.po_number)
            order.id = 3
            return order

        mock_po_store.create_order.side_effect = create_order
        request = CreatePurchaseOrderRequest(
            supplier="Textile Co",
            items=[PurchaseOrderItemRequest(material_id=2, quantity=1)],
        )

        result = await CreatePurchaseOrderUseCase(**stores).execute(request)

        assert attempts == ["PO-0002", "PO-0003"]
        assert result.order.po_number == "PO-0003"


class TestUpdatePurchaseOrder:
    """Tests for status transitions and edits."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (PurchaseOrderStatus.PENDING, PurchaseOrderStatus.APPROVED),
            (PurchaseOrderStatus.APPROVED, PurchaseOrderStatus.SENT),
            (PurchaseOrderStatus.SENT, PurchaseOrderStatus.RECEIVED),
            (PurchaseOrderStatus.SENT, PurchaseOrderStatus.CANCELLED),
        ],
    )
    async def test_allowed_transitions(self, stores, existing_order, current, target):
        existing_order.status = current

        result = await UpdatePurchaseOrderUseCase(**stores).execute(
            4, UpdatePurchaseOrderRequest(status=target)
        )

        assert result.order.status == target

    async def test_skipping_a_step_rejected(self, stores, mock_po_store):
        with pytest.raises(InvalidStatusTransitionError):
            await UpdatePurchaseOrderUseCase(**stores).execute(
                4, UpdatePurchaseOrderRequest(status=PurchaseOrderStatus.RECEIVED)
            )
        mock_po_store.update_order.assert_not_called()

    async def test_terminal_order_rejects_edits(self, stores, existing_order, mock_po_store):
        existing_order.status = PurchaseOrderStatus.RECEIVED

        with pytest.raises(InvalidStatusTransitionError):
            await UpdatePurchaseOrderUseCase(**stores).execute(
                4, UpdatePurchaseOrderRequest(notes="late")
            )
        mock_po_store.update_order.assert_not_called()

    async def test_receiving_does_not_touch_stock(self, stores, existing_order, mock_item_store):
        existing_order.status = PurchaseOrderStatus.SENT

        await UpdatePurchaseOrderUseCase(**stores).execute(
            4, UpdatePurchaseOrderRequest(status=PurchaseOrderStatus.RECEIVED)
        )

        mock_item_store.adjust_quantity.assert_not_called()

    async def test_edit_notes_keeps_status(self, stores, existing_order):
        existing_order.expected_delivery_date = date(2026, 12, 1)

        result = await UpdatePurchaseOrderUseCase(**stores).execute(
            4, UpdatePurchaseOrderRequest(notes="call before delivery")
        )

        assert result.order.status == PurchaseOrderStatus.PENDING
        assert result.order.notes == "call before delivery"
        assert result.order.expected_delivery_date == date(2026, 12, 1)

    async def test_explicit_null_clears_delivery_date(self, stores, existing_order):
        existing_order.expected_delivery_date = date(2026, 12, 1)

        result = await UpdatePurchaseOrderUseCase(**stores).execute(
            4, UpdatePurchaseOrderRequest(expected_delivery_date=None)
        )

        assert result.order.expected_delivery_date is None

    async def test_missing_order(self, stores, mock_po_store):
        mock_po_store.get_order.return_value = None

        with pytest.raises(PurchaseOrderNotFoundError):
            await UpdatePurchaseOrderUseCase(**stores).execute(
                4, UpdatePurchaseOrderRequest(status=PurchaseOrderStatus.APPROVED)
            )


class TestDeletePurchaseOrder:
    async def test_staff_denied(self, stores, mock_po_store, staff):
        with pytest.raises(PermissionDeniedError):
            await DeletePurchaseOrderUseCase(**stores).execute(4, actor=staff)
        mock_po_store.delete_order.assert_not_called()

    async def test_admin_deletes(self, stores, mock_po_store, admin):
        result = await DeletePurchaseOrderUseCase(**stores).execute(4, actor=admin)

        mock_po_store.delete_order.assert_awaited_once_with(4)
        assert result.order.po_number == "PO-0004"


class TestGetPurchaseOrder:
    async def test_response_includes_lines(self, stores):
        use_case = GetPurchaseOrderUseCase(**stores)

        response = use_case.to_response(await use_case.execute(4))

        assert response.po_number == "PO-0004"
        assert response.items[0].total_price == 187.5
