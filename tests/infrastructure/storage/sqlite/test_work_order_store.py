"""Tests for SQLiteWorkOrderStore."""

from datetime import datetime

import pytest

from stockroom.core.entities.work_order import WorkOrder, WorkOrderMaterial, WorkOrderStatus
from stockroom.core.exceptions import WorkOrderNotFoundError
from stockroom.infrastructure.storage.sqlite.work_order_store import SQLiteWorkOrderStore


@pytest.fixture
async def store(sqlite_db):
    return SQLiteWorkOrderStore()


def _order(quantity=5) -> WorkOrder:
    return WorkOrder(
        product_id=1,
        product_name="Linen Shirt",
        quantity=quantity,
        materials=[
            WorkOrderMaterial(material_id=10, quantity=4),
            WorkOrderMaterial(material_id=11, quantity=2),
        ],
    )


class TestActiveOrders:
    async def test_create_and_get(self, store):
        created = await store.create_order(_order())

        fetched = await store.get_active(created.id)

        assert fetched.status == WorkOrderStatus.PENDING
        assert [(m.material_id, m.quantity) for m in fetched.materials] == [(10, 4), (11, 2)]

    async def test_update_status(self, store):
        created = await store.create_order(_order())

        updated = await store.update_status(created.id, WorkOrderStatus.IN_PROGRESS)

        assert updated.status == WorkOrderStatus.IN_PROGRESS

    async def test_update_status_missing(self, store):
        assert await store.update_status(99, WorkOrderStatus.IN_PROGRESS) is None

    async def test_list_active(self, store):
        await store.create_order(_order(1))
        await store.create_order(_order(2))

        orders = await store.list_active()

        assert len(orders) == 2
        assert all(o.materials for o in orders)

    async def test_delete_active_cascades_materials(self, store):
        created = await store.create_order(_order())

        assert await store.delete_active(created.id) is True
        assert await store.get_order(created.id) is None
        assert await store.delete_active(created.id) is False


class TestMoveToHistory:
    """An order is in exactly one of the active and history tables."""

    async def test_completed_order_moves_with_same_id(self, store):
        created = await store.create_order(_order())
        created.status = WorkOrderStatus.COMPLETED

        moved = await store.move_to_history(created)

        assert moved.id == created.id
        assert isinstance(moved.completed_at, datetime)
        assert await store.get_active(created.id) is None
        assert await store.list_active() == []

        history = await store.list_history()
        assert [o.id for o in history] == [created.id]
        assert history[0].status == WorkOrderStatus.COMPLETED
        assert history[0].completed_at is not None
        assert [(m.material_id, m.quantity) for m in history[0].materials] == [(10, 4), (11, 2)]

    async def test_get_order_falls_back_to_history(self, store):
        created = await store.create_order(_order())
        created.status = WorkOrderStatus.CANCELLED
        await store.move_to_history(created)

        fetched = await store.get_order(created.id)

        assert fetched.status == WorkOrderStatus.CANCELLED
        assert fetched.completed_at is None

    async def test_moving_twice_fails(self, store):
        created = await store.create_order(_order())
        created.status = WorkOrderStatus.COMPLETED
        await store.move_to_history(created)

        with pytest.raises(WorkOrderNotFoundError):
            await store.move_to_history(created)

        assert len(await store.list_history()) == 1

    async def test_ids_not_reused_after_move(self, store):
        first = await store.create_order(_order())
        first.status = WorkOrderStatus.COMPLETED
        await store.move_to_history(first)

        second = await store.create_order(_order())

        assert second.id > first.id
