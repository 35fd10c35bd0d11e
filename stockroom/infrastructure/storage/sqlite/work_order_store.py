"""SQLite implementation of work order storage."""

import json
from datetime import datetime

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.work_order import (
    WorkOrder,
    WorkOrderMaterial,
    WorkOrderStatus,
)
from stockroom.core.exceptions import WorkOrderNotFoundError
from stockroom.core.interfaces.work_order_store import IWorkOrderStore
from stockroom.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    store_errors,
)

logger = get_logger(__name__)


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None


class SQLiteWorkOrderStore(IWorkOrderStore):
    """Active orders in ``work_orders``, closed orders in ``work_order_history``."""

    async def create_order(self, order: WorkOrder) -> WorkOrder:
        """Insert an active order and its material lines in one transaction."""
        now = datetime.utcnow()
        order.created_at = now
        order.updated_at = now
        async with store_errors("create_work_order"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO work_orders (
                        product_id, product_name, quantity, status,
                        created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.product_id,
                        order.product_name,
                        order.quantity,
                        order.status.value,
                        order.created_at.isoformat(),
                        order.updated_at.isoformat(),
                    ),
                )
                order.id = cursor.lastrowid

                for material in order.materials:
                    await conn.execute(
                        """
                        INSERT INTO work_order_materials (work_order_id, material_id, quantity)
                        VALUES (?, ?, ?)
                        """,
                        (order.id, material.material_id, material.quantity),
                    )

        logger.info(
            "work_order_created",
            order_id=order.id,
            product_id=order.product_id,
            quantity=order.quantity,
            materials=len(order.materials),
        )
        return order

    async def get_active(self, order_id: int) -> WorkOrder | None:
        """Get an active order with its materials."""
        async with store_errors("get_active_work_order"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM work_orders WHERE id = ?", (order_id,)
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                materials = await self._load_materials(conn, order_id)
        return self._row_to_active(row, materials)

    async def get_order(self, order_id: int) -> WorkOrder | None:
        """Get an order from the active set, else from history."""
        order = await self.get_active(order_id)
        if order is not None:
            return order

        async with store_errors("get_work_order"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM work_order_history WHERE id = ?", (order_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_history(row)

    async def list_active(self, limit: int = 100, offset: int = 0) -> list[WorkOrder]:
        """List active orders, newest first."""
        async with store_errors("list_active_work_orders"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM work_orders
                    ORDER BY created_at DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
                rows = await cursor.fetchall()
                orders = []
                for row in rows:
                    materials = await self._load_materials(conn, row["id"])
                    orders.append(self._row_to_active(row, materials))
        return orders

    async def list_history(self, limit: int = 100, offset: int = 0) -> list[WorkOrder]:
        """List closed orders, most recently closed first."""
        async with store_errors("list_work_order_history"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM work_order_history
                    ORDER BY updated_at DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (limit, offset),
                )
                rows = await cursor.fetchall()
        return [self._row_to_history(row) for row in rows]

    async def update_status(
        self, order_id: int, status: WorkOrderStatus
    ) -> WorkOrder | None:
        """Set the status of an active order."""
        now = datetime.utcnow()
        async with store_errors("update_work_order_status"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "UPDATE work_orders SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, now.isoformat(), order_id),
                )
                if cursor.rowcount == 0:
                    return None

        logger.info("work_order_status_updated", order_id=order_id, status=status.value)
        return await self.get_active(order_id)

    async def move_to_history(self, order: WorkOrder) -> WorkOrder:
        """Delete from the active set and insert into history in one transaction."""
        now = datetime.utcnow()
        order.updated_at = now
        if order.status == WorkOrderStatus.COMPLETED and order.completed_at is None:
            order.completed_at = now
        materials_json = json.dumps(
            [m.model_dump() for m in order.materials]
        )

        async with store_errors("move_work_order_to_history"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM work_orders WHERE id = ?", (order.id,)
                )
                if cursor.rowcount == 0:
                    raise WorkOrderNotFoundError(order.id or 0, reason="not active")

                await conn.execute(
                    """
                    INSERT INTO work_order_history (
                        id, product_id, product_name, quantity, status,
                        materials_json, created_at, updated_at, completed_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        order.id,
                        order.product_id,
                        order.product_name,
                        order.quantity,
                        order.status.value,
                        materials_json,
                        order.created_at.isoformat(),
                        order.updated_at.isoformat(),
                        order.completed_at.isoformat() if order.completed_at else None,
                    ),
                )

        logger.info(
            "work_order_moved_to_history",
            order_id=order.id,
            status=order.status.value,
        )
        return order

    async def delete_active(self, order_id: int) -> bool:
        """Delete an active order; material lines cascade."""
        async with store_errors("delete_work_order"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM work_orders WHERE id = ?", (order_id,)
                )
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("work_order_deleted", order_id=order_id)
        return deleted

    @staticmethod
    async def _load_materials(
        conn: aiosqlite.Connection, order_id: int
    ) -> list[WorkOrderMaterial]:
        cursor = await conn.execute(
            """
            SELECT material_id, quantity FROM work_order_materials
            WHERE work_order_id = ? ORDER BY id
            """,
            (order_id,),
        )
        rows = await cursor.fetchall()
        return [
            WorkOrderMaterial(material_id=row["material_id"], quantity=row["quantity"])
            for row in rows
        ]

    @staticmethod
    def _row_to_active(
        row: aiosqlite.Row, materials: list[WorkOrderMaterial]
    ) -> WorkOrder:
        """Convert an active-table row to WorkOrder."""
        return WorkOrder(
            id=row["id"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            quantity=row["quantity"],
            materials=materials,
            status=WorkOrderStatus(row["status"]),
            created_at=_parse_datetime(row["created_at"]) or datetime.utcnow(),
            updated_at=_parse_datetime(row["updated_at"]) or datetime.utcnow(),
        )

    @staticmethod
    def _row_to_history(row: aiosqlite.Row) -> WorkOrder:
        """Convert a history row to WorkOrder."""
        materials = []
        if row["materials_json"]:
            try:
                materials = [
                    WorkOrderMaterial(**m) for m in json.loads(row["materials_json"])
                ]
            except (json.JSONDecodeError, TypeError):
                pass

        return WorkOrder(
            id=row["id"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            quantity=row["quantity"],
            materials=materials,
            status=WorkOrderStatus(row["status"]),
            created_at=_parse_datetime(row["created_at"]) or datetime.utcnow(),
            updated_at=_parse_datetime(row["updated_at"]) or datetime.utcnow(),
            completed_at=_parse_datetime(row["completed_at"]),
        )
