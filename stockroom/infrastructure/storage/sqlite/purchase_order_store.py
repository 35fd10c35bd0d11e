"""SQLite implementation of purchase order storage."""

import sqlite3
from datetime import date, datetime

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.purchase_order import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)
from stockroom.core.exceptions import PurchaseOrderNotFoundError, UniquenessConflictError
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    store_errors,
)

logger = get_logger(__name__)


class SQLitePurchaseOrderStore(IPurchaseOrderStore):
    """SQLite implementation of purchase order header + line item storage."""

    async def create_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Create a purchase order with its line items."""
        now = datetime.utcnow()
        order.created_at = now
        order.updated_at = now
        async with store_errors("create_purchase_order"):
            try:
                async with get_transaction() as conn:
                    cursor = await conn.execute(
                        """
                        INSERT INTO purchase_orders (
                            po_number, supplier, status, order_date,
                            expected_delivery_date, subtotal, tax_rate, tax_amount,
                            shipping_cost, discount_rate, discount_amount,
                            total_amount, notes, created_by, created_at, updated_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            order.po_number,
                            order.supplier,
                            order.status.value,
                            order.order_date.isoformat(),
                            order.expected_delivery_date.isoformat()
                            if order.expected_delivery_date
                            else None,
                            order.subtotal,
                            order.tax_rate,
                            order.tax_amount,
                            order.shipping_cost,
                            order.discount_rate,
                            order.discount_amount,
                            order.total_amount,
                            order.notes,
                            order.created_by,
                            order.created_at.isoformat(),
                            order.updated_at.isoformat(),
                        ),
                    )
                    order.id = cursor.lastrowid

                    for item in order.items:
                        item.po_id = order.id
                        cursor = await conn.execute(
                            """
                            INSERT INTO purchase_order_items (
                                po_id, material_id, material_name, quantity,
                                unit_price, total_price
                            ) VALUES (?, ?, ?, ?, ?, ?)
                            """,
                            (
                                order.id,
                                item.material_id,
                                item.material_name,
                                item.quantity,
                                item.unit_price,
                                item.total_price,
                            ),
                        )
                        item.id = cursor.lastrowid
            except sqlite3.IntegrityError as e:
                raise UniquenessConflictError("po_number", order.po_number) from e

        logger.info(
            "purchase_order_created",
            order_id=order.id,
            po_number=order.po_number,
            supplier=order.supplier,
            items=len(order.items),
            total=order.total_amount,
        )
        return order

    async def get_order(self, order_id: int) -> PurchaseOrder | None:
        """Get purchase order by ID with its items."""
        async with store_errors("get_purchase_order"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM purchase_orders WHERE id = ?", (order_id,)
                )
                row = await cursor.fetchone()
                if row is None:
                    return None
                items = await self._load_items(conn, order_id)
        return self._row_to_order(row, items)

    async def list_orders(
        self,
        status: PurchaseOrderStatus | None = None,
        supplier: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[PurchaseOrder]:
        """List purchase orders with optional filters, newest first."""
        query = "SELECT * FROM purchase_orders WHERE 1=1"
        params: list = []

        if status is not None:
            query += " AND status = ?"
            params.append(status.value)
        if supplier:
            query += " AND supplier = ?"
            params.append(supplier)

        query += " ORDER BY created_at DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with store_errors("list_purchase_orders"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, params)
                rows = await cursor.fetchall()
                orders = []
                for row in rows:
                    items = await self._load_items(conn, row["id"])
                    orders.append(self._row_to_order(row, items))
        return orders

    async def list_po_numbers(self, prefix: str) -> list[str]:
        """List PO numbers starting with ``prefix-``."""
        async with store_errors("list_po_numbers"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT po_number FROM purchase_orders WHERE po_number LIKE ?",
                    (f"{prefix}-%",),
                )
                rows = await cursor.fetchall()
        return [row["po_number"] for row in rows]

    async def update_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Update status, notes and expected delivery date."""
        order.updated_at = datetime.utcnow()
        async with store_errors("update_purchase_order"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    UPDATE purchase_orders SET
                        status = ?,
                        notes = ?,
                        expected_delivery_date = ?,
                        updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        order.status.value,
                        order.notes,
                        order.expected_delivery_date.isoformat()
                        if order.expected_delivery_date
                        else None,
                        order.updated_at.isoformat(),
                        order.id,
                    ),
                )
                if cursor.rowcount == 0:
                    raise PurchaseOrderNotFoundError(order.id or 0)

        logger.info(
            "purchase_order_updated",
            order_id=order.id,
            status=order.status.value,
        )
        return order

    async def delete_order(self, order_id: int) -> bool:
        """Delete a purchase order; items cascade."""
        async with store_errors("delete_purchase_order"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM purchase_orders WHERE id = ?", (order_id,)
                )
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("purchase_order_deleted", order_id=order_id)
        return deleted

    async def has_pending_for_supplier(self, supplier: str) -> bool:
        """Check for an existing pending order for the supplier."""
        async with store_errors("has_pending_for_supplier"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT 1 FROM purchase_orders WHERE supplier = ? AND status = ? LIMIT 1",
                    (supplier, PurchaseOrderStatus.PENDING.value),
                )
                row = await cursor.fetchone()
        return row is not None

    @staticmethod
    async def _load_items(
        conn: aiosqlite.Connection, order_id: int
    ) -> list[PurchaseOrderItem]:
        cursor = await conn.execute(
            "SELECT * FROM purchase_order_items WHERE po_id = ? ORDER BY id",
            (order_id,),
        )
        rows = await cursor.fetchall()
        return [
            PurchaseOrderItem(
                id=row["id"],
                po_id=row["po_id"],
                material_id=row["material_id"],
                material_name=row["material_name"],
                quantity=row["quantity"],
                unit_price=row["unit_price"] or 0.0,
            )
            for row in rows
        ]

    @staticmethod
    def _row_to_order(
        row: aiosqlite.Row, items: list[PurchaseOrderItem]
    ) -> PurchaseOrder:
        """Convert database row to PurchaseOrder. Totals are recomputed from items."""
        order_date = date.today()
        if row["order_date"]:
            try:
                order_date = date.fromisoformat(row["order_date"])
            except (ValueError, TypeError):
                pass

        expected = None
        if row["expected_delivery_date"]:
            try:
                expected = date.fromisoformat(row["expected_delivery_date"])
            except (ValueError, TypeError):
                pass

        created_at = datetime.utcnow()
        updated_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return PurchaseOrder(
            id=row["id"],
            po_number=row["po_number"],
            supplier=row["supplier"],
            status=PurchaseOrderStatus(row["status"]),
            order_date=order_date,
            expected_delivery_date=expected,
            subtotal=row["subtotal"] or 0.0,
            tax_rate=row["tax_rate"],
            shipping_cost=row["shipping_cost"],
            discount_rate=row["discount_rate"],
            notes=row["notes"],
            created_by=row["created_by"],
            items=items,
            created_at=created_at,
            updated_at=updated_at,
        )
