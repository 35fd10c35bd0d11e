"""SQLite implementation of stock item storage."""

import sqlite3
from datetime import datetime

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.stock_item import ItemKind, StockItem, StockStatus
from stockroom.core.exceptions import (
    InsufficientStockError,
    ItemNotFoundError,
    UniquenessConflictError,
)
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.services.stock_rules import classify
from stockroom.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    store_errors,
)

logger = get_logger(__name__)


class SQLiteItemStore(IItemStore):
    """SQLite implementation of product and raw-material storage."""

    async def create_item(self, item: StockItem) -> StockItem:
        """Create a new stock item."""
        now = datetime.utcnow()
        item.created_at = now
        item.updated_at = now
        async with store_errors("create_item"):
            try:
                async with get_transaction() as conn:
                    cursor = await conn.execute(
                        """
                        INSERT INTO stock_items (
                            kind, name, description, category, sku, quantity,
                            reorder_level, unit_cost, unit, supplier, status,
                            created_at, updated_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            item.kind.value,
                            item.name,
                            item.description,
                            item.category,
                            item.sku,
                            item.quantity,
                            item.reorder_level,
                            item.unit_cost,
                            item.unit,
                            item.supplier,
                            item.status.value,
                            item.created_at.isoformat(),
                            item.updated_at.isoformat(),
                        ),
                    )
                    item.id = cursor.lastrowid
            except sqlite3.IntegrityError as e:
                raise UniquenessConflictError("sku", item.sku or "") from e

        logger.info(
            "stock_item_created",
            item_id=item.id,
            kind=item.kind.value,
            sku=item.sku,
        )
        return item

    async def get_item(self, item_id: int) -> StockItem | None:
        """Get stock item by ID."""
        async with store_errors("get_item"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM stock_items WHERE id = ?", (item_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_item(row)

    async def update_item(self, item: StockItem) -> StockItem:
        """Update descriptive fields, reorder level and the derived status."""
        item.updated_at = datetime.utcnow()
        async with store_errors("update_item"):
            try:
                async with get_transaction(immediate=True) as conn:
                    # Status depends on the stored quantity, which this method never writes
                    cursor = await conn.execute(
                        "SELECT quantity FROM stock_items WHERE id = ?", (item.id,)
                    )
                    row = await cursor.fetchone()
                    if row is None:
                        raise ItemNotFoundError(item.id or 0)
                    item.quantity = row["quantity"]

                    await conn.execute(
                        """
                        UPDATE stock_items SET
                            name = ?,
                            description = ?,
                            category = ?,
                            sku = ?,
                            reorder_level = ?,
                            unit_cost = ?,
                            unit = ?,
                            supplier = ?,
                            status = ?,
                            updated_at = ?
                        WHERE id = ?
                        """,
                        (
                            item.name,
                            item.description,
                            item.category,
                            item.sku,
                            item.reorder_level,
                            item.unit_cost,
                            item.unit,
                            item.supplier,
                            item.status.value,
                            item.updated_at.isoformat(),
                            item.id,
                        ),
                    )
            except sqlite3.IntegrityError as e:
                raise UniquenessConflictError("sku", item.sku or "") from e

        logger.info("stock_item_updated", item_id=item.id, status=item.status.value)
        return item

    async def delete_item(self, item_id: int) -> bool:
        """Delete a stock item."""
        async with store_errors("delete_item"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM stock_items WHERE id = ?", (item_id,)
                )
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("stock_item_deleted", item_id=item_id)
        return deleted

    async def list_items(
        self,
        kind: ItemKind | None = None,
        status: StockStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StockItem]:
        """List stock items with optional filters."""
        query = "SELECT * FROM stock_items WHERE 1=1"
        params: list = []

        if kind is not None:
            query += " AND kind = ?"
            params.append(kind.value)
        if status is not None:
            query += " AND status = ?"
            params.append(status.value)

        query += " ORDER BY name, id LIMIT ? OFFSET ?"
        params.extend([limit, offset])

        async with store_errors("list_items"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, params)
                rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def list_skus(self, kind: ItemKind, prefix: str) -> list[str]:
        """List SKUs of a kind starting with ``prefix-``."""
        async with store_errors("list_skus"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT sku FROM stock_items WHERE kind = ? AND sku LIKE ?",
                    (kind.value, f"{prefix}-%"),
                )
                rows = await cursor.fetchall()
        return [row["sku"] for row in rows if row["sku"]]

    async def adjust_quantity(self, item_id: int, delta: int) -> StockItem:
        """Add ``delta`` to the quantity under a write lock."""
        async with store_errors("adjust_quantity"):
            async with get_transaction(immediate=True) as conn:
                cursor = await conn.execute(
                    "SELECT * FROM stock_items WHERE id = ?", (item_id,)
                )
                row = await cursor.fetchone()
                if row is None:
                    raise ItemNotFoundError(item_id)

                current = row["quantity"]
                new_quantity = current + delta
                if new_quantity < 0:
                    raise InsufficientStockError(
                        item_id=item_id,
                        requested=-delta,
                        available=current,
                        name=row["name"],
                    )

                status = classify(new_quantity, row["reorder_level"])
                now = datetime.utcnow()
                await conn.execute(
                    """
                    UPDATE stock_items SET quantity = ?, status = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (new_quantity, status.value, now.isoformat(), item_id),
                )

        item = self._row_to_item(row)
        item.quantity = new_quantity
        item.updated_at = now
        logger.info(
            "stock_quantity_adjusted",
            item_id=item_id,
            delta=delta,
            quantity=new_quantity,
            status=status.value,
        )
        return item

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> StockItem:
        """Convert database row to StockItem. The stored status is recomputed."""
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

        return StockItem(
            id=row["id"],
            kind=ItemKind(row["kind"]),
            name=row["name"],
            description=row["description"],
            category=row["category"] or "General",
            sku=row["sku"],
            quantity=row["quantity"],
            reorder_level=row["reorder_level"],
            unit_cost=row["unit_cost"] or 0.0,
            unit=row["unit"],
            supplier=row["supplier"],
            created_at=created_at,
            updated_at=updated_at,
        )
