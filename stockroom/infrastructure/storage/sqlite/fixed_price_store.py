"""SQLite implementation of the fixed price catalog."""

import sqlite3
from datetime import datetime

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.exceptions import FixedPriceNotFoundError, UniquenessConflictError
from stockroom.core.interfaces.fixed_price_store import IFixedPriceStore
from stockroom.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    store_errors,
)

logger = get_logger(__name__)


def _price_key(price: FixedPrice) -> str:
    return f"{price.kind.value}/{price.category}/{price.item_name}"


class SQLiteFixedPriceStore(IFixedPriceStore):
    """Fixed prices keyed by kind, category and item name."""

    async def create_price(self, price: FixedPrice) -> FixedPrice:
        now = datetime.utcnow()
        price.created_at = now
        price.updated_at = now
        async with store_errors("create_fixed_price"):
            try:
                async with get_transaction() as conn:
                    cursor = await conn.execute(
                        """
                        INSERT INTO fixed_prices (
                            kind, category, item_name, price, is_active,
                            created_at, updated_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            price.kind.value,
                            price.category,
                            price.item_name,
                            price.price,
                            int(price.is_active),
                            price.created_at.isoformat(),
                            price.updated_at.isoformat(),
                        ),
                    )
                    price.id = cursor.lastrowid
            except sqlite3.IntegrityError as e:
                raise UniquenessConflictError("fixed_price", _price_key(price)) from e

        logger.info("fixed_price_created", price_id=price.id, kind=price.kind, price=price.price)
        return price

    async def get_price(self, price_id: int) -> FixedPrice | None:
        async with store_errors("get_fixed_price"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM fixed_prices WHERE id = ?", (price_id,)
                )
                row = await cursor.fetchone()
        return self._row_to_price(row) if row else None

    async def list_prices(
        self,
        kind: ItemKind | None = None,
        category: str | None = None,
        active_only: bool = True,
    ) -> list[FixedPrice]:
        query = "SELECT * FROM fixed_prices WHERE 1=1"
        params: list = []

        if kind is not None:
            query += " AND kind = ?"
            params.append(kind.value)
        if category is not None:
            query += " AND category = ?"
            params.append(category)
        if active_only:
            query += " AND is_active = 1"

        query += " ORDER BY item_name, id"

        async with store_errors("list_fixed_prices"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, params)
                rows = await cursor.fetchall()
        return [self._row_to_price(row) for row in rows]

    async def find_price(
        self, kind: ItemKind, category: str, item_name: str
    ) -> FixedPrice | None:
        async with store_errors("find_fixed_price"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM fixed_prices
                    WHERE kind = ? AND category = ? AND item_name = ? AND is_active = 1
                    """,
                    (kind.value, category, item_name),
                )
                row = await cursor.fetchone()
        return self._row_to_price(row) if row else None

    async def update_price(self, price: FixedPrice) -> FixedPrice:
        price.updated_at = datetime.utcnow()
        async with store_errors("update_fixed_price"):
            try:
                async with get_transaction() as conn:
                    cursor = await conn.execute(
                        """
                        UPDATE fixed_prices SET
                            kind = ?,
                            category = ?,
                            item_name = ?,
                            price = ?,
                            is_active = ?,
                            updated_at = ?
                        WHERE id = ?
                        """,
                        (
                            price.kind.value,
                            price.category,
                            price.item_name,
                            price.price,
                            int(price.is_active),
                            price.updated_at.isoformat(),
                            price.id,
                        ),
                    )
                    if cursor.rowcount == 0:
                        raise FixedPriceNotFoundError(price.id or 0)
            except sqlite3.IntegrityError as e:
                raise UniquenessConflictError("fixed_price", _price_key(price)) from e

        logger.info("fixed_price_updated", price_id=price.id, price=price.price)
        return price

    async def delete_price(self, price_id: int) -> bool:
        async with store_errors("delete_fixed_price"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "DELETE FROM fixed_prices WHERE id = ?", (price_id,)
                )
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("fixed_price_deleted", price_id=price_id)
        return deleted

    @staticmethod
    def _row_to_price(row: aiosqlite.Row) -> FixedPrice:
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

        return FixedPrice(
            id=row["id"],
            kind=ItemKind(row["kind"]),
            category=row["category"],
            item_name=row["item_name"],
            price=row["price"],
            is_active=bool(row["is_active"]),
            created_at=created_at,
            updated_at=updated_at,
        )
