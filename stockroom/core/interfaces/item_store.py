"""Abstract interface for stock item storage."""

from abc import ABC, abstractmethod

from stockroom.core.entities.stock_item import ItemKind, StockItem, StockStatus


class IItemStore(ABC):
    """Interface for product and raw-material persistence."""

    @abstractmethod
    async def create_item(self, item: StockItem) -> StockItem:
        """Create a new item. Raises UniquenessConflictError on a duplicate SKU."""
        pass

    @abstractmethod
    async def get_item(self, item_id: int) -> StockItem | None:
        """Get item by ID."""
        pass

    @abstractmethod
    async def update_item(self, item: StockItem) -> StockItem:
        """Update descriptive fields and reorder level.

        Quantity is never written here; use adjust_quantity.
        """
        pass

    @abstractmethod
    async def delete_item(self, item_id: int) -> bool:
        """Delete an item. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def list_items(
        self,
        kind: ItemKind | None = None,
        status: StockStatus | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StockItem]:
        """List items, optionally filtered by kind and status."""
        pass

    @abstractmethod
    async def list_skus(self, kind: ItemKind, prefix: str) -> list[str]:
        """List existing SKUs of a kind that start with ``prefix-``."""
        pass

    @abstractmethod
    async def adjust_quantity(self, item_id: int, delta: int) -> StockItem:
        """Atomically add ``delta`` to an item's quantity.

        The read-modify-write is serialized per row. Quantity and the
        re-classified status are written together. Raises ItemNotFoundError
        if the item is missing and InsufficientStockError (without writing)
        if the result would be negative.
        """
        pass
