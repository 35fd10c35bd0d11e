"""Abstract interface for the fixed price catalog."""

from abc import ABC, abstractmethod

from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.stock_item import ItemKind


class IFixedPriceStore(ABC):
    """Interface for fixed price persistence."""

    @abstractmethod
    async def create_price(self, price: FixedPrice) -> FixedPrice:
        """Create a catalog entry.

        Raises UniquenessConflictError when the kind, category and item
        name already have a price.
        """
        pass

    @abstractmethod
    async def get_price(self, price_id: int) -> FixedPrice | None:
        pass

    @abstractmethod
    async def list_prices(
        self,
        kind: ItemKind | None = None,
        category: str | None = None,
        active_only: bool = True,
    ) -> list[FixedPrice]:
        """List prices ordered by item name."""
        pass

    @abstractmethod
    async def find_price(
        self, kind: ItemKind, category: str, item_name: str
    ) -> FixedPrice | None:
        """The active price for an exact kind, category and item name."""
        pass

    @abstractmethod
    async def update_price(self, price: FixedPrice) -> FixedPrice:
        """Raises FixedPriceNotFoundError or UniquenessConflictError."""
        pass

    @abstractmethod
    async def delete_price(self, price_id: int) -> bool:
        pass
