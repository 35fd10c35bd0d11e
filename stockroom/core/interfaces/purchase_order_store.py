"""Abstract interface for purchase order storage."""

from abc import ABC, abstractmethod

from stockroom.core.entities.purchase_order import PurchaseOrder, PurchaseOrderStatus


class IPurchaseOrderStore(ABC):
    """Interface for purchase order and line item persistence."""

    @abstractmethod
    async def create_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Create header and items together.

        Raises UniquenessConflictError on a duplicate PO number.
        """
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> PurchaseOrder | None:
        """Get purchase order by ID with items."""
        pass

    @abstractmethod
    async def list_orders(
        self,
        status: PurchaseOrderStatus | None = None,
        supplier: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[PurchaseOrder]:
        """List purchase orders, newest first."""
        pass

    @abstractmethod
    async def list_po_numbers(self, prefix: str) -> list[str]:
        """List existing PO numbers that start with ``prefix-``."""
        pass

    @abstractmethod
    async def update_order(self, order: PurchaseOrder) -> PurchaseOrder:
        """Update status, notes and delivery date. The PO number is never rewritten."""
        pass

    @abstractmethod
    async def delete_order(self, order_id: int) -> bool:
        """Delete an order and its items."""
        pass

    @abstractmethod
    async def has_pending_for_supplier(self, supplier: str) -> bool:
        """True if the supplier already has a pending purchase order."""
        pass
