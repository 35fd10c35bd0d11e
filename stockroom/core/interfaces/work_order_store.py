"""Abstract interface for work order storage."""

from abc import ABC, abstractmethod

from stockroom.core.entities.work_order import WorkOrder, WorkOrderStatus


class IWorkOrderStore(ABC):
    """Interface for active and historical work orders."""

    @abstractmethod
    async def create_order(self, order: WorkOrder) -> WorkOrder:
        """Persist a new active order with its material lines."""
        pass

    @abstractmethod
    async def get_active(self, order_id: int) -> WorkOrder | None:
        """Get an active (pending / in-progress) order."""
        pass

    @abstractmethod
    async def get_order(self, order_id: int) -> WorkOrder | None:
        """Get an order from the active set or, failing that, from history."""
        pass

    @abstractmethod
    async def list_active(self, limit: int = 100, offset: int = 0) -> list[WorkOrder]:
        """List active orders, newest first."""
        pass

    @abstractmethod
    async def list_history(self, limit: int = 100, offset: int = 0) -> list[WorkOrder]:
        """List completed and cancelled orders, most recently closed first."""
        pass

    @abstractmethod
    async def update_status(self, order_id: int, status: WorkOrderStatus) -> WorkOrder | None:
        """Change the status of an active order in place."""
        pass

    @abstractmethod
    async def move_to_history(self, order: WorkOrder) -> WorkOrder:
        """Remove the order from the active set and add it to history atomically."""
        pass

    @abstractmethod
    async def delete_active(self, order_id: int) -> bool:
        """Delete an active order. Returns False if it was not active."""
        pass
