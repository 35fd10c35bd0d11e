"""Work order (production) domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class WorkOrderStatus(str, Enum):
    """Lifecycle states of a work order."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (WorkOrderStatus.COMPLETED, WorkOrderStatus.CANCELLED)


class WorkOrderMaterial(BaseModel):
    """Raw material consumed by a work order."""

    material_id: int  # FK → stock_items.id (raw material)
    quantity: int = Field(..., gt=0)


class WorkOrder(BaseModel):
    """Order to produce a quantity of a finished product from raw materials.

    Active orders (pending / in-progress) and closed orders (completed /
    cancelled) live in separate tables; an order is in exactly one of them.
    """

    id: int | None = None
    product_id: int  # FK → stock_items.id (product)
    product_name: str
    quantity: int = Field(..., gt=0)
    materials: list[WorkOrderMaterial] = Field(default_factory=list)
    status: WorkOrderStatus = WorkOrderStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return not self.status.is_terminal
