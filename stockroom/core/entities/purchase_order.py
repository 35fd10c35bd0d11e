"""Purchase order domain entities."""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, model_validator


class PurchaseOrderStatus(str, Enum):
    """Lifecycle states of a purchase order."""

    PENDING = "pending"
    APPROVED = "approved"
    SENT = "sent"
    RECEIVED = "received"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.CANCELLED)


PURCHASE_ORDER_TRANSITIONS: dict[PurchaseOrderStatus, frozenset[PurchaseOrderStatus]] = {
    PurchaseOrderStatus.PENDING: frozenset(
        {PurchaseOrderStatus.APPROVED, PurchaseOrderStatus.CANCELLED}
    ),
    PurchaseOrderStatus.APPROVED: frozenset(
        {PurchaseOrderStatus.SENT, PurchaseOrderStatus.CANCELLED}
    ),
    PurchaseOrderStatus.SENT: frozenset(
        {PurchaseOrderStatus.RECEIVED, PurchaseOrderStatus.CANCELLED}
    ),
    PurchaseOrderStatus.RECEIVED: frozenset(),
    PurchaseOrderStatus.CANCELLED: frozenset(),
}


class PurchaseOrderItem(BaseModel):
    """A single raw-material line on a purchase order."""

    id: int | None = None
    po_id: int | None = None
    material_id: int  # FK → stock_items.id (raw material)
    material_name: str
    quantity: int = Field(..., gt=0)
    unit_price: float = Field(default=0.0, ge=0)
    total_price: float = 0.0  # quantity * unit_price

    @model_validator(mode="after")
    def compute_line(self) -> "PurchaseOrderItem":
        """Compute total_price from quantity and unit_price."""
        self.total_price = round(self.quantity * self.unit_price, 2)
        return self


class PurchaseOrder(BaseModel):
    """A replenishment order sent to one supplier."""

    id: int | None = None
    po_number: str
    supplier: str
    status: PurchaseOrderStatus = PurchaseOrderStatus.PENDING
    order_date: date = Field(default_factory=date.today)
    expected_delivery_date: date | None = None
    subtotal: float = 0.0
    tax_rate: float = 0.10
    tax_amount: float = 0.0
    shipping_cost: float = 75.0
    discount_rate: float = 0.0
    discount_amount: float = 0.0
    total_amount: float = 0.0
    notes: str | None = None
    created_by: str | None = None
    items: list[PurchaseOrderItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def compute_totals(self) -> "PurchaseOrder":
        """Compute subtotal, tax, discount and total from items and rates."""
        if self.items:
            self.subtotal = round(sum(i.total_price for i in self.items), 2)
        self.tax_amount = round(self.subtotal * self.tax_rate, 2)
        self.discount_amount = round(self.subtotal * self.discount_rate, 2)
        self.total_amount = round(
            self.subtotal + self.tax_amount + self.shipping_cost - self.discount_amount,
            2,
        )
        return self

    def can_transition_to(self, status: PurchaseOrderStatus) -> bool:
        return status in PURCHASE_ORDER_TRANSITIONS[self.status]
