"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, model_validator

from stockroom.core.entities.purchase_order import PurchaseOrderStatus
from stockroom.core.entities.report import ReportType
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.entities.work_order import WorkOrderStatus

# --- Stock items ---


class CreateStockItemRequest(BaseModel):
    """Request to add a product or raw material."""

    kind: ItemKind = Field(..., description="product or raw_material")
    name: str = Field(..., min_length=1, description="Display name")
    description: str | None = Field(default=None, description="Free-text description")
    category: str = Field(default="General", description="Category", examples=["Fabric"])
    sku: str | None = Field(
        default=None,
        description="Explicit SKU; assigned from the kind's sequence when omitted",
        examples=["PRD-0001", "RAW-0001"],
    )
    quantity: int = Field(default=0, ge=0, description="Opening quantity")
    reorder_level: int | None = Field(
        default=None, ge=0, description="Reorder threshold (defaults from settings)"
    )
    unit_cost: float = Field(
        default=0.0, ge=0, description="Price (products) or cost per unit (materials)"
    )
    unit: str | None = Field(default=None, description="Unit of measure")
    supplier: str | None = Field(default=None, description="Supplier name")


class UpdateStockItemRequest(BaseModel):
    """Partial update of descriptive fields. Quantity changes go through adjust."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    reorder_level: int | None = Field(default=None, ge=0)
    unit_cost: float | None = Field(default=None, ge=0)
    unit: str | None = None
    supplier: str | None = None


class AdjustStockRequest(BaseModel):
    """Signed stock adjustment."""

    delta: int = Field(
        ...,
        description="Units to add (positive) or remove (negative)",
        examples=[5, -3],
    )
    reason: str | None = Field(default=None, description="Why the stock changed")


# --- Work orders ---


class WorkOrderMaterialRequest(BaseModel):
    """Raw material consumed by a work order."""

    material_id: int = Field(..., description="Raw material item ID")
    quantity: int = Field(..., gt=0, description="Units consumed")


class CreateWorkOrderRequest(BaseModel):
    """Request to start producing a product."""

    product_id: int = Field(..., description="Product item ID")
    quantity: int = Field(..., gt=0, description="Units to produce")
    materials: list[WorkOrderMaterialRequest] = Field(
        default_factory=list, description="Materials deducted on creation"
    )


class UpdateWorkOrderStatusRequest(BaseModel):
    """Move a work order to a new status."""

    status: WorkOrderStatus = Field(..., description="Target status")


# --- Purchase orders ---


class PurchaseOrderItemRequest(BaseModel):
    """Line item on a purchase order."""

    material_id: int = Field(..., description="Raw material item ID")
    quantity: int = Field(..., gt=0, description="Units to order")
    unit_price: float | None = Field(
        default=None, ge=0, description=(
            "Unit price (defaults to the active fixed price, then the material's unit cost)"
        ),
    )


class CreatePurchaseOrderRequest(BaseModel):
    """Request to raise a purchase order."""

    supplier: str = Field(..., min_length=1, description="Supplier name")
    items: list[PurchaseOrderItemRequest] = Field(..., min_length=1)
    expected_delivery_date: date | None = Field(default=None)
    notes: str | None = Field(default=None)


class UpdatePurchaseOrderRequest(BaseModel):
    """Status transition and/or edits to notes and delivery date."""

    status: PurchaseOrderStatus | None = Field(default=None, description="Target status")
    notes: str | None = None
    expected_delivery_date: date | None = None


# --- Fixed prices ---


class CreateFixedPriceRequest(BaseModel):
    """Add a price to the fixed price catalog."""

    kind: ItemKind = Field(..., description="product or raw_material")
    category: str = Field(..., min_length=1, examples=["Fabric"])
    item_name: str = Field(..., min_length=1, description="Item name the price applies to")
    price: float = Field(..., ge=0, description="Agreed unit price")
    is_active: bool = Field(default=True)


class UpdateFixedPriceRequest(BaseModel):
    """Partial update of a catalog entry."""

    category: str | None = Field(default=None, min_length=1)
    item_name: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    is_active: bool | None = None


# --- Saved reports ---


class SaveReportRequest(BaseModel):
    """Keep a report for later viewing."""

    title: str = Field(..., min_length=1, examples=["October low stock"])
    report_type: ReportType = Field(
        ..., description="inventory-summary, low-stock or stock-movement"
    )
    content: dict[str, Any] | None = Field(
        default=None,
        description=(
            "Report body. When omitted, the current inventory-summary or "
            "low-stock report is captured."
        ),
    )
    date_range_start: date | None = None
    date_range_end: date | None = None

    @model_validator(mode="after")
    def check_date_range(self) -> "SaveReportRequest":
        if (
            self.date_range_start
            and self.date_range_end
            and self.date_range_start > self.date_range_end
        ):
            raise ValueError("date_range_start must not be after date_range_end")
        return self
