"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field

from stockroom.core.entities.activity import Activity
from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.purchase_order import PurchaseOrder
from stockroom.core.entities.report import SavedReport
from stockroom.core.entities.stock_item import StockItem
from stockroom.core.entities.work_order import WorkOrder


class ProviderHealthResponse(BaseModel):
    """Health status of a backing service."""

    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. ITEM_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)


# --- Stock items ---


class StockItemResponse(BaseModel):
    """Stock item response DTO."""

    id: int
    kind: str
    name: str
    description: str | None = None
    category: str
    sku: str | None = None
    quantity: int
    reorder_level: int
    unit_cost: float
    unit: str | None = None
    supplier: str | None = None
    status: str
    total_value: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, item: StockItem) -> "StockItemResponse":
        return cls(
            id=item.id or 0,
            kind=item.kind.value,
            name=item.name,
            description=item.description,
            category=item.category,
            sku=item.sku,
            quantity=item.quantity,
            reorder_level=item.reorder_level,
            unit_cost=item.unit_cost,
            unit=item.unit,
            supplier=item.supplier,
            status=item.status.value,
            total_value=round(item.total_value, 2),
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


class StockItemListResponse(BaseModel):
    items: list[StockItemResponse]
    total: int


# --- Work orders ---


class WorkOrderMaterialResponse(BaseModel):
    material_id: int
    quantity: int


class WorkOrderResponse(BaseModel):
    """Work order response DTO."""

    id: int
    product_id: int
    product_name: str
    quantity: int
    status: str
    materials: list[WorkOrderMaterialResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
    completed_at: datetime | None = None

    @classmethod
    def from_entity(cls, order: WorkOrder) -> "WorkOrderResponse":
        return cls(
            id=order.id or 0,
            product_id=order.product_id,
            product_name=order.product_name,
            quantity=order.quantity,
            status=order.status.value,
            materials=[
                WorkOrderMaterialResponse(material_id=m.material_id, quantity=m.quantity)
                for m in order.materials
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
            completed_at=order.completed_at,
        )


class WorkOrderListResponse(BaseModel):
    orders: list[WorkOrderResponse]
    total: int


# --- Purchase orders ---


class PurchaseOrderItemResponse(BaseModel):
    id: int | None = None
    material_id: int
    material_name: str
    quantity: int
    unit_price: float
    total_price: float


class PurchaseOrderResponse(BaseModel):
    """Purchase order response DTO."""

    id: int
    po_number: str
    supplier: str
    status: str
    order_date: date
    expected_delivery_date: date | None = None
    subtotal: float
    tax_rate: float
    tax_amount: float
    shipping_cost: float
    discount_rate: float
    discount_amount: float
    total_amount: float
    notes: str | None = None
    created_by: str | None = None
    items: list[PurchaseOrderItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, order: PurchaseOrder) -> "PurchaseOrderResponse":
        return cls(
            id=order.id or 0,
            po_number=order.po_number,
            supplier=order.supplier,
            status=order.status.value,
            order_date=order.order_date,
            expected_delivery_date=order.expected_delivery_date,
            subtotal=order.subtotal,
            tax_rate=order.tax_rate,
            tax_amount=order.tax_amount,
            shipping_cost=order.shipping_cost,
            discount_rate=order.discount_rate,
            discount_amount=order.discount_amount,
            total_amount=order.total_amount,
            notes=order.notes,
            created_by=order.created_by,
            items=[
                PurchaseOrderItemResponse(
                    id=i.id,
                    material_id=i.material_id,
                    material_name=i.material_name,
                    quantity=i.quantity,
                    unit_price=i.unit_price,
                    total_price=i.total_price,
                )
                for i in order.items
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class PurchaseOrderListResponse(BaseModel):
    orders: list[PurchaseOrderResponse]
    total: int


class GeneratePurchaseOrdersResponse(BaseModel):
    """Result of low-stock purchase order generation."""

    created: list[PurchaseOrderResponse] = Field(default_factory=list)
    skipped_suppliers: list[str] = Field(
        default_factory=list,
        description="Suppliers skipped because they already have a pending order",
    )
    message: str


# --- Reports ---


class LowStockEntryResponse(BaseModel):
    """An item at or below its reorder level."""

    id: int
    kind: str
    name: str
    sku: str | None = None
    quantity: int
    reorder_level: int
    status: str
    reorder_needed: int
    supplier: str | None = None


class LowStockReportResponse(BaseModel):
    products: list[LowStockEntryResponse]
    raw_materials: list[LowStockEntryResponse]
    total: int


class KindSummaryResponse(BaseModel):
    """Totals for one item kind."""

    kind: str
    item_count: int
    total_quantity: int
    total_value: float
    in_stock: int
    low_stock: int
    out_of_stock: int


class InventorySummaryResponse(BaseModel):
    products: KindSummaryResponse
    raw_materials: KindSummaryResponse
    total_value: float


# --- Fixed prices ---


class FixedPriceResponse(BaseModel):
    id: int
    kind: str
    category: str
    item_name: str
    price: float
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, price: FixedPrice) -> "FixedPriceResponse":
        return cls(
            id=price.id or 0,
            kind=price.kind.value,
            category=price.category,
            item_name=price.item_name,
            price=price.price,
            is_active=price.is_active,
            created_at=price.created_at,
            updated_at=price.updated_at,
        )


class FixedPriceListResponse(BaseModel):
    prices: list[FixedPriceResponse]
    total: int


# --- Saved reports ---


class SavedReportResponse(BaseModel):
    """Saved report response DTO."""

    id: int
    title: str
    report_type: str
    content: dict[str, Any]
    generated_by: str | None = None
    date_range_start: date | None = None
    date_range_end: date | None = None
    created_at: datetime

    @classmethod
    def from_entity(cls, report: SavedReport) -> "SavedReportResponse":
        return cls(
            id=report.id or 0,
            title=report.title,
            report_type=report.report_type.value,
            content=report.content,
            generated_by=report.generated_by,
            date_range_start=report.date_range_start,
            date_range_end=report.date_range_end,
            created_at=report.created_at,
        )


class SavedReportListResponse(BaseModel):
    reports: list[SavedReportResponse]
    total: int


# --- Activity feed ---


class ActivityResponse(BaseModel):
    id: int
    actor: str | None = None
    action: str
    description: str
    created_at: datetime

    @classmethod
    def from_entity(cls, activity: Activity) -> "ActivityResponse":
        return cls(
            id=activity.id or 0,
            actor=activity.actor,
            action=activity.action,
            description=activity.description,
            created_at=activity.created_at,
        )


class ActivityListResponse(BaseModel):
    activities: list[ActivityResponse]
    total: int
