"""Data transfer objects for the API contract."""

from stockroom.application.dto.requests import (
    AdjustStockRequest,
    CreatePurchaseOrderRequest,
    CreateStockItemRequest,
    CreateWorkOrderRequest,
    PurchaseOrderItemRequest,
    UpdatePurchaseOrderRequest,
    UpdateStockItemRequest,
    UpdateWorkOrderStatusRequest,
    WorkOrderMaterialRequest,
)
from stockroom.application.dto.responses import (
    ActivityListResponse,
    ActivityResponse,
    ErrorResponse,
    GeneratePurchaseOrdersResponse,
    HealthResponse,
    InventorySummaryResponse,
    KindSummaryResponse,
    LowStockEntryResponse,
    LowStockReportResponse,
    ProviderHealthResponse,
    PurchaseOrderItemResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
    StockItemListResponse,
    StockItemResponse,
    WorkOrderListResponse,
    WorkOrderMaterialResponse,
    WorkOrderResponse,
)

__all__ = [
    # Requests
    "AdjustStockRequest",
    "CreatePurchaseOrderRequest",
    "CreateStockItemRequest",
    "CreateWorkOrderRequest",
    "PurchaseOrderItemRequest",
    "UpdatePurchaseOrderRequest",
    "UpdateStockItemRequest",
    "UpdateWorkOrderStatusRequest",
    "WorkOrderMaterialRequest",
    # Responses
    "ActivityListResponse",
    "ActivityResponse",
    "ErrorResponse",
    "GeneratePurchaseOrdersResponse",
    "HealthResponse",
    "InventorySummaryResponse",
    "KindSummaryResponse",
    "LowStockEntryResponse",
    "LowStockReportResponse",
    "ProviderHealthResponse",
    "PurchaseOrderItemResponse",
    "PurchaseOrderListResponse",
    "PurchaseOrderResponse",
    "StockItemListResponse",
    "StockItemResponse",
    "WorkOrderListResponse",
    "WorkOrderMaterialResponse",
    "WorkOrderResponse",
]
