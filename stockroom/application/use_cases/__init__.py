"""Use cases: one class per application operation."""

from stockroom.application.use_cases.activity import ListActivitiesUseCase, record_activity
from stockroom.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from stockroom.application.use_cases.create_work_order import (
    CreateWorkOrderResult,
    CreateWorkOrderUseCase,
)
from stockroom.application.use_cases.fixed_prices import (
    CreateFixedPriceUseCase,
    DeleteFixedPriceUseCase,
    FixedPriceResult,
    GetFixedPriceUseCase,
    ListFixedPricesUseCase,
    UpdateFixedPriceUseCase,
)
from stockroom.application.use_cases.generate_purchase_orders import (
    GenerateLowStockPurchaseOrdersUseCase,
    GeneratePurchaseOrdersResult,
)
from stockroom.application.use_cases.purchase_orders import (
    CreatePurchaseOrderUseCase,
    DeletePurchaseOrderUseCase,
    GetPurchaseOrderUseCase,
    ListPurchaseOrdersUseCase,
    PurchaseOrderResult,
    UpdatePurchaseOrderUseCase,
)
from stockroom.application.use_cases.reports import (
    InventorySummaryUseCase,
    LowStockReportUseCase,
)
from stockroom.application.use_cases.saved_reports import (
    DeleteSavedReportUseCase,
    GetSavedReportUseCase,
    ListSavedReportsUseCase,
    SavedReportResult,
    SaveReportUseCase,
)
from stockroom.application.use_cases.stock_items import (
    CreateStockItemUseCase,
    DeleteStockItemUseCase,
    GetStockItemUseCase,
    ListStockItemsUseCase,
    StockItemResult,
    UpdateStockItemUseCase,
)
from stockroom.application.use_cases.work_orders import (
    CancelWorkOrderUseCase,
    CompleteWorkOrderUseCase,
    DeleteWorkOrderUseCase,
    GetWorkOrderUseCase,
    ListWorkOrdersUseCase,
    UpdateWorkOrderStatusUseCase,
    WorkOrderResult,
)

__all__ = [
    # Stock ledger
    "AdjustStockUseCase",
    "AdjustStockResult",
    # Items
    "CreateStockItemUseCase",
    "DeleteStockItemUseCase",
    "GetStockItemUseCase",
    "ListStockItemsUseCase",
    "StockItemResult",
    "UpdateStockItemUseCase",
    # Work orders
    "CancelWorkOrderUseCase",
    "CompleteWorkOrderUseCase",
    "CreateWorkOrderResult",
    "CreateWorkOrderUseCase",
    "DeleteWorkOrderUseCase",
    "GetWorkOrderUseCase",
    "ListWorkOrdersUseCase",
    "UpdateWorkOrderStatusUseCase",
    "WorkOrderResult",
    # Purchase orders
    "CreatePurchaseOrderUseCase",
    "DeletePurchaseOrderUseCase",
    "GenerateLowStockPurchaseOrdersUseCase",
    "GeneratePurchaseOrdersResult",
    "GetPurchaseOrderUseCase",
    "ListPurchaseOrdersUseCase",
    "PurchaseOrderResult",
    "UpdatePurchaseOrderUseCase",
    # Fixed prices
    "CreateFixedPriceUseCase",
    "DeleteFixedPriceUseCase",
    "FixedPriceResult",
    "GetFixedPriceUseCase",
    "ListFixedPricesUseCase",
    "UpdateFixedPriceUseCase",
    # Reports and feed
    "InventorySummaryUseCase",
    "ListActivitiesUseCase",
    "LowStockReportUseCase",
    "DeleteSavedReportUseCase",
    "GetSavedReportUseCase",
    "ListSavedReportsUseCase",
    "SavedReportResult",
    "SaveReportUseCase",
    "record_activity",
]
