"""
Dependency injection container for FastAPI.

Provides use case instances and the acting user to route handlers.
"""

from fastapi import Header

from stockroom.application.use_cases import (
    AdjustStockUseCase,
    CancelWorkOrderUseCase,
    CompleteWorkOrderUseCase,
    CreateFixedPriceUseCase,
    CreatePurchaseOrderUseCase,
    CreateStockItemUseCase,
    CreateWorkOrderUseCase,
    DeleteFixedPriceUseCase,
    DeletePurchaseOrderUseCase,
    DeleteSavedReportUseCase,
    DeleteStockItemUseCase,
    DeleteWorkOrderUseCase,
    GenerateLowStockPurchaseOrdersUseCase,
    GetFixedPriceUseCase,
    GetPurchaseOrderUseCase,
    GetSavedReportUseCase,
    GetStockItemUseCase,
    GetWorkOrderUseCase,
    InventorySummaryUseCase,
    ListActivitiesUseCase,
    ListFixedPricesUseCase,
    ListPurchaseOrdersUseCase,
    ListSavedReportsUseCase,
    ListStockItemsUseCase,
    ListWorkOrdersUseCase,
    LowStockReportUseCase,
    SaveReportUseCase,
    UpdateFixedPriceUseCase,
    UpdatePurchaseOrderUseCase,
    UpdateStockItemUseCase,
    UpdateWorkOrderStatusUseCase,
)
from stockroom.core.entities.activity import Actor, Role
from stockroom.core.exceptions import ValidationError


def get_actor(
    x_user: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Actor:
    """Acting user from the X-User / X-User-Role headers (default system/staff)."""
    role = Role.STAFF
    if x_user_role:
        try:
            role = Role(x_user_role.strip().lower())
        except ValueError:
            raise ValidationError("X-User-Role", "unknown role", x_user_role) from None
    return Actor(username=x_user or "system", role=role)


# Item use case dependencies
def get_create_item_use_case() -> CreateStockItemUseCase:
    return CreateStockItemUseCase()


def get_get_item_use_case() -> GetStockItemUseCase:
    return GetStockItemUseCase()


def get_list_items_use_case() -> ListStockItemsUseCase:
    return ListStockItemsUseCase()


def get_update_item_use_case() -> UpdateStockItemUseCase:
    return UpdateStockItemUseCase()


def get_delete_item_use_case() -> DeleteStockItemUseCase:
    return DeleteStockItemUseCase()


def get_adjust_stock_use_case() -> AdjustStockUseCase:
    """Get adjust stock use case."""
    return AdjustStockUseCase()


# Work order use case dependencies
def get_create_work_order_use_case() -> CreateWorkOrderUseCase:
    """Get create work order use case."""
    return CreateWorkOrderUseCase()


def get_complete_work_order_use_case() -> CompleteWorkOrderUseCase:
    """Get complete work order use case."""
    return CompleteWorkOrderUseCase()


def get_cancel_work_order_use_case() -> CancelWorkOrderUseCase:
    return CancelWorkOrderUseCase()


def get_update_work_order_status_use_case() -> UpdateWorkOrderStatusUseCase:
    return UpdateWorkOrderStatusUseCase()


def get_delete_work_order_use_case() -> DeleteWorkOrderUseCase:
    return DeleteWorkOrderUseCase()


def get_get_work_order_use_case() -> GetWorkOrderUseCase:
    return GetWorkOrderUseCase()


def get_list_work_orders_use_case() -> ListWorkOrdersUseCase:
    return ListWorkOrdersUseCase()


# Purchase order use case dependencies
def get_create_purchase_order_use_case() -> CreatePurchaseOrderUseCase:
    return CreatePurchaseOrderUseCase()


def get_update_purchase_order_use_case() -> UpdatePurchaseOrderUseCase:
    return UpdatePurchaseOrderUseCase()


def get_delete_purchase_order_use_case() -> DeletePurchaseOrderUseCase:
    return DeletePurchaseOrderUseCase()


def get_get_purchase_order_use_case() -> GetPurchaseOrderUseCase:
    return GetPurchaseOrderUseCase()


def get_list_purchase_orders_use_case() -> ListPurchaseOrdersUseCase:
    return ListPurchaseOrdersUseCase()


def get_generate_purchase_orders_use_case() -> GenerateLowStockPurchaseOrdersUseCase:
    """Get low-stock purchase order generation use case."""
    return GenerateLowStockPurchaseOrdersUseCase()


# Fixed price catalog dependencies
def get_create_fixed_price_use_case() -> CreateFixedPriceUseCase:
    return CreateFixedPriceUseCase()


def get_get_fixed_price_use_case() -> GetFixedPriceUseCase:
    return GetFixedPriceUseCase()


def get_list_fixed_prices_use_case() -> ListFixedPricesUseCase:
    return ListFixedPricesUseCase()


def get_update_fixed_price_use_case() -> UpdateFixedPriceUseCase:
    return UpdateFixedPriceUseCase()


def get_delete_fixed_price_use_case() -> DeleteFixedPriceUseCase:
    return DeleteFixedPriceUseCase()


# Report and feed dependencies
def get_low_stock_report_use_case() -> LowStockReportUseCase:
    return LowStockReportUseCase()


def get_inventory_summary_use_case() -> InventorySummaryUseCase:
    return InventorySummaryUseCase()


def get_list_activities_use_case() -> ListActivitiesUseCase:
    return ListActivitiesUseCase()


def get_save_report_use_case() -> SaveReportUseCase:
    """Get saved report creation use case."""
    return SaveReportUseCase()


def get_list_saved_reports_use_case() -> ListSavedReportsUseCase:
    return ListSavedReportsUseCase()


def get_get_saved_report_use_case() -> GetSavedReportUseCase:
    return GetSavedReportUseCase()


def get_delete_saved_report_use_case() -> DeleteSavedReportUseCase:
    return DeleteSavedReportUseCase()
