"""Core domain entities."""

from stockroom.core.entities.activity import SYSTEM_ACTOR, Activity, Actor, Role
from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.purchase_order import (
    PURCHASE_ORDER_TRANSITIONS,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
)
from stockroom.core.entities.report import ReportType, SavedReport
from stockroom.core.entities.stock_item import ItemKind, StockItem, StockStatus
from stockroom.core.entities.work_order import (
    WorkOrder,
    WorkOrderMaterial,
    WorkOrderStatus,
)

__all__ = [
    # Stock items
    "ItemKind",
    "StockItem",
    "StockStatus",
    # Work orders
    "WorkOrder",
    "WorkOrderMaterial",
    "WorkOrderStatus",
    # Purchase orders
    "PurchaseOrder",
    "PurchaseOrderItem",
    "PurchaseOrderStatus",
    "PURCHASE_ORDER_TRANSITIONS",
    # Catalog and reports
    "FixedPrice",
    "ReportType",
    "SavedReport",
    # Activity
    "Activity",
    "Actor",
    "Role",
    "SYSTEM_ACTOR",
]
