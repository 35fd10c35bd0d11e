"""Core interfaces (ports) for dependency injection."""

from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.fixed_price_store import IFixedPriceStore
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.interfaces.purchase_order_store import IPurchaseOrderStore
from stockroom.core.interfaces.report_store import IReportStore
from stockroom.core.interfaces.work_order_store import IWorkOrderStore

__all__ = [
    "IActivityLog",
    "IFixedPriceStore",
    "IItemStore",
    "IPurchaseOrderStore",
    "IReportStore",
    "IWorkOrderStore",
]
