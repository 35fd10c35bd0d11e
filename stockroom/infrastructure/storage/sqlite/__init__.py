"""SQLite storage implementations."""

from stockroom.infrastructure.storage.sqlite.activity_store import SQLiteActivityLog
from stockroom.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from stockroom.infrastructure.storage.sqlite.fixed_price_store import SQLiteFixedPriceStore
from stockroom.infrastructure.storage.sqlite.item_store import SQLiteItemStore
from stockroom.infrastructure.storage.sqlite.purchase_order_store import (
    SQLitePurchaseOrderStore,
)
from stockroom.infrastructure.storage.sqlite.report_store import SQLiteReportStore
from stockroom.infrastructure.storage.sqlite.work_order_store import SQLiteWorkOrderStore

# Singleton instances
_item_store: SQLiteItemStore | None = None
_work_order_store: SQLiteWorkOrderStore | None = None
_purchase_order_store: SQLitePurchaseOrderStore | None = None
_activity_log: SQLiteActivityLog | None = None
_fixed_price_store: SQLiteFixedPriceStore | None = None
_report_store: SQLiteReportStore | None = None


async def get_item_store() -> SQLiteItemStore:
    """Get singleton stock item store instance."""
    global _item_store
    if _item_store is None:
        _item_store = SQLiteItemStore()
    return _item_store


async def get_work_order_store() -> SQLiteWorkOrderStore:
    """Get singleton work order store instance."""
    global _work_order_store
    if _work_order_store is None:
        _work_order_store = SQLiteWorkOrderStore()
    return _work_order_store


async def get_purchase_order_store() -> SQLitePurchaseOrderStore:
    """Get singleton purchase order store instance."""
    global _purchase_order_store
    if _purchase_order_store is None:
        _purchase_order_store = SQLitePurchaseOrderStore()
    return _purchase_order_store


async def get_activity_log() -> SQLiteActivityLog:
    """Get singleton activity log instance."""
    global _activity_log
    if _activity_log is None:
        _activity_log = SQLiteActivityLog()
    return _activity_log


async def get_fixed_price_store() -> SQLiteFixedPriceStore:
    """Get singleton fixed price store instance."""
    global _fixed_price_store
    if _fixed_price_store is None:
        _fixed_price_store = SQLiteFixedPriceStore()
    return _fixed_price_store


async def get_report_store() -> SQLiteReportStore:
    """Get singleton saved report store instance."""
    global _report_store
    if _report_store is None:
        _report_store = SQLiteReportStore()
    return _report_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteActivityLog",
    "SQLiteFixedPriceStore",
    "SQLiteItemStore",
    "SQLitePurchaseOrderStore",
    "SQLiteReportStore",
    "SQLiteWorkOrderStore",
    # Factory functions
    "get_activity_log",
    "get_fixed_price_store",
    "get_item_store",
    "get_purchase_order_store",
    "get_report_store",
    "get_work_order_store",
]
