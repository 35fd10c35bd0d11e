"""
Domain exceptions for the Stockroom application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class StockroomError(Exception):
    """Base exception for all Stockroom errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Storage Exceptions
class StorageError(StockroomError):
    """Base exception for storage operations."""

    pass


class NotFoundError(StorageError):
    """Referenced record does not exist."""

    pass


class ItemNotFoundError(NotFoundError):
    """Stock item not found in storage."""

    def __init__(self, item_id: int | str):
        super().__init__(
            f"Stock item not found: {item_id}",
            code="ITEM_NOT_FOUND",
            details={"item_id": item_id},
        )


class WorkOrderNotFoundError(NotFoundError):
    """Active work order not found."""

    def __init__(self, order_id: int, reason: str | None = None):
        super().__init__(
            f"Work order not found: {order_id}" + (f" ({reason})" if reason else ""),
            code="WORK_ORDER_NOT_FOUND",
            details={"order_id": order_id, "reason": reason},
        )


class PurchaseOrderNotFoundError(NotFoundError):
    """Purchase order not found."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Purchase order not found: {order_id}",
            code="PURCHASE_ORDER_NOT_FOUND",
            details={"order_id": order_id},
        )


class FixedPriceNotFoundError(NotFoundError):
    """Fixed price catalog entry not found."""

    def __init__(self, price_id: int):
        super().__init__(
            f"Fixed price not found: {price_id}",
            code="FIXED_PRICE_NOT_FOUND",
            details={"price_id": price_id},
        )


class ReportNotFoundError(NotFoundError):
    """Saved report not found."""

    def __init__(self, report_id: int):
        super().__init__(
            f"Report not found: {report_id}",
            code="REPORT_NOT_FOUND",
            details={"report_id": report_id},
        )


class UniquenessConflictError(StorageError):
    """A unique column (SKU, PO number, fixed price key) already holds the value."""

    def __init__(self, field: str, value: str):
        super().__init__(
            f"Duplicate {field}: {value}",
            code="UNIQUENESS_CONFLICT",
            details={"field": field, "value": value},
        )


class StoreUnavailableError(StorageError):
    """Database operation failed for infrastructure reasons."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Store unavailable during {operation}: {error}",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "error": error},
        )


# Inventory Exceptions
class InventoryError(StockroomError):
    """Base exception for stock rule violations."""

    pass


class InsufficientStockError(InventoryError):
    """Adjustment would drive an item's quantity below zero."""

    def __init__(
        self,
        item_id: int,
        requested: int,
        available: int,
        name: str | None = None,
    ):
        label = name or f"item {item_id}"
        super().__init__(
            f"Insufficient stock for {label}. Available: {available}, Required: {requested}",
            code="INSUFFICIENT_STOCK",
            details={
                "item_id": item_id,
                "requested": requested,
                "available": available,
            },
        )


class InvalidStatusTransitionError(InventoryError):
    """Order cannot move from its current status to the requested one."""

    def __init__(self, entity: str, current: str, requested: str):
        super().__init__(
            f"Cannot move {entity} from '{current}' to '{requested}'",
            code="INVALID_STATUS_TRANSITION",
            details={"entity": entity, "current": current, "requested": requested},
        )


# Access Exceptions
class PermissionDeniedError(StockroomError):
    """Actor lacks the role required for the operation."""

    def __init__(self, action: str, required_role: str = "admin"):
        super().__init__(
            f"Permission denied: {action} requires {required_role} role",
            code="PERMISSION_DENIED",
            details={"action": action, "required_role": required_role},
        )


# Validation Exceptions
class ValidationError(StockroomError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class ConfigurationError(StockroomError):
    """Configuration error."""

    pass
