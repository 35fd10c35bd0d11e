"""Tests for domain exceptions."""

from stockroom.core.exceptions import (
    InsufficientStockError,
    InvalidStatusTransitionError,
    InventoryError,
    ItemNotFoundError,
    NotFoundError,
    PermissionDeniedError,
    StockroomError,
    StorageError,
    StoreUnavailableError,
    UniquenessConflictError,
    ValidationError,
    WorkOrderNotFoundError,
)


class TestStockroomError:
    def test_code_defaults_to_class_name(self):
        error = StockroomError("boom")
        assert error.code == "StockroomError"
        assert error.details == {}
        assert str(error) == "boom"

    def test_to_dict(self):
        error = ItemNotFoundError(7)
        assert error.to_dict() == {
            "error": "ITEM_NOT_FOUND",
            "message": "Stock item not found: 7",
            "details": {"item_id": 7},
        }


class TestHierarchy:
    def test_not_found_errors_are_storage_errors(self):
        assert issubclass(ItemNotFoundError, NotFoundError)
        assert issubclass(NotFoundError, StorageError)
        assert issubclass(StorageError, StockroomError)

    def test_inventory_errors(self):
        assert issubclass(InsufficientStockError, InventoryError)
        assert issubclass(InvalidStatusTransitionError, InventoryError)


class TestMessages:
    def test_insufficient_stock_names_item(self):
        error = InsufficientStockError(3, requested=8, available=5, name="Linen")
        assert error.code == "INSUFFICIENT_STOCK"
        assert "Linen" in error.message
        assert "Available: 5" in error.message
        assert error.details == {"item_id": 3, "requested": 8, "available": 5}

    def test_work_order_not_active(self):
        error = WorkOrderNotFoundError(12, reason="not active")
        assert error.message == "Work order not found: 12 (not active)"

    def test_uniqueness_conflict(self):
        error = UniquenessConflictError("sku", "PRD-0001")
        assert error.code == "UNIQUENESS_CONFLICT"
        assert error.details["field"] == "sku"

    def test_store_unavailable(self):
        error = StoreUnavailableError("adjust_quantity", "database is locked")
        assert "database is locked" in error.message

    def test_validation_value_truncated(self):
        error = ValidationError("name", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_permission_denied(self):
        error = PermissionDeniedError("delete purchase order")
        assert error.code == "PERMISSION_DENIED"
        assert "admin" in error.message
