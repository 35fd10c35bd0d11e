"""Stock status classification and replenishment policy.

Every status written anywhere in the system comes from ``classify``; nothing
sets a status independently of the quantity it describes.
"""

from enum import Enum


class StockStatus(str, Enum):
    """Derived stock status of an item."""

    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


def classify(quantity: int, reorder_level: int) -> StockStatus:
    """Map a quantity and its reorder threshold to a stock status.

    ``0`` is out of stock, anything up to and including the reorder level is
    low, anything above it is in stock.
    """
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= reorder_level:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def needs_replenishment(status: StockStatus) -> bool:
    """True for statuses that should appear on low-stock reports and auto POs."""
    return status in (StockStatus.LOW_STOCK, StockStatus.OUT_OF_STOCK)


def reorder_quantity(current_quantity: int, reorder_level: int) -> int:
    """Units to reorder so stock climbs back to twice the reorder level.

    Never less than one full reorder level, e.g. ``(5, 10) -> 15``,
    ``(9, 10) -> 11``, ``(0, 10) -> 20``.
    """
    needed = max(2 * reorder_level - current_quantity, reorder_level)
    return max(needed, 0)
