"""Pure domain services."""

from stockroom.core.services.sequencer import next_id, parse_sequence_number
from stockroom.core.services.stock_rules import (
    StockStatus,
    classify,
    needs_replenishment,
    reorder_quantity,
)

__all__ = [
    "StockStatus",
    "classify",
    "needs_replenishment",
    "reorder_quantity",
    "next_id",
    "parse_sequence_number",
]
