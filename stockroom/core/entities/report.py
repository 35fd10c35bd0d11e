"""Saved report entity."""

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ReportType(str, Enum):
    """Kinds of report that can be saved."""

    INVENTORY_SUMMARY = "inventory-summary"
    LOW_STOCK = "low-stock"
    STOCK_MOVEMENT = "stock-movement"


class SavedReport(BaseModel):
    """A report snapshot kept for later viewing. Content is stored as JSON."""

    id: int | None = None
    title: str
    report_type: ReportType
    content: dict[str, Any] = Field(default_factory=dict)
    generated_by: str | None = None
    date_range_start: date | None = None
    date_range_end: date | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
