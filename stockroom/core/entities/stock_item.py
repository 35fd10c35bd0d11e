"""Stock item domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field, model_validator

from stockroom.core.services.stock_rules import (
    StockStatus,
    classify,
    needs_replenishment,
)


class ItemKind(str, Enum):
    """Class of stock item. SKUs are unique within a kind."""

    PRODUCT = "product"
    RAW_MATERIAL = "raw_material"


class StockItem(BaseModel):
    """A finished product or raw material with a tracked quantity."""

    id: int | None = None
    kind: ItemKind
    name: str
    description: str | None = None
    category: str = "General"
    sku: str | None = None
    quantity: int = Field(default=0, ge=0)  # "stock" for products
    reorder_level: int = Field(default=10, ge=0)
    unit_cost: float = Field(default=0.0, ge=0)  # price for products
    unit: str | None = None
    supplier: str | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @model_validator(mode="after")
    def default_unit(self) -> "StockItem":
        """Fabric is counted in rolls, everything else in units."""
        if not self.unit:
            self.unit = "rolls" if self.category == "Fabric" else "units"
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> StockStatus:
        """Status derived from quantity and reorder level."""
        return classify(self.quantity, self.reorder_level)

    @property
    def total_value(self) -> float:
        """Stock value = quantity * unit_cost."""
        return self.quantity * self.unit_cost

    @property
    def is_low(self) -> bool:
        return needs_replenishment(self.status)
