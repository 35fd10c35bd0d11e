"""Fixed price catalog entity."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from stockroom.core.entities.stock_item import ItemKind


class FixedPrice(BaseModel):
    """Agreed price for a named item within a kind and category.

    A kind, category and item name identify at most one price. Inactive
    prices stay in the catalog but are never used as defaults.
    """

    id: int | None = None
    kind: ItemKind
    category: str
    item_name: str
    price: float = Field(ge=0)
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @field_validator("category", "item_name")
    @classmethod
    def strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value
