"""Tests for SQLiteFixedPriceStore against a migrated temporary database."""

import pytest

from stockroom.core.entities.fixed_price import FixedPrice
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.exceptions import FixedPriceNotFoundError, UniquenessConflictError
from stockroom.infrastructure.storage.sqlite.fixed_price_store import SQLiteFixedPriceStore


def _price(item_name="Linen Fabric", price=11.0, **kwargs) -> FixedPrice:
    return FixedPrice(
        kind=kwargs.pop("kind", ItemKind.RAW_MATERIAL),
        category=kwargs.pop("category", "Fabric"),
        item_name=item_name,
        price=price,
        **kwargs,
    )


@pytest.fixture
async def store(sqlite_db):
    return SQLiteFixedPriceStore()


class TestCreateAndGet:
    async def test_round_trip(self, store):
        created = await store.create_price(_price())

        fetched = await store.get_price(created.id)

        assert fetched is not None
        assert fetched.kind == ItemKind.RAW_MATERIAL
        assert fetched.price == 11.0
        assert fetched.is_active is True

    async def test_missing_returns_none(self, store):
        assert await store.get_price(404) is None

    async def test_duplicate_key_conflicts(self, store):
        await store.create_price(_price())

        with pytest.raises(UniquenessConflictError) as exc_info:
            await store.create_price(_price(price=9.0))

        assert exc_info.value.details["value"] == "raw_material/Fabric/Linen Fabric"

    async def test_same_name_in_other_category_or_kind_allowed(self, store):
        await store.create_price(_price())
        await store.create_price(_price(category="Lining"))
        await store.create_price(_price(kind=ItemKind.PRODUCT))

        assert len(await store.list_prices()) == 3


class TestQueries:
    async def test_list_filters_and_orders_by_name(self, store):
        await store.create_price(_price(item_name="Wool"))
        await store.create_price(_price(item_name="Cotton"))
        await store.create_price(_price(item_name="Buttons", category="Trims"))
        await store.create_price(_price(item_name="Silk", is_active=False))

        fabric = await store.list_prices(kind=ItemKind.RAW_MATERIAL, category="Fabric")
        everything = await store.list_prices(active_only=False)

        assert [p.item_name for p in fabric] == ["Cotton", "Wool"]
        assert [p.item_name for p in everything] == ["Buttons", "Cotton", "Silk", "Wool"]

    async def test_find_ignores_inactive(self, store):
        await store.create_price(_price(item_name="Silk", is_active=False))
        await store.create_price(_price())

        found = await store.find_price(ItemKind.RAW_MATERIAL, "Fabric", "Linen Fabric")
        inactive = await store.find_price(ItemKind.RAW_MATERIAL, "Fabric", "Silk")

        assert found.price == 11.0
        assert inactive is None


class TestUpdateAndDelete:
    async def test_update(self, store):
        created = await store.create_price(_price())

        updated = await store.update_price(
            created.model_copy(update={"price": 13.5, "is_active": False})
        )

        assert updated.price == 13.5
        fetched = await store.get_price(created.id)
        assert fetched.price == 13.5
        assert fetched.is_active is False

    async def test_update_missing(self, store):
        with pytest.raises(FixedPriceNotFoundError):
            await store.update_price(_price().model_copy(update={"id": 404}))

    async def test_rename_onto_existing_key_conflicts(self, store):
        await store.create_price(_price(item_name="Cotton"))
        linen = await store.create_price(_price())

        with pytest.raises(UniquenessConflictError):
            await store.update_price(linen.model_copy(update={"item_name": "Cotton"}))

    async def test_delete(self, store):
        created = await store.create_price(_price())

        assert await store.delete_price(created.id) is True
        assert await store.delete_price(created.id) is False
        assert await store.get_price(created.id) is None
