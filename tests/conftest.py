"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

import stockroom.infrastructure.storage.sqlite.connection as conn_module
from stockroom.config import reset_settings
from stockroom.core.entities.activity import Actor, Role
from stockroom.core.entities.stock_item import ItemKind, StockItem
from stockroom.infrastructure.storage.sqlite.connection import close_pool
from stockroom.infrastructure.storage.sqlite.migrations.migrator import initialize_database


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at a throwaway data directory for every test."""
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path / "data"))
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
async def sqlite_db(tmp_path: Path) -> AsyncGenerator[Path, None]:
    """Migrated temporary database wired into the global connection pool."""
    db_path = tmp_path / "stockroom.db"
    await initialize_database(db_path, create_backup_before=False)

    conn_module._pool = None
    mock_settings = MagicMock()
    mock_settings.storage.db_path = db_path
    mock_settings.storage.pool_size = 1
    mock_settings.storage.busy_timeout = 5000

    with patch.object(conn_module, "get_settings", return_value=mock_settings):
        try:
            yield db_path
        finally:
            await close_pool()


@pytest.fixture
def admin() -> Actor:
    return Actor(username="alice", role=Role.ADMIN)


@pytest.fixture
def staff() -> Actor:
    return Actor(username="bob", role=Role.STAFF)


@pytest.fixture
def sample_product() -> StockItem:
    """Finished product with healthy stock."""
    return StockItem(
        id=1,
        kind=ItemKind.PRODUCT,
        name="Linen Shirt",
        category="Apparel",
        sku="PRD-0001",
        quantity=25,
        reorder_level=10,
        unit_cost=49.99,
    )


@pytest.fixture
def sample_material() -> StockItem:
    """Raw material below its reorder level."""
    return StockItem(
        id=2,
        kind=ItemKind.RAW_MATERIAL,
        name="Linen Fabric",
        category="Fabric",
        sku="RAW-0001",
        quantity=5,
        reorder_level=10,
        unit_cost=12.5,
        supplier="Textile Co",
    )
