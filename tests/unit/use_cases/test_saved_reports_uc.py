"""Unit tests for saved report use cases."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from stockroom.application.dto.requests import SaveReportRequest
from stockroom.application.use_cases.saved_reports import (
    DeleteSavedReportUseCase,
    GetSavedReportUseCase,
    ListSavedReportsUseCase,
    SaveReportUseCase,
)
from stockroom.core.entities.report import ReportType, SavedReport
from stockroom.core.entities.stock_item import ItemKind
from stockroom.core.exceptions import (
    PermissionDeniedError,
    ReportNotFoundError,
    ValidationError,
)


@pytest.fixture
def saved_report():
    return SavedReport(
        id=4,
        title="October low stock",
        report_type=ReportType.LOW_STOCK,
        content={"total": 1},
        generated_by="alice",
    )


@pytest.fixture
def mock_report_store(saved_report):
    store = AsyncMock()
    store.get_report.return_value = saved_report
    store.delete_report.return_value = True

    async def save_report(report):
        report.id = 5
        return report

    store.save_report.side_effect = save_report
    return store


@pytest.fixture
def mock_item_store(sample_product, sample_material):
    store = AsyncMock()

    async def list_items(kind=None, status=None, limit=100, offset=0):
        items = [sample_product, sample_material]
        return [i for i in items if kind is None or i.kind == kind]

    store.list_items.side_effect = list_items
    return store


@pytest.fixture
def mock_activity_log():
    return AsyncMock()


@pytest.fixture
def stores(mock_report_store, mock_item_store, mock_activity_log):
    return {
        "report_store": mock_report_store,
        "item_store": mock_item_store,
        "activity_log": mock_activity_log,
    }


class TestSaveReport:
    async def test_saves_given_content(self, stores, mock_item_store, mock_activity_log, staff):
        request = SaveReportRequest(
            title="Stock movement",
            report_type=ReportType.STOCK_MOVEMENT,
            content={"movements": [{"item": "Linen", "delta": -3}]},
            date_range_start=date(2026, 10, 1),
            date_range_end=date(2026, 10, 31),
        )

        result = await SaveReportUseCase(**stores).execute(request, actor=staff)

        report = result.report
        assert report.id == 5
        assert report.generated_by == "bob"
        assert report.content["movements"][0]["delta"] == -3
        mock_item_store.list_items.assert_not_called()
        action, description = mock_activity_log.append.call_args.args
        assert action == "create"
        assert description == "Generated Stock movement report"

    async def test_captures_low_stock_report(self, stores):
        request = SaveReportRequest(title="Today", report_type=ReportType.LOW_STOCK)

        result = await SaveReportUseCase(**stores).execute(request)

        content = result.report.content
        assert content["total"] == 1
        assert content["raw_materials"][0]["name"] == "Linen Fabric"
        assert result.report.generated_by == "system"

    async def test_captures_inventory_summary(self, stores, mock_item_store):
        request = SaveReportRequest(title="Value", report_type=ReportType.INVENTORY_SUMMARY)

        result = await SaveReportUseCase(**stores).execute(request)

        content = result.report.content
        assert content["products"]["kind"] == ItemKind.PRODUCT.value
        assert content["total_value"] == 1312.25

    async def test_stock_movement_needs_content(self, stores, mock_report_store):
        request = SaveReportRequest(title="Moves", report_type=ReportType.STOCK_MOVEMENT)

        with pytest.raises(ValidationError):
            await SaveReportUseCase(**stores).execute(request)
        mock_report_store.save_report.assert_not_called()

    def test_reversed_date_range_rejected(self):
        with pytest.raises(ValueError):
            SaveReportRequest(
                title="Backwards",
                report_type=ReportType.LOW_STOCK,
                date_range_start=date(2026, 10, 31),
                date_range_end=date(2026, 10, 1),
            )


class TestQueries:
    async def test_list_defaults_to_fifty(self, stores, mock_report_store, saved_report):
        mock_report_store.list_reports.return_value = [saved_report]
        use_case = ListSavedReportsUseCase(**stores)

        response = use_case.to_response(await use_case.execute())

        mock_report_store.list_reports.assert_awaited_once_with(limit=50)
        assert response.total == 1
        assert response.reports[0].report_type == "low-stock"

    async def test_get_missing(self, stores, mock_report_store):
        mock_report_store.get_report.return_value = None

        with pytest.raises(ReportNotFoundError):
            await GetSavedReportUseCase(**stores).execute(9)

    async def test_non_positive_id_rejected(self, stores, mock_report_store):
        with pytest.raises(ValidationError):
            await GetSavedReportUseCase(**stores).execute(0)
        mock_report_store.get_report.assert_not_called()


class TestDeleteSavedReport:
    async def test_admin_deletes(self, stores, mock_report_store, mock_activity_log, admin):
        result = await DeleteSavedReportUseCase(**stores).execute(4, actor=admin)

        assert result.report.title == "October low stock"
        mock_report_store.delete_report.assert_awaited_once_with(4)
        action, description = mock_activity_log.append.call_args.args
        assert action == "delete"
        assert description == "Deleted October low stock report"

    async def test_staff_denied(self, stores, mock_report_store, staff):
        with pytest.raises(PermissionDeniedError):
            await DeleteSavedReportUseCase(**stores).execute(4, actor=staff)
        mock_report_store.delete_report.assert_not_called()

    async def test_missing(self, stores, mock_report_store, admin):
        mock_report_store.get_report.return_value = None

        with pytest.raises(ReportNotFoundError):
            await DeleteSavedReportUseCase(**stores).execute(4, actor=admin)
