"""API tests for saved reports."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from stockroom.api.dependencies import (
    get_delete_saved_report_use_case,
    get_get_saved_report_use_case,
    get_list_saved_reports_use_case,
    get_save_report_use_case,
)
from stockroom.api.main import app
from stockroom.application.use_cases.saved_reports import (
    DeleteSavedReportUseCase,
    GetSavedReportUseCase,
    ListSavedReportsUseCase,
    SavedReportListResult,
    SavedReportResult,
    SaveReportUseCase,
)
from stockroom.core.entities.report import ReportType, SavedReport
from stockroom.core.exceptions import PermissionDeniedError, ReportNotFoundError


@pytest.fixture
def saved_report():
    return SavedReport(
        id=4,
        title="October low stock",
        report_type=ReportType.LOW_STOCK,
        content={"total": 1},
        generated_by="bob",
        created_at=datetime(2026, 10, 19, 8, 0),
    )


def _single(use_case_cls, report):
    uc = AsyncMock(spec=use_case_cls)
    result = SavedReportResult(report=report)
    uc.execute.return_value = result
    uc.to_response.return_value = use_case_cls().to_response(result)
    return uc


@pytest.fixture
def mock_save(saved_report):
    return _single(SaveReportUseCase, saved_report)


@pytest.fixture
def mock_get(saved_report):
    return _single(GetSavedReportUseCase, saved_report)


@pytest.fixture
def mock_delete(saved_report):
    return _single(DeleteSavedReportUseCase, saved_report)


@pytest.fixture
def mock_list(saved_report):
    uc = AsyncMock(spec=ListSavedReportsUseCase)
    result = SavedReportListResult(reports=[saved_report])
    uc.execute.return_value = result
    uc.to_response.return_value = ListSavedReportsUseCase().to_response(result)
    return uc


@pytest.fixture
async def saved_client(mock_save, mock_get, mock_delete, mock_list):
    overrides = {
        get_save_report_use_case: lambda: mock_save,
        get_get_saved_report_use_case: lambda: mock_get,
        get_delete_saved_report_use_case: lambda: mock_delete,
        get_list_saved_reports_use_case: lambda: mock_list,
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


class TestSavedReportsAPI:
    async def test_save(self, saved_client: AsyncClient, mock_save):
        response = await saved_client.post(
            "/api/reports/saved",
            json={"title": "October low stock", "report_type": "low-stock"},
            headers={"X-User": "bob"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 4
        assert data["generated_by"] == "bob"
        request = mock_save.execute.await_args.args[0]
        assert request.report_type == ReportType.LOW_STOCK
        assert request.content is None

    async def test_unknown_type_is_422(self, saved_client: AsyncClient, mock_save):
        response = await saved_client.post(
            "/api/reports/saved", json={"title": "X", "report_type": "sales"}
        )

        assert response.status_code == 422
        mock_save.execute.assert_not_called()

    async def test_reversed_range_is_422(self, saved_client: AsyncClient, mock_save):
        response = await saved_client.post(
            "/api/reports/saved",
            json={
                "title": "X",
                "report_type": "low-stock",
                "date_range_start": "2026-10-31",
                "date_range_end": "2026-10-01",
            },
        )

        assert response.status_code == 422
        mock_save.execute.assert_not_called()

    async def test_list(self, saved_client: AsyncClient):
        response = await saved_client.get("/api/reports/saved")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["reports"][0]["content"] == {"total": 1}

    async def test_get_missing_is_404(self, saved_client: AsyncClient, mock_get):
        mock_get.execute.side_effect = ReportNotFoundError(9)

        response = await saved_client.get("/api/reports/saved/9")

        assert response.status_code == 404
        assert response.json()["error_code"] == "REPORT_NOT_FOUND"

    async def test_delete_as_staff_is_403(self, saved_client: AsyncClient, mock_delete):
        mock_delete.execute.side_effect = PermissionDeniedError("delete report")

        response = await saved_client.delete("/api/reports/saved/4")

        assert response.status_code == 403

    async def test_delete_as_admin(self, saved_client: AsyncClient, mock_delete):
        response = await saved_client.delete(
            "/api/reports/saved/4", headers={"X-User-Role": "admin"}
        )

        assert response.status_code == 204
        mock_delete.execute.assert_awaited_once()
