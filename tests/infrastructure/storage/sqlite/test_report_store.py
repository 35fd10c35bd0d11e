"""Tests for SQLiteReportStore against a migrated temporary database."""

from datetime import date

import pytest

from stockroom.core.entities.report import ReportType, SavedReport
from stockroom.infrastructure.storage.sqlite.report_store import SQLiteReportStore


def _report(title="Weekly low stock", **kwargs) -> SavedReport:
    return SavedReport(
        title=title,
        report_type=kwargs.pop("report_type", ReportType.LOW_STOCK),
        content=kwargs.pop("content", {"total": 2, "raw_materials": [{"name": "Linen"}]}),
        generated_by="alice",
        **kwargs,
    )


@pytest.fixture
async def store(sqlite_db):
    return SQLiteReportStore()


class TestReportStore:
    async def test_round_trip_keeps_content_and_range(self, store):
        saved = await store.save_report(
            _report(date_range_start=date(2026, 10, 1), date_range_end=date(2026, 10, 7))
        )

        fetched = await store.get_report(saved.id)

        assert fetched.content == {"total": 2, "raw_materials": [{"name": "Linen"}]}
        assert fetched.report_type == ReportType.LOW_STOCK
        assert fetched.generated_by == "alice"
        assert fetched.date_range_start == date(2026, 10, 1)
        assert fetched.date_range_end == date(2026, 10, 7)

    async def test_missing_returns_none(self, store):
        assert await store.get_report(404) is None

    async def test_list_newest_first_with_limit(self, store):
        for n in range(3):
            await store.save_report(_report(title=f"Report {n}"))

        recent = await store.list_reports(limit=2)

        assert [r.title for r in recent] == ["Report 2", "Report 1"]

    async def test_delete(self, store):
        saved = await store.save_report(_report(report_type=ReportType.INVENTORY_SUMMARY))

        assert await store.delete_report(saved.id) is True
        assert await store.delete_report(saved.id) is False
        assert await store.list_reports() == []
