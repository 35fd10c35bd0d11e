"""Saved report use cases: keep, list and remove report snapshots."""

from dataclasses import dataclass
from typing import Any

from stockroom.application.dto.requests import SaveReportRequest
from stockroom.application.dto.responses import SavedReportListResponse, SavedReportResponse
from stockroom.application.use_cases.activity import record_activity
from stockroom.application.use_cases.reports import InventorySummaryUseCase, LowStockReportUseCase
from stockroom.config import get_logger
from stockroom.core.entities.activity import SYSTEM_ACTOR, Actor
from stockroom.core.entities.report import ReportType, SavedReport
from stockroom.core.exceptions import ReportNotFoundError, ValidationError
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.core.interfaces.item_store import IItemStore
from stockroom.core.interfaces.report_store import IReportStore

logger = get_logger(__name__)

SAVED_REPORTS_LIMIT = 50


@dataclass
class SavedReportResult:
    report: SavedReport


@dataclass
class SavedReportListResult:
    reports: list[SavedReport]


class _SavedReportUseCase:
    def __init__(
        self,
        report_store: IReportStore | None = None,
        item_store: IItemStore | None = None,
        activity_log: IActivityLog | None = None,
    ):
        self._report_store = report_store
        self._item_store = item_store
        self._activity_log = activity_log

    async def _get_report_store(self) -> IReportStore:
        if self._report_store is None:
            from stockroom.infrastructure.storage.sqlite import get_report_store

            self._report_store = await get_report_store()
        return self._report_store

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stockroom.infrastructure.storage.sqlite import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    async def _require_report(self, report_id: int) -> SavedReport:
        if report_id <= 0:
            raise ValidationError("report_id", "must be a positive integer", report_id)
        store = await self._get_report_store()
        report = await store.get_report(report_id)
        if report is None:
            raise ReportNotFoundError(report_id)
        return report

    def to_response(self, result: SavedReportResult) -> SavedReportResponse:
        return SavedReportResponse.from_entity(result.report)


class SaveReportUseCase(_SavedReportUseCase):
    """Store a report under a title, capturing the live report when no content is sent."""

    async def execute(
        self, request: SaveReportRequest, actor: Actor | None = None
    ) -> SavedReportResult:
        actor = actor or SYSTEM_ACTOR
        content = request.content
        if content is None:
            content = await self._snapshot(request.report_type)

        store = await self._get_report_store()
        report = await store.save_report(
            SavedReport(
                title=request.title,
                report_type=request.report_type,
                content=content,
                generated_by=actor.username,
                date_range_start=request.date_range_start,
                date_range_end=request.date_range_end,
            )
        )

        await record_activity(
            await self._get_activity_log(),
            "create",
            f"Generated {report.title} report",
            actor,
        )
        logger.info("report_saved_by", report_id=report.id, actor=actor.username)
        return SavedReportResult(report=report)

    async def _snapshot(self, report_type: ReportType) -> dict[str, Any]:
        if report_type == ReportType.LOW_STOCK:
            low_stock = LowStockReportUseCase(item_store=self._item_store)
            return low_stock.to_response(await low_stock.execute()).model_dump(mode="json")
        if report_type == ReportType.INVENTORY_SUMMARY:
            summary = InventorySummaryUseCase(item_store=self._item_store)
            return summary.to_response(await summary.execute()).model_dump(mode="json")
        raise ValidationError("content", f"required for {report_type.value} reports")


class GetSavedReportUseCase(_SavedReportUseCase):
    async def execute(self, report_id: int) -> SavedReportResult:
        return SavedReportResult(report=await self._require_report(report_id))


class ListSavedReportsUseCase(_SavedReportUseCase):
    """The most recently saved reports."""

    async def execute(self, limit: int = SAVED_REPORTS_LIMIT) -> SavedReportListResult:
        store = await self._get_report_store()
        return SavedReportListResult(reports=await store.list_reports(limit=limit))

    def to_response(  # type: ignore[override]
        self, result: SavedReportListResult
    ) -> SavedReportListResponse:
        return SavedReportListResponse(
            reports=[SavedReportResponse.from_entity(r) for r in result.reports],
            total=len(result.reports),
        )


class DeleteSavedReportUseCase(_SavedReportUseCase):
    """Remove a saved report. Admin only."""

    async def execute(self, report_id: int, actor: Actor | None = None) -> SavedReportResult:
        actor = actor or SYSTEM_ACTOR
        actor.require_admin("delete report")

        report = await self._require_report(report_id)
        store = await self._get_report_store()
        if not await store.delete_report(report_id):
            raise ReportNotFoundError(report_id)

        await record_activity(
            await self._get_activity_log(),
            "delete",
            f"Deleted {report.title} report",
            actor,
        )
        return SavedReportResult(report=report)
