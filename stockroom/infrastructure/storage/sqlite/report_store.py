"""SQLite implementation of saved report storage."""

import json
from datetime import date, datetime

import aiosqlite

from stockroom.config import get_logger
from stockroom.core.entities.report import ReportType, SavedReport
from stockroom.core.interfaces.report_store import IReportStore
from stockroom.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    store_errors,
)

logger = get_logger(__name__)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        return None


class SQLiteReportStore(IReportStore):
    """Report snapshots with their content serialized to JSON."""

    async def save_report(self, report: SavedReport) -> SavedReport:
        now = datetime.utcnow()
        report.created_at = now
        report.updated_at = now
        async with store_errors("save_report"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO reports (
                        title, report_type, content, generated_by,
                        date_range_start, date_range_end, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        report.title,
                        report.report_type.value,
                        json.dumps(report.content, default=str),
                        report.generated_by,
                        report.date_range_start.isoformat() if report.date_range_start else None,
                        report.date_range_end.isoformat() if report.date_range_end else None,
                        report.created_at.isoformat(),
                        report.updated_at.isoformat(),
                    ),
                )
                report.id = cursor.lastrowid

        logger.info("report_saved", report_id=report.id, report_type=report.report_type)
        return report

    async def get_report(self, report_id: int) -> SavedReport | None:
        async with store_errors("get_report"):
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM reports WHERE id = ?", (report_id,))
                row = await cursor.fetchone()
        return self._row_to_report(row) if row else None

    async def list_reports(self, limit: int = 50) -> list[SavedReport]:
        async with store_errors("list_reports"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM reports ORDER BY created_at DESC, id DESC LIMIT ?",
                    (limit,),
                )
                rows = await cursor.fetchall()
        return [self._row_to_report(row) for row in rows]

    async def delete_report(self, report_id: int) -> bool:
        async with store_errors("delete_report"):
            async with get_transaction() as conn:
                cursor = await conn.execute("DELETE FROM reports WHERE id = ?", (report_id,))
                deleted = cursor.rowcount > 0
        if deleted:
            logger.info("report_deleted", report_id=report_id)
        return deleted

    @staticmethod
    def _row_to_report(row: aiosqlite.Row) -> SavedReport:
        content: dict = {}
        if row["content"]:
            try:
                content = json.loads(row["content"])
            except (json.JSONDecodeError, TypeError):
                logger.warning("report_content_unreadable", report_id=row["id"])

        created_at = datetime.utcnow()
        updated_at = datetime.utcnow()
        if row["created_at"]:
            try:
                created_at = datetime.fromisoformat(row["created_at"])
            except (ValueError, TypeError):
                pass
        if row["updated_at"]:
            try:
                updated_at = datetime.fromisoformat(row["updated_at"])
            except (ValueError, TypeError):
                pass

        return SavedReport(
            id=row["id"],
            title=row["title"],
            report_type=ReportType(row["report_type"]),
            content=content,
            generated_by=row["generated_by"],
            date_range_start=_parse_date(row["date_range_start"]),
            date_range_end=_parse_date(row["date_range_end"]),
            created_at=created_at,
            updated_at=updated_at,
        )
