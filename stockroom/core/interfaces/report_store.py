"""Abstract interface for saved report storage."""

from abc import ABC, abstractmethod

from stockroom.core.entities.report import SavedReport


class IReportStore(ABC):
    """Interface for saved report persistence."""

    @abstractmethod
    async def save_report(self, report: SavedReport) -> SavedReport:
        pass

    @abstractmethod
    async def get_report(self, report_id: int) -> SavedReport | None:
        pass

    @abstractmethod
    async def list_reports(self, limit: int = 50) -> list[SavedReport]:
        """Most recently saved first."""
        pass

    @abstractmethod
    async def delete_report(self, report_id: int) -> bool:
        pass
