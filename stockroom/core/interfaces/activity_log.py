"""Abstract interface for the activity feed."""

from abc import ABC, abstractmethod

from stockroom.core.entities.activity import Activity


class IActivityLog(ABC):
    """Append-only log of user-visible actions."""

    @abstractmethod
    async def append(
        self, action: str, description: str, actor: str | None = None
    ) -> Activity:
        """Record an activity."""
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> list[Activity]:
        """Most recent activities first."""
        pass
