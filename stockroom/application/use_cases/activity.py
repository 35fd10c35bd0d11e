"""Activity feed use case and the helper other use cases record through."""

from dataclasses import dataclass

from stockroom.application.dto.responses import ActivityListResponse, ActivityResponse
from stockroom.config import get_logger
from stockroom.core.entities.activity import Activity, Actor
from stockroom.core.interfaces.activity_log import IActivityLog

logger = get_logger(__name__)


async def record_activity(
    activity_log: IActivityLog,
    action: str,
    description: str,
    actor: Actor | None = None,
) -> Activity | None:
    """Append to the feed. A failed append is logged and never aborts the caller."""
    try:
        return await activity_log.append(
            action, description, actor=actor.username if actor else None
        )
    except Exception as e:
        logger.warning(
            "activity_record_failed",
            action=action,
            description=description,
            error=str(e),
        )
        return None


@dataclass
class ListActivitiesResult:
    activities: list[Activity]


class ListActivitiesUseCase:
    """Most recent activity feed entries."""

    def __init__(self, activity_log: IActivityLog | None = None):
        self._activity_log = activity_log

    async def _get_activity_log(self) -> IActivityLog:
        if self._activity_log is None:
            from stockroom.infrastructure.storage.sqlite import get_activity_log

            self._activity_log = await get_activity_log()
        return self._activity_log

    async def execute(self, limit: int = 50) -> ListActivitiesResult:
        log = await self._get_activity_log()
        return ListActivitiesResult(activities=await log.list_recent(limit=limit))

    def to_response(self, result: ListActivitiesResult) -> ActivityListResponse:
        return ActivityListResponse(
            activities=[ActivityResponse.from_entity(a) for a in result.activities],
            total=len(result.activities),
        )
