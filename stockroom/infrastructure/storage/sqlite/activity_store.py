"""SQLite implementation of the activity feed."""

from datetime import datetime

from stockroom.config import get_logger
from stockroom.core.entities.activity import Activity
from stockroom.core.interfaces.activity_log import IActivityLog
from stockroom.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    store_errors,
)

logger = get_logger(__name__)


class SQLiteActivityLog(IActivityLog):
    """Append-only activity log table."""

    async def append(
        self, action: str, description: str, actor: str | None = None
    ) -> Activity:
        activity = Activity(actor=actor, action=action, description=description)
        async with store_errors("append_activity"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO activities (actor, action, description, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        activity.actor,
                        activity.action,
                        activity.description,
                        activity.created_at.isoformat(),
                    ),
                )
                activity.id = cursor.lastrowid
        logger.debug("activity_recorded", activity_id=activity.id, action=action)
        return activity

    async def list_recent(self, limit: int = 50) -> list[Activity]:
        async with store_errors("list_activities"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM activities ORDER BY created_at DESC, id DESC LIMIT ?",
                    (limit,),
                )
                rows = await cursor.fetchall()

        activities = []
        for row in rows:
            created_at = datetime.utcnow()
            if row["created_at"]:
                try:
                    created_at = datetime.fromisoformat(row["created_at"])
                except (ValueError, TypeError):
                    pass
            activities.append(
                Activity(
                    id=row["id"],
                    actor=row["actor"],
                    action=row["action"],
                    description=row["description"],
                    created_at=created_at,
                )
            )
        return activities
