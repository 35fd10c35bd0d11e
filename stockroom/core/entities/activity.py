"""Activity feed and actor entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from stockroom.core.exceptions import PermissionDeniedError


class Role(str, Enum):
    """User roles."""

    ADMIN = "admin"
    STAFF = "staff"


class Actor(BaseModel):
    """The user on whose behalf an operation runs."""

    username: str = "system"
    role: Role = Role.STAFF

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self, action: str) -> None:
        """Raise PermissionDeniedError unless the actor is an admin."""
        if not self.is_admin:
            raise PermissionDeniedError(action, required_role=Role.ADMIN.value)


SYSTEM_ACTOR = Actor()


class Activity(BaseModel):
    """One entry in the audit/activity feed."""

    id: int | None = None
    actor: str | None = None
    action: str  # create, update, delete, adjust, complete, cancel
    description: str
    created_at: datetime = Field(default_factory=datetime.utcnow)
