"""Domain models for user notifications."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

GOAL_ACHIEVEMENT = "goal-achievement"
MILESTONE_REACHED = "milestone-reached"


@dataclass(frozen=True)
class Notification:
    """Message shown to a user in their notification feed."""

    id: UUID
    user_id: UUID
    type: str
    title: str
    message: str
    priority: str = "normal"
    is_read: bool = False
    related_entity_type: str | None = None
    related_entity_id: UUID | None = None
    created_at: datetime | None = None
