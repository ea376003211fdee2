"""Supabase repository for goals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.goals import Goal, Milestone, ProgressRecord
from fitness_tracker.services.goals import GoalRepository

_NO_DATE = datetime.min.replace(tzinfo=UTC)
_GOAL_COLUMNS = (
    "title",
    "description",
    "category",
    "priority",
    "target_value",
    "current_value",
    "unit",
    "status",
    "reminder_frequency",
    "is_public",
)


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for goals."""

    client: Client

    def list_goals(
        self,
        user_id: UUID,
        status: str | None = None,
        category: str | None = None,
        priority: str | None = None,
    ) -> list[Goal]:
        """Return the user's goals matching the filters."""
        query = self.client.table("goals").select("*").eq("user_id", str(user_id))
        if status:
            query = query.eq("status", status)
        if category:
            query = query.eq("category", category)
        if priority:
            query = query.eq("priority", priority)
        response = query.order("created_at", desc=True).execute()
        return [_parse_goal(row) for row in response.data or []]

    def get_goal(self, user_id: UUID, goal_id: UUID) -> Goal | None:
        """Return a goal if it exists and belongs to the user."""
        response = (
            self.client.table("goals")
            .select("*")
            .eq("id", str(goal_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def create_goal(self, user_id: UUID, payload: dict[str, object]) -> Goal:
        """Create a goal row and return it."""
        row = {key: payload[key] for key in _GOAL_COLUMNS if key in payload}
        target_date = payload.get("target_date")
        row.update(
            {
                "user_id": str(user_id),
                "target_date": (
                    target_date.isoformat() if isinstance(target_date, date) else None
                ),
                "milestones": [
                    _milestone_json(milestone)
                    for milestone in payload.get("milestones") or []
                ],
                "progress_history": [],
            }
        )
        response = self.client.table("goals").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create goal")
        return _parse_goal(response.data[0])

    def save_goal(self, goal: Goal) -> Goal:
        """Overwrite the stored goal with the given state."""
        row = {column: getattr(goal, column) for column in _GOAL_COLUMNS}
        row.update(
            {
                "target_date": goal.target_date.isoformat()
                if goal.target_date
                else None,
                "milestones": [_milestone_json(m) for m in goal.milestones],
                "progress_history": [
                    _progress_json(record) for record in goal.progress_history
                ],
                "completed_at": goal.completed_at.isoformat()
                if goal.completed_at
                else None,
            }
        )
        response = (
            self.client.table("goals")
            .update(row)
            .eq("id", str(goal.id))
            .eq("user_id", str(goal.user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save goal")
        return _parse_goal(response.data[0])

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> bool:
        """Delete a goal, returning False if nothing matched."""
        response = (
            self.client.table("goals")
            .delete()
            .eq("id", str(goal_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _milestone_json(milestone: Milestone) -> dict[str, object]:
    return {
        "id": str(milestone.id),
        "title": milestone.title,
        "target_value": milestone.target_value,
        "achieved": milestone.achieved,
        "achieved_date": milestone.achieved_date.isoformat()
        if milestone.achieved_date
        else None,
        "notes": milestone.notes,
    }


def _progress_json(record: ProgressRecord) -> dict[str, object]:
    return {
        "date": record.date.isoformat(),
        "value": record.value,
        "notes": record.notes,
        "previous_value": record.previous_value,
    }


def _parse_datetime(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_goal(row: dict[str, object]) -> Goal:
    """Parse a goal row into a domain model."""
    target_date = row.get("target_date")
    return Goal(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        title=str(row.get("title", "")),
        description=row.get("description"),
        category=str(row.get("category", "")),
        priority=str(row.get("priority") or "medium"),
        target_value=float(row.get("target_value") or 0.0),
        current_value=float(row.get("current_value") or 0.0),
        unit=str(row.get("unit", "")),
        status=str(row.get("status") or "active"),
        target_date=(
            date.fromisoformat(target_date[:10])
            if isinstance(target_date, str) and target_date
            else None
        ),
        milestones=[
            Milestone(
                id=UUID(str(item["id"])),
                title=str(item.get("title", "")),
                target_value=float(item.get("target_value", 0.0)),
                achieved=bool(item.get("achieved", False)),
                achieved_date=_parse_datetime(item.get("achieved_date")),
                notes=item.get("notes"),
            )
            for item in row.get("milestones") or []
        ],
        progress_history=[
            ProgressRecord(
                date=_parse_datetime(item.get("date")) or _NO_DATE,
                value=float(item.get("value", 0.0)),
                notes=str(item.get("notes") or ""),
                previous_value=float(item.get("previous_value", 0.0)),
            )
            for item in row.get("progress_history") or []
        ],
        reminder_frequency=row.get("reminder_frequency"),
        is_public=bool(row.get("is_public", False)),
        completed_at=_parse_datetime(row.get("completed_at")),
        created_at=_parse_datetime(row.get("created_at")),
    )
