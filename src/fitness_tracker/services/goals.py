"""Goal tracking: progress updates, milestones, analytics."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from fitness_tracker.domain.goals import (
    GOAL_CATEGORIES,
    GOAL_STATUSES,
    Goal,
    GoalInsight,
    GoalProgressResult,
    GoalStats,
    Milestone,
    ProgressRecord,
)
from fitness_tracker.domain.notifications import GOAL_ACHIEVEMENT, MILESTONE_REACHED
from fitness_tracker.services.errors import (
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
)
from fitness_tracker.services.notifications import NotificationService
from fitness_tracker.services.stats import shift_months

_logger = logging.getLogger(__name__)

_RANK = {"high": 3, "medium": 2, "low": 1}
_EDITABLE_FIELDS = {
    "title",
    "description",
    "category",
    "priority",
    "target_value",
    "current_value",
    "unit",
    "target_date",
    "status",
    "milestones",
    "reminder_frequency",
    "is_public",
}
_CLEARABLE_FIELDS = {"description", "target_date", "reminder_frequency"}
RECENT_PROGRESS_LIMIT = 10
AT_RISK_DAYS = 7
BEHIND_DAYS = 30


class GoalRepository(Protocol):
    """Persistence interface for goals, scoped to their owner."""

    def list_goals(
        self,
        user_id: UUID,
        status: str | None = None,
        category: str | None = None,
        priority: str | None = None,
    ) -> list[Goal]:
        """Return the user's goals matching the filters."""

    def get_goal(self, user_id: UUID, goal_id: UUID) -> Goal | None:
        """Return a goal if it exists and belongs to the user."""

    def create_goal(self, user_id: UUID, payload: dict[str, object]) -> Goal:
        """Create a goal and return it."""

    def save_goal(self, goal: Goal) -> Goal:
        """Overwrite a stored goal with the given state and return it."""

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> bool:
        """Delete a goal, returning False if it did not exist."""


def progress_percentage(goal: Goal) -> float:
    """Return completion percentage capped at 100, or 0 for a zero target."""
    if goal.target_value == 0:
        return 0.0
    return min(goal.current_value / goal.target_value * 100, 100.0)


def apply_progress(
    goal: Goal, value: float, notes: str | None, observed_at: datetime
) -> tuple[Goal, list[Milestone], bool]:
    """Apply one observation to a goal.

    Returns the updated goal, the milestones first crossed by this update and
    whether the update completed the goal. A milestone fires when the update
    moves from below its target to at or above it; achieved milestones are
    never reset.
    """
    previous_value = goal.current_value
    record = ProgressRecord(
        date=observed_at,
        value=value,
        notes=notes or "",
        previous_value=previous_value,
    )

    crossed: list[Milestone] = []
    milestones: list[Milestone] = []
    for milestone in goal.milestones:
        if not milestone.achieved and previous_value < milestone.target_value <= value:
            milestone = replace(milestone, achieved=True, achieved_date=observed_at)
            crossed.append(milestone)
        milestones.append(milestone)

    completed = value >= goal.target_value and goal.status == "active"
    updated = replace(
        goal,
        current_value=value,
        progress_history=[*goal.progress_history, record],
        milestones=milestones,
        status="completed" if completed else goal.status,
        completed_at=observed_at if completed else goal.completed_at,
    )
    return updated, crossed, completed


def recent_progress(
    goal: Goal, limit: int = RECENT_PROGRESS_LIMIT
) -> list[ProgressRecord]:
    """Return the newest progress records first."""
    return sorted(goal.progress_history, key=lambda record: record.date, reverse=True)[
        :limit
    ]


def build_insight(goal: Goal, today: date) -> GoalInsight | None:
    """Classify an active goal by progress and time left."""
    percentage = progress_percentage(goal)
    days_remaining = (goal.target_date - today).days if goal.target_date else None

    insight: tuple[str, str, str] | None = None
    if days_remaining is not None and days_remaining < 0:
        insight = ("overdue", f"Goal is {abs(days_remaining)} days overdue", "high")
    elif (
        days_remaining is not None
        and days_remaining <= AT_RISK_DAYS
        and percentage < 80  # noqa: PLR2004
    ):
        insight = (
            "at_risk",
            f"Only {days_remaining} days left with {percentage:.1f}% progress",
            "medium",
        )
    elif percentage >= 100:  # noqa: PLR2004
        insight = (
            "ready_to_complete",
            "Goal target reached! Mark as completed.",
            "low",
        )
    elif percentage > 80:  # noqa: PLR2004
        insight = ("on_track", f"Great progress! {percentage:.1f}% complete", "low")
    elif (
        percentage < 25  # noqa: PLR2004
        and days_remaining is not None
        and days_remaining <= BEHIND_DAYS
    ):
        insight = (
            "behind",
            f"Progress is behind schedule ({percentage:.1f}%)",
            "medium",
        )
    if insight is None:
        return None

    type_, message, severity = insight
    return GoalInsight(
        goal_id=goal.id,
        goal_title=goal.title,
        progress_percentage=percentage,
        days_remaining=days_remaining,
        category=goal.category,
        priority=goal.priority,
        type=type_,
        message=message,
        severity=severity,
    )


@dataclass
class GoalService:
    """Application service for goals and their progress."""

    repository: GoalRepository
    notification_service: NotificationService

    def list_goals(  # noqa: PLR0913
        self,
        user_id: UUID,
        status: str | None = None,
        category: str | None = None,
        priority: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Goal], int]:
        """Return a page of goals ordered by priority then recency."""
        goals = self.repository.list_goals(user_id, status, category, priority)
        ordered = sorted(
            goals,
            key=lambda goal: (
                _RANK.get(goal.priority, 0),
                goal.created_at or datetime.min.replace(tzinfo=UTC),
            ),
            reverse=True,
        )
        offset = (page - 1) * limit
        return ordered[offset : offset + limit], len(ordered)

    def get_goal(self, user_id: UUID, goal_id: UUID) -> Goal:
        """Return one of the user's goals."""
        goal = self.repository.get_goal(user_id, goal_id)
        if goal is None:
            raise NotFoundError("Goal not found")
        return goal

    def create_goal(
        self, user_id: UUID, payload: dict[str, object], today: date | None = None
    ) -> Goal:
        """Create an active goal with generated milestone ids."""
        today = today or datetime.now(tz=UTC).date()
        target_date = payload.get("target_date")
        if isinstance(target_date, date) and target_date <= today:
            raise InvalidInputError("Target date must be in the future")
        goal = self.repository.create_goal(
            user_id,
            {
                **payload,
                "current_value": payload.get("current_value") or 0.0,
                "status": "active",
                "milestones": _build_milestones(payload.get("milestones") or []),
                "progress_history": [],
            },
        )
        reminder_at = _next_reminder_date(goal.reminder_frequency, today)
        if reminder_at:
            _logger.info(
                "Reminder scheduled for goal %s on %s", goal.id, reminder_at.isoformat()
            )
        return goal

    def update_goal(
        self,
        user_id: UUID,
        goal_id: UUID,
        changes: dict[str, object],
        now: datetime | None = None,
    ) -> Goal:
        """Apply manual edits, including status overrides."""
        goal = self.get_goal(user_id, goal_id)
        now = now or datetime.now(tz=UTC)
        fields = {
            key: value for key, value in changes.items() if key in _EDITABLE_FIELDS
        }
        cleared = sorted(
            key
            for key, value in fields.items()
            if value is None and key not in _CLEARABLE_FIELDS
        )
        if cleared:
            raise InvalidInputError(f"Fields cannot be null: {', '.join(cleared)}")
        if "milestones" in fields:
            fields["milestones"] = _build_milestones(fields["milestones"] or [])
        status = fields.get("status")
        if status is not None and status not in GOAL_STATUSES:
            raise InvalidInputError(f"Unknown goal status: {status}")
        if "category" in fields and fields["category"] not in GOAL_CATEGORIES:
            raise InvalidInputError(f"Unknown goal category: {fields['category']}")

        newly_completed = status == "completed" and goal.status != "completed"
        if newly_completed:
            fields["completed_at"] = now
        elif status is not None and status != "completed":
            fields["completed_at"] = None

        saved = self.repository.save_goal(replace(goal, **fields))
        if newly_completed:
            self._notify_goal_completed(saved)
        return saved

    def delete_goal(self, user_id: UUID, goal_id: UUID) -> None:
        """Delete one of the user's goals."""
        if not self.repository.delete_goal(user_id, goal_id):
            raise NotFoundError("Goal not found")

    def record_progress(  # noqa: PLR0913
        self,
        user_id: UUID,
        goal_id: UUID,
        value: object,
        notes: str | None = None,
        observed_at: datetime | None = None,
    ) -> GoalProgressResult:
        """Record an observed value and detect milestone and goal completion."""
        numeric = _validate_value(value)
        goal = self.get_goal(user_id, goal_id)
        if goal.status != "active":
            raise InvalidStateError("Cannot update progress on inactive goal")

        updated, crossed, completed = apply_progress(
            goal, numeric, notes, observed_at or datetime.now(tz=UTC)
        )
        saved = self.repository.save_goal(updated)
        _logger.info(
            "Goal progress recorded: goal_id=%s value=%s milestones=%s completed=%s",
            goal_id,
            numeric,
            len(crossed),
            completed,
        )

        for milestone in crossed:
            self._notify_milestone(saved, milestone)
        if completed:
            self._notify_goal_completed(saved)

        return GoalProgressResult(
            goal=saved,
            progress_percentage=progress_percentage(saved),
            completed_milestones=crossed,
            goal_completed=completed,
        )

    def complete_milestone(
        self,
        user_id: UUID,
        goal_id: UUID,
        milestone_id: UUID,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> tuple[Goal, Milestone]:
        """Mark a milestone achieved by hand."""
        goal = self.get_goal(user_id, goal_id)
        target = next((m for m in goal.milestones if m.id == milestone_id), None)
        if target is None:
            raise NotFoundError("Milestone not found")
        if target.achieved:
            raise InvalidStateError("Milestone already completed")

        completed = replace(
            target,
            achieved=True,
            achieved_date=now or datetime.now(tz=UTC),
            notes=notes or target.notes,
        )
        milestones = [completed if m.id == milestone_id else m for m in goal.milestones]
        saved = self.repository.save_goal(replace(goal, milestones=milestones))
        self._notify_milestone(saved, completed)
        return saved, completed

    def get_stats(self, user_id: UUID, now: datetime | None = None) -> GoalStats:
        """Return status, category and completion-trend aggregates."""
        now = now or datetime.now(tz=UTC)
        goals = self.repository.list_goals(user_id)
        by_status = dict.fromkeys(GOAL_STATUSES, 0)
        by_category: dict[str, dict[str, int]] = {}
        for goal in goals:
            by_status[goal.status] = by_status.get(goal.status, 0) + 1
            bucket = by_category.setdefault(goal.category, {"count": 0, "completed": 0})
            bucket["count"] += 1
            if goal.status == "completed":
                bucket["completed"] += 1

        since = shift_months(now.date(), -6)
        trend: dict[tuple[int, int], int] = {}
        for goal in goals:
            if goal.status != "completed" or goal.completed_at is None:
                continue
            if goal.completed_at.date() < since:
                continue
            key = (goal.completed_at.year, goal.completed_at.month)
            trend[key] = trend.get(key, 0) + 1

        total = len(goals)
        rate = round(by_status["completed"] / total * 100, 2) if total else 0.0
        return GoalStats(
            total=total,
            by_status=by_status,
            by_category=by_category,
            completion_rate=rate,
            completion_trend=[
                {"year": year, "month": month, "count": count}
                for (year, month), count in sorted(trend.items())
            ],
        )

    def get_insights(
        self, user_id: UUID, today: date | None = None
    ) -> list[GoalInsight]:
        """Return insights for active goals, most severe first."""
        today = today or datetime.now(tz=UTC).date()
        insights = [
            insight
            for goal in self.repository.list_goals(user_id, status="active")
            if (insight := build_insight(goal, today)) is not None
        ]
        return sorted(
            insights, key=lambda item: _RANK[item.severity], reverse=True
        )

    def _notify_milestone(self, goal: Goal, milestone: Milestone) -> None:
        self.notification_service.notify(
            goal.user_id,
            MILESTONE_REACHED,
            title="Milestone Achieved!",
            message=(
                f"You've reached a milestone: {milestone.title} "
                f'for goal "{goal.title}"'
            ),
            related_goal_id=goal.id,
        )

    def _notify_goal_completed(self, goal: Goal) -> None:
        self.notification_service.notify(
            goal.user_id,
            GOAL_ACHIEVEMENT,
            title="Goal Completed!",
            message=f"Congratulations! You've completed your goal: {goal.title}",
            related_goal_id=goal.id,
        )


def _validate_value(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError("Progress value must be a number")
    if not math.isfinite(value):
        raise InvalidInputError("Progress value must be a finite number")
    if value < 0:
        raise InvalidInputError("Progress value cannot be negative")
    return float(value)


def _build_milestones(raw: object) -> list[Milestone]:
    milestones: list[Milestone] = []
    for item in raw if isinstance(raw, list) else []:
        if isinstance(item, Milestone):
            milestones.append(item)
            continue
        if not isinstance(item, dict):
            raise InvalidInputError("Milestones must be objects")
        title = item.get("title")
        target_value = item.get("target_value")
        if not title or target_value is None:
            raise InvalidInputError("Each milestone must have title and target_value")
        milestone_id = item.get("id")
        milestones.append(
            Milestone(
                id=UUID(str(milestone_id)) if milestone_id else uuid4(),
                title=str(title),
                target_value=float(target_value),
                achieved=bool(item.get("achieved", False)),
                achieved_date=item.get("achieved_date"),
                notes=item.get("notes"),
            )
        )
    return milestones


def _next_reminder_date(frequency: str | None, today: date) -> date | None:
    if frequency == "daily":
        return today + timedelta(days=1)
    if frequency == "weekly":
        return today + timedelta(days=7)
    if frequency == "monthly":
        return shift_months(today, 1)
    return None
