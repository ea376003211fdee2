"""Domain models for goals and their progress."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

GOAL_CATEGORIES = (
    "weight-loss",
    "weight-gain",
    "muscle-gain",
    "strength",
    "endurance",
    "flexibility",
    "general-fitness",
)
GOAL_PRIORITIES = ("low", "medium", "high")
GOAL_STATUSES = ("active", "paused", "completed", "cancelled")
REMINDER_FREQUENCIES = ("daily", "weekly", "monthly", "none")


@dataclass(frozen=True)
class Milestone:
    """Intermediate target inside a goal."""

    id: UUID
    title: str
    target_value: float
    achieved: bool = False
    achieved_date: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class ProgressRecord:
    """Immutable observation appended to a goal's history."""

    date: datetime
    value: float
    notes: str
    previous_value: float


@dataclass(frozen=True)
class Goal:
    """A user-defined target value with milestones and history."""

    id: UUID
    user_id: UUID
    title: str
    category: str
    target_value: float
    unit: str
    current_value: float = 0.0
    description: str | None = None
    priority: str = "medium"
    status: str = "active"
    target_date: date | None = None
    milestones: list[Milestone] = field(default_factory=list)
    progress_history: list[ProgressRecord] = field(default_factory=list)
    reminder_frequency: str | None = None
    is_public: bool = False
    completed_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class GoalProgressResult:
    """Outcome of recording one progress observation."""

    goal: Goal
    progress_percentage: float
    completed_milestones: list[Milestone]
    goal_completed: bool


@dataclass(frozen=True)
class GoalInsight:
    """Timeline-aware hint about an active goal."""

    goal_id: UUID
    goal_title: str
    progress_percentage: float
    days_remaining: int | None
    category: str
    priority: str
    type: str
    message: str
    severity: str


@dataclass(frozen=True)
class GoalStats:
    """Aggregate counts over a user's goals."""

    total: int
    by_status: dict[str, int]
    by_category: dict[str, dict[str, int]]
    completion_rate: float
    completion_trend: list[dict[str, int]]
