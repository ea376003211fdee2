"""Domain models for body progress tracking."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

PROGRESS_TYPES = ("weight", "body-measurements", "performance", "photo")
MEASUREMENTS = ("chest", "waist", "hips", "arms", "thighs", "neck")
PHOTO_CATEGORIES = ("front", "side", "back", "other")
ANALYTICS_WINDOWS = {"7d": 7, "30d": 30, "90d": 90, "1y": 365}


@dataclass(frozen=True)
class ProgressEntry:
    """One dated observation: a weigh-in, measurements, a lift or photos.

    ``data`` holds the type-specific values, e.g. ``{"weight": 81.4}`` or
    ``{"waist": 84, "chest": 101}``.
    """

    id: UUID
    user_id: UUID
    date: datetime
    type: str
    data: dict[str, object] = field(default_factory=dict)
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class TrendPoint:
    date: datetime
    value: float


@dataclass(frozen=True)
class WeightAnalytics:
    """Weigh-ins over a window with their direction of change."""

    entries: list[ProgressEntry]
    direction: str | None
    change: float | None
    change_percentage: float | None
    average: float | None
    minimum: float | None
    maximum: float | None
    total_entries: int


@dataclass(frozen=True)
class MeasurementTrend:
    points: list[TrendPoint]
    change: float
    change_percentage: float
    average: float
    minimum: float
    maximum: float


@dataclass(frozen=True)
class PerformanceTrend:
    """Progress of one exercise's recorded performances."""

    points: list[TrendPoint]
    unit: str
    improvement: float
    improvement_percentage: float
    trend: str
    best: float
    average: float
    total_entries: int


@dataclass(frozen=True)
class TypeSummary:
    count: int
    latest: ProgressEntry | None


@dataclass(frozen=True)
class ProgressSummary:
    """Activity of the last thirty days, grouped by entry type."""

    total_entries: int
    last_entry: ProgressEntry | None
    by_type: dict[str, TypeSummary]
    unique_exercises: int
    weight_change: float | None
    weight_direction: str | None
