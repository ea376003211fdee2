"""Body progress entries and their trend analytics."""

import logging
import math
import re
from dataclasses import dataclass, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.progress import (
    ANALYTICS_WINDOWS,
    MEASUREMENTS,
    PROGRESS_TYPES,
    MeasurementTrend,
    PerformanceTrend,
    ProgressEntry,
    ProgressSummary,
    TrendPoint,
    TypeSummary,
    WeightAnalytics,
)
from fitness_tracker.services.errors import InvalidInputError, NotFoundError

_logger = logging.getLogger(__name__)

_PHOTO_URL = re.compile(r"^https?://.+\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
STABLE_WEIGHT_DELTA = 0.5
SUMMARY_DAYS = 30


class ProgressRepository(Protocol):
    """Persistence interface for progress entries, scoped to their owner."""

    def list_entries(  # noqa: PLR0913
        self,
        user_id: UUID,
        type_: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[list[ProgressEntry], int]:
        """Return entries newest first plus the total matching count."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> ProgressEntry | None:
        """Return an entry if it exists and belongs to the user."""

    def create_entry(self, user_id: UUID, payload: dict[str, object]) -> ProgressEntry:
        """Create an entry and return it."""

    def save_entry(self, entry: ProgressEntry) -> ProgressEntry:
        """Overwrite a stored entry and return it."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an entry, returning False if it did not exist."""


def validate_data(type_: str, data: dict[str, object]) -> None:
    """Check that ``data`` carries the values its entry type needs."""
    if type_ not in PROGRESS_TYPES:
        raise InvalidInputError(f"Unknown progress type: {type_}")
    if type_ == "weight":
        if not _is_positive(data.get("weight")):
            raise InvalidInputError("Valid weight is required")
    elif type_ == "body-measurements":
        present = [name for name in MEASUREMENTS if data.get(name) is not None]
        if not present or not all(_is_positive(data[name]) for name in present):
            raise InvalidInputError(
                "At least one valid body measurement is required: "
                + ", ".join(MEASUREMENTS)
            )
    elif type_ == "performance":
        exercise = data.get("exercise")
        if not isinstance(exercise, str) or not exercise.strip():
            raise InvalidInputError("Exercise name and performance value are required")
        if not _is_positive(data.get("value")):
            raise InvalidInputError("Exercise name and performance value are required")
    else:
        photos = data.get("photos")
        if not isinstance(photos, list) or not photos:
            raise InvalidInputError("At least one photo is required")
        for photo in photos:
            url = photo.get("url") if isinstance(photo, dict) else None
            if not isinstance(url, str) or not _PHOTO_URL.match(url):
                raise InvalidInputError("Photo must be a valid image URL")


def window_start(period: str, now: datetime) -> datetime:
    """Return the start of a rolling analytics window such as ``30d``."""
    if period not in ANALYTICS_WINDOWS:
        raise InvalidInputError(f"Unknown analytics period: {period}")
    return now - timedelta(days=ANALYTICS_WINDOWS[period])


def weight_analytics(entries: list[ProgressEntry]) -> WeightAnalytics:
    """Summarize weigh-ins ordered oldest first."""
    weights = [float(entry.data["weight"]) for entry in entries]
    if not weights:
        return WeightAnalytics(
            entries=[],
            direction=None,
            change=None,
            change_percentage=None,
            average=None,
            minimum=None,
            maximum=None,
            total_entries=0,
        )
    change = weights[-1] - weights[0]
    return WeightAnalytics(
        entries=entries,
        direction=_direction(change),
        change=round(change, 2),
        change_percentage=_percentage(change, weights[0]),
        average=round(sum(weights) / len(weights), 2),
        minimum=min(weights),
        maximum=max(weights),
        total_entries=len(weights),
    )


def measurement_trends(
    entries: list[ProgressEntry], names: tuple[str, ...] = MEASUREMENTS
) -> dict[str, MeasurementTrend]:
    """Per-measurement change and range, skipping measurements never taken."""
    trends: dict[str, MeasurementTrend] = {}
    for name in names:
        points = [
            TrendPoint(date=entry.date, value=float(entry.data[name]))
            for entry in entries
            if entry.data.get(name) is not None
        ]
        if not points:
            continue
        values = [point.value for point in points]
        change = values[-1] - values[0]
        trends[name] = MeasurementTrend(
            points=points,
            change=round(change, 2),
            change_percentage=_percentage(change, values[0]),
            average=round(sum(values) / len(values), 2),
            minimum=min(values),
            maximum=max(values),
        )
    return trends


def performance_trends(entries: list[ProgressEntry]) -> dict[str, PerformanceTrend]:
    """Group performances by exercise and measure improvement, oldest first."""
    groups: dict[str, list[ProgressEntry]] = {}
    for entry in entries:
        groups.setdefault(str(entry.data["exercise"]), []).append(entry)

    trends: dict[str, PerformanceTrend] = {}
    for exercise, group in groups.items():
        points = [
            TrendPoint(date=entry.date, value=float(entry.data["value"]))
            for entry in group
        ]
        values = [point.value for point in points]
        improvement = values[-1] - values[0]
        if improvement > 0:
            trend = "improving"
        elif improvement < 0:
            trend = "declining"
        else:
            trend = "stable"
        trends[exercise] = PerformanceTrend(
            points=points,
            unit=str(group[-1].data.get("unit") or "reps"),
            improvement=round(improvement, 2),
            improvement_percentage=_percentage(improvement, values[0]),
            trend=trend,
            best=max(values),
            average=round(sum(values) / len(values), 2),
            total_entries=len(values),
        )
    return trends


def summarize(entries: list[ProgressEntry]) -> ProgressSummary:
    """Summarize entries ordered newest first."""
    by_type: dict[str, TypeSummary] = {}
    for type_ in PROGRESS_TYPES:
        matching = [entry for entry in entries if entry.type == type_]
        by_type[type_] = TypeSummary(
            count=len(matching), latest=matching[0] if matching else None
        )

    weights = [float(e.data["weight"]) for e in entries if e.type == "weight"]
    change = weights[0] - weights[-1] if len(weights) >= 2 else None  # noqa: PLR2004
    exercises = {
        str(entry.data["exercise"]).lower()
        for entry in entries
        if entry.type == "performance"
    }
    return ProgressSummary(
        total_entries=len(entries),
        last_entry=entries[0] if entries else None,
        by_type=by_type,
        unique_exercises=len(exercises),
        weight_change=round(change, 2) if change is not None else None,
        weight_direction=_direction(change) if change is not None else None,
    )


@dataclass
class ProgressService:
    """Application service for body progress entries."""

    repository: ProgressRepository

    def list_entries(  # noqa: PLR0913
        self,
        user_id: UUID,
        type_: str | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[ProgressEntry], int]:
        """Return a page of entries, newest first, and the total count."""
        return self.repository.list_entries(
            user_id, type_, start, end, offset=(page - 1) * limit, limit=limit
        )

    def get_entry(self, user_id: UUID, entry_id: UUID) -> ProgressEntry:
        entry = self.repository.get_entry(user_id, entry_id)
        if entry is None:
            raise NotFoundError("Progress entry not found")
        return entry

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        type_: str,
        data: dict[str, object],
        observed_at: datetime | None = None,
        notes: str | None = None,
    ) -> ProgressEntry:
        """Validate and store a new entry."""
        validate_data(type_, data)
        entry = self.repository.create_entry(
            user_id,
            {
                "type": type_,
                "date": observed_at or datetime.now(tz=UTC),
                "data": data,
                "notes": notes,
            },
        )
        _logger.info("Progress entry created: user_id=%s type=%s", user_id, type_)
        return entry

    def update_entry(
        self, user_id: UUID, entry_id: UUID, changes: dict[str, object]
    ) -> ProgressEntry:
        """Merge new data values into an entry and replace its notes if sent."""
        entry = self.get_entry(user_id, entry_id)
        fields: dict[str, object] = {}
        if "data" in changes:
            if not isinstance(changes["data"], dict):
                raise InvalidInputError("Progress data must be an object")
            merged = {**entry.data, **changes["data"]}
            validate_data(entry.type, merged)
            fields["data"] = merged
        if "notes" in changes:
            fields["notes"] = changes["notes"]
        if not fields:
            return entry
        return self.repository.save_entry(replace(entry, **fields))

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        if not self.repository.delete_entry(user_id, entry_id):
            raise NotFoundError("Progress entry not found")

    def get_weight_analytics(
        self,
        user_id: UUID,
        period: str = "30d",
        start: datetime | None = None,
        end: datetime | None = None,
        now: datetime | None = None,
    ) -> WeightAnalytics:
        """Weight trend over explicit bounds, or a rolling window ending now."""
        now = now or datetime.now(tz=UTC)
        if start is None or end is None:
            start, end = window_start(period, now), now
        if start > end:
            raise InvalidInputError("start_date must not be after end_date")
        return weight_analytics(self._oldest_first(user_id, "weight", start, end))

    def get_measurement_analytics(
        self,
        user_id: UUID,
        measurement: str | None = None,
        period: str = "30d",
        now: datetime | None = None,
    ) -> dict[str, MeasurementTrend]:
        now = now or datetime.now(tz=UTC)
        if measurement is not None and measurement not in MEASUREMENTS:
            raise InvalidInputError(f"Unknown measurement: {measurement}")
        entries = self._oldest_first(
            user_id, "body-measurements", window_start(period, now), now
        )
        names = (measurement,) if measurement else MEASUREMENTS
        return measurement_trends(entries, names)

    def get_performance_analytics(
        self,
        user_id: UUID,
        exercise: str | None = None,
        period: str = "90d",
        now: datetime | None = None,
    ) -> dict[str, PerformanceTrend]:
        """Improvement per exercise, optionally filtered by a name fragment."""
        now = now or datetime.now(tz=UTC)
        entries = self._oldest_first(
            user_id, "performance", window_start(period, now), now
        )
        if exercise:
            needle = exercise.lower()
            entries = [
                entry
                for entry in entries
                if needle in str(entry.data["exercise"]).lower()
            ]
        return performance_trends(entries)

    def get_summary(
        self, user_id: UUID, now: datetime | None = None
    ) -> ProgressSummary:
        now = now or datetime.now(tz=UTC)
        entries, _ = self.repository.list_entries(
            user_id, start=now - timedelta(days=SUMMARY_DAYS), end=now
        )
        return summarize(entries)

    def _oldest_first(
        self, user_id: UUID, type_: str, start: datetime, end: datetime
    ) -> list[ProgressEntry]:
        entries, _ = self.repository.list_entries(user_id, type_, start, end)
        return list(reversed(entries))


def _is_positive(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value > 0


def _direction(change: float) -> str:
    if change > STABLE_WEIGHT_DELTA:
        return "increasing"
    if change < -STABLE_WEIGHT_DELTA:
        return "decreasing"
    return "stable"


def _percentage(change: float, base: float) -> float:
    if base == 0:
        return 0.0
    return round(change / base * 100, 2)
