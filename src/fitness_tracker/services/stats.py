"""Nutrition analytics over logged entries."""

import calendar
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from uuid import UUID

from fitness_tracker.domain.nutrition import MEAL_TYPES, NutritionEntry
from fitness_tracker.domain.stats import DailyTrend, FoodFrequency, NutritionSummary
from fitness_tracker.services.errors import InvalidInputError
from fitness_tracker.services.foods import FoodRepository
from fitness_tracker.services.nutrition import (
    NutritionEntryRepository,
    round_calories,
)

PERIODS = ("week", "month", "year")
TOP_FOODS_LIMIT = 10


def shift_months(day: date, months: int) -> date:
    """Move a date by whole months, clamping to the target month's length."""
    index = day.month - 1 + months
    year = day.year + index // 12
    month = index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))


def period_bounds(period: str, end: date) -> tuple[date, date]:
    """Return the start and end dates of a period ending on ``end``."""
    if period == "week":
        return end - timedelta(days=7), end
    if period == "month":
        return shift_months(end, -1), end
    if period == "year":
        return shift_months(end, -12), end
    raise InvalidInputError(f"Unknown period: {period}")


@dataclass
class StatsService:
    """Service for computing nutrition analytics."""

    repository: NutritionEntryRepository
    food_repository: FoodRepository

    def get_summary(  # noqa: PLR0913
        self,
        user_id: UUID,
        period: str = "month",
        start: date | None = None,
        end: date | None = None,
        today: date | None = None,
    ) -> NutritionSummary:
        """Return averages, trends and top foods for a date range."""
        if start and end:
            if start > end:
                raise InvalidInputError("Start date must not be after end date")
        else:
            start, end = period_bounds(period, today or datetime.now(tz=UTC).date())

        entries, _ = self.repository.list_entries(user_id, start, end)
        entries = sorted(entries, key=lambda entry: entry.date)
        return self._summarize(start, end, entries)

    def _summarize(
        self, start: date, end: date, entries: list[NutritionEntry]
    ) -> NutritionSummary:
        days = len(entries)
        distribution = dict.fromkeys(MEAL_TYPES, 0)
        frequency: dict[UUID, int] = {}
        trends = []
        for entry in entries:
            totals = entry.daily_totals
            trends.append(
                DailyTrend(
                    day=entry.date,
                    calories=totals.calories,
                    protein=totals.protein,
                    carbohydrates=totals.carbohydrates,
                    fat=totals.fat,
                )
            )
            for meal in entry.meals:
                distribution[meal.type] = distribution.get(meal.type, 0) + 1
                for line in meal.foods:
                    frequency[line.food_id] = frequency.get(line.food_id, 0) + 1

        return NutritionSummary(
            start=start,
            end=end,
            total_days=days,
            average_calories=_average(trends, "calories", days),
            average_protein=_average(trends, "protein", days),
            average_carbohydrates=_average(trends, "carbohydrates", days),
            average_fat=_average(trends, "fat", days),
            total_water_intake=sum(entry.water_intake.amount for entry in entries),
            trends=trends,
            meal_distribution=distribution,
            top_foods=self._top_foods(frequency),
        )

    def _top_foods(self, frequency: dict[UUID, int]) -> list[FoodFrequency]:
        ranked = sorted(frequency, key=lambda food_id: frequency[food_id], reverse=True)
        top_ids = ranked[:TOP_FOODS_LIMIT]
        if not top_ids:
            return []
        foods = {food.id: food for food in self.food_repository.get_foods(top_ids)}
        return [
            FoodFrequency(food=foods[food_id], frequency=frequency[food_id])
            for food_id in top_ids
            if food_id in foods
        ]


def _average(trends: list[DailyTrend], attribute: str, days: int) -> float:
    if days == 0:
        return 0.0
    return round_calories(sum(getattr(trend, attribute) for trend in trends) / days)
