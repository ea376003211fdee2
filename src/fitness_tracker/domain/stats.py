"""Domain models for nutrition analytics."""

from dataclasses import dataclass
from datetime import date

from fitness_tracker.domain.foods import Food


@dataclass(frozen=True)
class DailyTrend:
    """Totals of a single logged day."""

    day: date
    calories: float
    protein: float
    carbohydrates: float
    fat: float


@dataclass(frozen=True)
class FoodFrequency:
    """How often a food appeared in the period."""

    food: Food
    frequency: int


@dataclass(frozen=True)
class NutritionSummary:
    """Aggregated nutrition analytics for a date range."""

    start: date
    end: date
    total_days: int
    average_calories: float
    average_protein: float
    average_carbohydrates: float
    average_fat: float
    total_water_intake: float
    trends: list[DailyTrend]
    meal_distribution: dict[str, int]
    top_foods: list[FoodFrequency]
