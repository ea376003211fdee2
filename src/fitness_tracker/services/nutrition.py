"""Nutrition entry computation and persistence."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.foods import Food
from fitness_tracker.domain.nutrition import (
    DailyTotals,
    FoodItemInput,
    FoodLine,
    Meal,
    MealInput,
    NutritionEntry,
    WaterIntake,
)
from fitness_tracker.services.errors import NotFoundError, ReferenceNotFoundError
from fitness_tracker.services.foods import FoodRepository

_logger = logging.getLogger(__name__)

FoodLookup = Callable[[UUID], Food | None]


class NutritionEntryRepository(Protocol):
    """Persistence interface for nutrition entries."""

    def get_entry_for_date(self, user_id: UUID, day: date) -> NutritionEntry | None:
        """Return the user's entry for a calendar day, if present."""

    def list_entries(
        self,
        user_id: UUID,
        start: date | None,
        end: date | None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[list[NutritionEntry], int]:
        """Return entries newest first plus the total matching count."""

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        meals: list[Meal],
        daily_totals: DailyTotals,
        water_intake: WaterIntake,
    ) -> NutritionEntry:
        """Create an entry and return it."""

    def update_entry(
        self,
        entry_id: UUID,
        meals: list[Meal],
        daily_totals: DailyTotals,
        water_intake: WaterIntake,
    ) -> NutritionEntry:
        """Replace an entry's meals and totals and return it."""


def compute_nutrition(
    meals: list[MealInput], find_food: FoodLookup
) -> tuple[list[Meal], DailyTotals]:
    """Derive line-item, meal and daily nutrition from per-100 food profiles.

    Any unknown food id aborts the whole computation with
    ``ReferenceNotFoundError`` so callers never persist partial meals. Line
    items are rounded first (whole calories, one-decimal macros) and meal and
    daily totals are summed from the rounded values.
    """
    processed: list[Meal] = []
    lines_seen: list[FoodLine] = []
    for meal in meals:
        lines = []
        for item in meal.foods:
            food = find_food(item.food_id)
            if food is None:
                raise ReferenceNotFoundError("Food", item.food_id)
            lines.append(compute_line(item, food))
        lines_seen.extend(lines)
        processed.append(
            Meal(
                type=meal.type,
                foods=lines,
                total_calories=round_calories(sum(line.calories for line in lines)),
                notes=meal.notes,
            )
        )
    return processed, sum_lines(lines_seen)


def compute_line(item: FoodItemInput, food: Food) -> FoodLine:
    """Scale a food's per-100 nutrition to the item's quantity."""
    multiplier = item.quantity / 100
    profile = food.nutrition
    return FoodLine(
        food_id=item.food_id,
        quantity=item.quantity,
        unit=item.unit,
        calories=round_calories(profile.calories * multiplier),
        protein=round_macro(profile.protein * multiplier),
        carbohydrates=round_macro(profile.carbohydrates * multiplier),
        fat=round_macro(profile.fat * multiplier),
    )


def sum_lines(lines: list[FoodLine]) -> DailyTotals:
    """Sum line items into rounded daily totals."""
    return DailyTotals(
        calories=round_calories(sum(line.calories for line in lines)),
        protein=round_macro(sum(line.protein for line in lines)),
        carbohydrates=round_macro(sum(line.carbohydrates for line in lines)),
        fat=round_macro(sum(line.fat for line in lines)),
    )


def round_calories(value: float) -> float:
    return _round_half_up(value, 0)


def round_macro(value: float) -> float:
    return _round_half_up(value, 1)


def _round_half_up(value: float, digits: int) -> float:
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class NutritionEntryService:
    """Service that derives nutrition totals and upserts daily entries."""

    food_repository: FoodRepository
    repository: NutritionEntryRepository

    def log_day(
        self,
        user_id: UUID,
        day: date,
        meals: list[MealInput],
        water_intake: WaterIntake | None = None,
    ) -> NutritionEntry:
        """Compute totals for a day's meals and create or overwrite the entry."""
        food_ids = list({item.food_id for meal in meals for item in meal.foods})
        foods = {food.id: food for food in self.food_repository.get_foods(food_ids)}
        processed, totals = compute_nutrition(meals, foods.get)

        existing = self.repository.get_entry_for_date(user_id, day)
        if existing:
            entry = self.repository.update_entry(
                existing.id,
                meals=processed,
                daily_totals=totals,
                water_intake=water_intake or existing.water_intake,
            )
        else:
            entry = self.repository.create_entry(
                user_id,
                day,
                meals=processed,
                daily_totals=totals,
                water_intake=water_intake or WaterIntake(),
            )
        _logger.info(
            "Nutrition entry saved: user_id=%s date=%s calories=%s",
            user_id,
            day,
            totals.calories,
        )
        return entry

    def get_entry(self, user_id: UUID, day: date) -> NutritionEntry:
        """Return the entry for a day or raise when none was logged."""
        entry = self.repository.get_entry_for_date(user_id, day)
        if entry is None:
            raise NotFoundError("No nutrition entry found for this date")
        return entry

    def list_entries(  # noqa: PLR0913
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        page: int = 1,
        limit: int = 30,
    ) -> tuple[list[NutritionEntry], int]:
        """Return a page of entries and the total count."""
        return self.repository.list_entries(
            user_id, start, end, offset=(page - 1) * limit, limit=limit
        )
