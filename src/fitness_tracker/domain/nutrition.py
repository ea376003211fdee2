"""Domain models for daily nutrition entries."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
WATER_UNITS = ("ml", "oz", "cups")


@dataclass(frozen=True)
class FoodItemInput:
    """A food reference and amount as submitted by the user."""

    food_id: UUID
    quantity: float
    unit: str = "g"


@dataclass(frozen=True)
class MealInput:
    """A meal as submitted by the user, before nutrition is derived."""

    type: str
    foods: list[FoodItemInput]
    notes: str | None = None


@dataclass(frozen=True)
class FoodLine:
    """A food item inside a meal with derived nutrition."""

    food_id: UUID
    quantity: float
    unit: str
    calories: float
    protein: float
    carbohydrates: float
    fat: float


@dataclass(frozen=True)
class Meal:
    """A meal with derived line items and calorie total."""

    type: str
    foods: list[FoodLine]
    total_calories: float
    notes: str | None = None


@dataclass(frozen=True)
class DailyTotals:
    """Calorie and macro totals for one day."""

    calories: float = 0.0
    protein: float = 0.0
    carbohydrates: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class WaterIntake:
    """Water consumed during a day."""

    amount: float = 0.0
    unit: str = "ml"


@dataclass(frozen=True)
class NutritionEntry:
    """One user's log of meals for one calendar day."""

    id: UUID
    user_id: UUID
    date: date
    meals: list[Meal]
    daily_totals: DailyTotals
    water_intake: WaterIntake = field(default_factory=WaterIntake)
