"""Request models validating API payloads."""

from datetime import UTC, date, datetime
from typing import Annotated, Any, Literal
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

FoodCategory = Literal[
    "vegetables",
    "fruits",
    "grains",
    "protein",
    "dairy",
    "fats-oils",
    "beverages",
    "snacks",
    "condiments",
    "supplements",
    "other",
]
FoodUnit = Literal["g", "ml", "oz", "cup", "piece"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
WaterUnit = Literal["ml", "oz", "cups"]
GoalCategory = Literal[
    "weight-loss",
    "weight-gain",
    "muscle-gain",
    "strength",
    "endurance",
    "flexibility",
    "general-fitness",
]
GoalPriority = Literal["low", "medium", "high"]
GoalStatus = Literal["active", "paused", "completed", "cancelled"]
ReminderFrequency = Literal["daily", "weekly", "monthly", "none"]
AnalyticsPeriod = Literal["week", "month", "year"]
ProgressType = Literal["weight", "body-measurements", "performance", "photo"]
MeasurementName = Literal["chest", "waist", "hips", "arms", "thighs", "neck"]
ProgressWindow = Literal["7d", "30d", "90d", "1y"]


def assume_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=UTC) if value.tzinfo is None else value


UtcDatetime = Annotated[datetime, AfterValidator(assume_utc)]


class NutritionPer100g(BaseModel):
    """Nutrition values per 100 units."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbohydrates: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(default=0.0, ge=0)
    sugar: float = Field(default=0.0, ge=0)
    sodium: float = Field(default=0.0, ge=0)


class ServingSizeIn(BaseModel):
    name: str = Field(min_length=1)
    weight: float = Field(ge=0)
    unit: FoodUnit = "g"


class FoodCreate(BaseModel):
    """Custom food submitted by a user."""

    name: str = Field(min_length=1, max_length=100)
    brand: str | None = Field(default=None, max_length=50)
    barcode: str | None = Field(default=None, pattern=r"^\d{8,14}$")
    nutrition_per_100g: NutritionPer100g
    category: FoodCategory
    serving_sizes: list[ServingSizeIn] = Field(default_factory=list)


class FoodItemIn(BaseModel):
    food: UUID
    quantity: float = Field(ge=0.1, allow_inf_nan=False)
    unit: FoodUnit = "g"


class MealIn(BaseModel):
    type: MealType
    foods: list[FoodItemIn]
    notes: str | None = Field(default=None, max_length=200)


class WaterIntakeIn(BaseModel):
    amount: float = Field(ge=0)
    unit: WaterUnit = "ml"


class NutritionEntryCreate(BaseModel):
    """A day's meals to log or overwrite."""

    date: date
    meals: list[MealIn]
    water_intake: WaterIntakeIn | None = None


class MilestoneIn(BaseModel):
    id: UUID | None = None
    title: str = Field(min_length=1)
    target_value: float = Field(ge=0)
    achieved: bool = False
    achieved_date: UtcDatetime | None = None
    notes: str | None = Field(default=None, max_length=500)


class GoalCreate(BaseModel):
    """New goal definition."""

    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    category: GoalCategory
    priority: GoalPriority = "medium"
    target_value: float = Field(ge=0, allow_inf_nan=False)
    current_value: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    unit: str = Field(min_length=1)
    target_date: date
    milestones: list[MilestoneIn] = Field(default_factory=list)
    reminder_frequency: ReminderFrequency | None = None
    is_public: bool = False


class GoalUpdate(BaseModel):
    """Partial goal edit; only fields that were sent are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    category: GoalCategory | None = None
    priority: GoalPriority | None = None
    target_value: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    current_value: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    unit: str | None = Field(default=None, min_length=1)
    target_date: date | None = None
    status: GoalStatus | None = None
    milestones: list[MilestoneIn] | None = None
    reminder_frequency: ReminderFrequency | None = None
    is_public: bool | None = None


class ProgressUpdate(BaseModel):
    value: float = Field(allow_inf_nan=False)
    notes: str | None = Field(default=None, max_length=500)
    date: UtcDatetime | None = None


class MilestoneComplete(BaseModel):
    notes: str | None = Field(default=None, max_length=500)


class ProgressEntryCreate(BaseModel):
    """New body progress entry; ``data`` is checked against ``type``."""

    type: ProgressType
    date: UtcDatetime | None = None
    data: dict[str, Any]
    notes: str | None = Field(default=None, max_length=500)


class ProgressEntryUpdate(BaseModel):
    data: dict[str, Any] | None = None
    notes: str | None = Field(default=None, max_length=500)
