"""Domain models for the food catalogue."""

from dataclasses import dataclass, field
from uuid import UUID

FOOD_CATEGORIES = (
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
)

FOOD_UNITS = ("g", "ml", "oz", "cup", "piece")


@dataclass(frozen=True)
class NutritionProfile:
    """Nutrition values per 100 units of a food."""

    calories: float
    protein: float
    carbohydrates: float
    fat: float
    fiber: float = 0.0
    sugar: float = 0.0
    sodium: float = 0.0


@dataclass(frozen=True)
class ServingSize:
    """Named serving size for a food."""

    name: str
    weight: float
    unit: str = "g"


@dataclass(frozen=True)
class Food:
    """Reusable nutrition profile record."""

    id: UUID
    name: str
    nutrition: NutritionProfile
    brand: str | None = None
    barcode: str | None = None
    category: str = "other"
    serving_sizes: list[ServingSize] = field(default_factory=list)
    is_custom: bool = False
    created_by: UUID | None = None
    verified: bool = False
