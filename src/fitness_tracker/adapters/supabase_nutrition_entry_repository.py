"""Supabase repository for daily nutrition entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.nutrition import (
    DailyTotals,
    FoodLine,
    Meal,
    NutritionEntry,
    WaterIntake,
)
from fitness_tracker.services.nutrition import NutritionEntryRepository


@dataclass
class SupabaseNutritionEntryRepository(NutritionEntryRepository):
    """Supabase implementation for nutrition entries."""

    client: Client

    def get_entry_for_date(self, user_id: UUID, day: date) -> NutritionEntry | None:
        """Return the user's entry for a calendar day, if present."""
        response = (
            self.client.table("nutrition_entries")
            .select("*")
            .eq("user_id", str(user_id))
            .eq("entry_date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries(
        self,
        user_id: UUID,
        start: date | None,
        end: date | None,
        offset: int = 0,
        limit: int | None = None,
    ) -> tuple[list[NutritionEntry], int]:
        """Return entries newest first plus the total matching count."""
        query = (
            self.client.table("nutrition_entries")
            .select("*", count="exact")
            .eq("user_id", str(user_id))
        )
        if start:
            query = query.gte("entry_date", start.isoformat())
        if end:
            query = query.lte("entry_date", end.isoformat())
        query = query.order("entry_date", desc=True)
        if limit is not None:
            query = query.range(offset, offset + limit - 1)
        response = query.execute()
        entries = [_parse_entry(row) for row in response.data or []]
        total = response.count if response.count is not None else len(entries)
        return entries, total

    def create_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        meals: list[Meal],
        daily_totals: DailyTotals,
        water_intake: WaterIntake,
    ) -> NutritionEntry:
        """Create an entry row and return it."""
        response = (
            self.client.table("nutrition_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "entry_date": day.isoformat(),
                    **_entry_body(meals, daily_totals, water_intake),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create nutrition entry")
        return _parse_entry(response.data[0])

    def update_entry(
        self,
        entry_id: UUID,
        meals: list[Meal],
        daily_totals: DailyTotals,
        water_intake: WaterIntake,
    ) -> NutritionEntry:
        """Replace an entry's meals and totals and return it."""
        response = (
            self.client.table("nutrition_entries")
            .update(
                {
                    **_entry_body(meals, daily_totals, water_intake),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(entry_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update nutrition entry")
        return _parse_entry(response.data[0])


def _entry_body(
    meals: list[Meal], daily_totals: DailyTotals, water_intake: WaterIntake
) -> dict[str, object]:
    return {
        "meals": [
            {
                "type": meal.type,
                "notes": meal.notes,
                "total_calories": meal.total_calories,
                "foods": [
                    {
                        "food_id": str(line.food_id),
                        "quantity": line.quantity,
                        "unit": line.unit,
                        "calories": line.calories,
                        "protein": line.protein,
                        "carbohydrates": line.carbohydrates,
                        "fat": line.fat,
                    }
                    for line in meal.foods
                ],
            }
            for meal in meals
        ],
        "daily_totals": {
            "calories": daily_totals.calories,
            "protein": daily_totals.protein,
            "carbohydrates": daily_totals.carbohydrates,
            "fat": daily_totals.fat,
        },
        "water_intake": {"amount": water_intake.amount, "unit": water_intake.unit},
    }


def _parse_entry(row: dict[str, object]) -> NutritionEntry:
    totals = row.get("daily_totals") or {}
    water = row.get("water_intake") or {}
    return NutritionEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        date=date.fromisoformat(str(row["entry_date"])[:10]),
        meals=[_parse_meal(meal) for meal in row.get("meals") or []],
        daily_totals=DailyTotals(
            calories=float(totals.get("calories", 0.0)),
            protein=float(totals.get("protein", 0.0)),
            carbohydrates=float(totals.get("carbohydrates", 0.0)),
            fat=float(totals.get("fat", 0.0)),
        ),
        water_intake=WaterIntake(
            amount=float(water.get("amount", 0.0)),
            unit=str(water.get("unit") or "ml"),
        ),
    )


def _parse_meal(raw: dict[str, object]) -> Meal:
    return Meal(
        type=str(raw.get("type", "")),
        notes=raw.get("notes"),
        total_calories=float(raw.get("total_calories", 0.0)),
        foods=[
            FoodLine(
                food_id=UUID(str(line["food_id"])),
                quantity=float(line.get("quantity", 0.0)),
                unit=str(line.get("unit") or "g"),
                calories=float(line.get("calories", 0.0)),
                protein=float(line.get("protein", 0.0)),
                carbohydrates=float(line.get("carbohydrates", 0.0)),
                fat=float(line.get("fat", 0.0)),
            )
            for line in raw.get("foods") or []
        ],
    )
