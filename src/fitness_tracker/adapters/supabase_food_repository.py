"""Supabase repository for the food catalogue."""

import re
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.foods import Food, NutritionProfile, ServingSize
from fitness_tracker.services.foods import FoodRepository

_UNSAFE_FILTER_CHARS = re.compile(r"[,()*%]")


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for foods."""

    client: Client

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_foods(self, food_ids: list[UUID]) -> list[Food]:
        """Return all foods matching the given ids."""
        if not food_ids:
            return []
        response = (
            self.client.table("foods")
            .select("*")
            .in_("id", [str(food_id) for food_id in food_ids])
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def find_by_barcode(self, barcode: str) -> Food | None:
        """Return the food with a barcode, if present."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("barcode", barcode)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def search_foods(  # noqa: PLR0913
        self,
        user_id: UUID,
        search: str | None,
        category: str | None,
        verified: bool | None,
        offset: int,
        limit: int,
    ) -> tuple[list[Food], int]:
        """Return public foods plus the user's custom foods and a total count."""
        query = (
            self.client.table("foods")
            .select("*", count="exact")
            .or_(_visibility_filter(user_id, search))
        )
        if category:
            query = query.eq("category", category)
        if verified is not None:
            query = query.eq("verified", verified)
        response = (
            query.order("verified", desc=True)
            .order("name", desc=False)
            .range(offset, offset + limit - 1)
            .execute()
        )
        foods = [_parse_food(row) for row in response.data or []]
        total = response.count if response.count is not None else len(foods)
        return foods, total

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food and return it."""
        response = self.client.table("foods").insert(_food_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food")
        return _parse_food(response.data[0])


def _visibility_filter(user_id: UUID, search: str | None) -> str:
    """Build an or-filter for public foods and the user's custom foods."""
    scopes = ["is_custom.eq.false", f"created_by.eq.{user_id}"]
    if not search:
        return ",".join(scopes)
    term = _UNSAFE_FILTER_CHARS.sub(" ", search).strip()
    match = f"or(name.ilike.*{term}*,brand.ilike.*{term}*)"
    return ",".join(f"and({scope},{match})" for scope in scopes)


def _food_row(payload: dict[str, object]) -> dict[str, object]:
    row = {
        key: payload.get(key)
        for key in ("name", "brand", "barcode", "category", "is_custom", "verified")
        if key in payload
    }
    nutrition = payload.get("nutrition")
    if isinstance(nutrition, NutritionProfile):
        row["nutrition_per_100g"] = {
            "calories": nutrition.calories,
            "protein": nutrition.protein,
            "carbohydrates": nutrition.carbohydrates,
            "fat": nutrition.fat,
            "fiber": nutrition.fiber,
            "sugar": nutrition.sugar,
            "sodium": nutrition.sodium,
        }
    serving_sizes = payload.get("serving_sizes") or []
    row["serving_sizes"] = [
        {"name": size.name, "weight": size.weight, "unit": size.unit}
        for size in serving_sizes
        if isinstance(size, ServingSize)
    ]
    created_by = payload.get("created_by")
    row["created_by"] = str(created_by) if created_by else None
    return row


def _parse_food(row: dict[str, object]) -> Food:
    """Parse a food row into a domain model."""
    nutrition = row.get("nutrition_per_100g") or {}
    created_by = row.get("created_by")
    return Food(
        id=UUID(row["id"]),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        barcode=row.get("barcode"),
        category=str(row.get("category") or "other"),
        nutrition=NutritionProfile(
            calories=float(nutrition.get("calories", 0.0)),
            protein=float(nutrition.get("protein", 0.0)),
            carbohydrates=float(nutrition.get("carbohydrates", 0.0)),
            fat=float(nutrition.get("fat", 0.0)),
            fiber=float(nutrition.get("fiber", 0.0)),
            sugar=float(nutrition.get("sugar", 0.0)),
            sodium=float(nutrition.get("sodium", 0.0)),
        ),
        serving_sizes=[
            ServingSize(
                name=str(size.get("name", "")),
                weight=float(size.get("weight", 0.0)),
                unit=str(size.get("unit") or "g"),
            )
            for size in row.get("serving_sizes") or []
        ],
        is_custom=bool(row.get("is_custom", False)),
        created_by=UUID(created_by) if created_by else None,
        verified=bool(row.get("verified", False)),
    )
