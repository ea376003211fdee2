"""Food catalogue services."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.foods import Food
from fitness_tracker.services.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def get_foods(self, food_ids: list[UUID]) -> list[Food]:
        """Return all foods matching the given ids."""

    def find_by_barcode(self, barcode: str) -> Food | None:
        """Return the food with a barcode, if present."""

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

    def create_food(self, payload: dict[str, object]) -> Food:
        """Create a food and return it."""


@dataclass
class FoodService:
    """Application service for the food catalogue."""

    repository: FoodRepository

    def search(  # noqa: PLR0913
        self,
        user_id: UUID,
        search: str | None = None,
        category: str | None = None,
        verified: bool | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> tuple[list[Food], int]:
        """Search visible foods, verified first then by name."""
        foods, total = self.repository.search_foods(
            user_id,
            search.strip() if search else None,
            category,
            verified,
            offset=(page - 1) * limit,
            limit=limit,
        )
        return sorted(foods, key=lambda food: (not food.verified, food.name)), total

    def get_food(self, user_id: UUID, food_id: UUID) -> Food:
        """Return a public food or one of the user's custom foods."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food not found")
        if food.is_custom and food.created_by != user_id:
            raise AccessDeniedError("Access denied")
        return food

    def create_custom_food(self, user_id: UUID, payload: dict[str, object]) -> Food:
        """Create an unverified custom food owned by the user."""
        barcode = payload.get("barcode")
        if barcode and self.repository.find_by_barcode(str(barcode)):
            raise ConflictError("Food with this barcode already exists")
        return self.repository.create_food(
            {
                **payload,
                "is_custom": True,
                "created_by": user_id,
                "verified": False,
            }
        )
