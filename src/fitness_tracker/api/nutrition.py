"""Food catalogue, daily nutrition entries and nutrition analytics endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, status

from fitness_tracker.api.dependencies import (
    PageParams,
    get_container,
    get_current_user,
    get_page_params,
)
from fitness_tracker.api.models import (  # noqa: TC001
    AnalyticsPeriod,
    FoodCategory,
    FoodCreate,
    NutritionEntryCreate,
)
from fitness_tracker.api.serializers import (
    pagination,
    serialize_food,
    serialize_summary,
    to_json,
)
from fitness_tracker.containers import AppContainer  # noqa: TC001
from fitness_tracker.domain.foods import NutritionProfile, ServingSize
from fitness_tracker.domain.nutrition import FoodItemInput, MealInput, WaterIntake
from fitness_tracker.domain.users import UserRecord  # noqa: TC001

router = APIRouter(prefix="/nutrition", tags=["nutrition"])


@router.get("/foods")
async def search_foods(  # noqa: PLR0913
    search: str | None = None,
    category: FoodCategory | None = None,
    verified: bool | None = None,
    paging: PageParams = Depends(get_page_params),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Search public foods and the caller's custom foods."""
    foods, total = container.food_service.search(
        user.id,
        search=search,
        category=category,
        verified=verified,
        page=paging.page,
        limit=paging.limit,
    )
    return {
        "foods": [serialize_food(food) for food in foods],
        "pagination": pagination(paging.page, paging.limit, total),
    }


@router.get("/foods/{food_id}")
async def food_detail(
    food_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    return serialize_food(container.food_service.get_food(user.id, food_id))


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(
    body: FoodCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create a custom food owned by the caller."""
    food = container.food_service.create_custom_food(
        user.id,
        {
            "name": body.name,
            "brand": body.brand,
            "barcode": body.barcode,
            "category": body.category,
            "nutrition": NutritionProfile(**body.nutrition_per_100g.model_dump()),
            "serving_sizes": [
                ServingSize(**serving.model_dump()) for serving in body.serving_sizes
            ],
        },
    )
    return serialize_food(food)


@router.get("/entries")
async def list_entries(
    start_date: date | None = None,
    end_date: date | None = None,
    paging: PageParams = Depends(get_page_params),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's entries, newest first."""
    entries, total = container.nutrition_entry_service.list_entries(
        user.id, start_date, end_date, page=paging.page, limit=paging.limit
    )
    return {
        "entries": to_json(entries),
        "pagination": pagination(paging.page, paging.limit, total),
    }


@router.get("/entries/{entry_date}")
async def entry_for_date(
    entry_date: date,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    entry = container.nutrition_entry_service.get_entry(user.id, entry_date)
    return to_json(entry)


@router.post("/entries", status_code=status.HTTP_201_CREATED)
async def log_entry(
    body: NutritionEntryCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create or overwrite the caller's entry for a day."""
    meals = [
        MealInput(
            type=meal.type,
            foods=[
                FoodItemInput(food_id=item.food, quantity=item.quantity, unit=item.unit)
                for item in meal.foods
            ],
            notes=meal.notes,
        )
        for meal in body.meals
    ]
    water_intake = (
        WaterIntake(amount=body.water_intake.amount, unit=body.water_intake.unit)
        if body.water_intake
        else None
    )
    entry = container.nutrition_entry_service.log_day(
        user.id, body.date, meals, water_intake
    )
    return to_json(entry)


@router.get("/analytics")
async def nutrition_analytics(
    period: AnalyticsPeriod = "month",
    start_date: date | None = None,
    end_date: date | None = None,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return averages, trends and top foods for a period."""
    summary = container.stats_service.get_summary(
        user.id, period=period, start=start_date, end=end_date
    )
    return serialize_summary(summary)
