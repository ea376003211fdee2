"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from fitness_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from fitness_tracker.adapters.supabase_notification_repository import (
    SupabaseNotificationRepository,
)
from fitness_tracker.adapters.supabase_nutrition_entry_repository import (
    SupabaseNutritionEntryRepository,
)
from fitness_tracker.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from fitness_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from fitness_tracker.config import Settings
from fitness_tracker.services.foods import FoodService
from fitness_tracker.services.goals import GoalService
from fitness_tracker.services.notifications import NotificationService
from fitness_tracker.services.nutrition import NutritionEntryService
from fitness_tracker.services.progress import ProgressService
from fitness_tracker.services.stats import StatsService
from fitness_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    food_service: FoodService
    nutrition_entry_service: NutritionEntryService
    stats_service: StatsService
    goal_service: GoalService
    notification_service: NotificationService
    progress_service: ProgressService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    entry_repository = SupabaseNutritionEntryRepository(supabase_client)
    notification_service = NotificationService(
        SupabaseNotificationRepository(supabase_client)
    )
    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(SupabaseUserRepository(supabase_client)),
        food_service=FoodService(food_repository),
        nutrition_entry_service=NutritionEntryService(
            food_repository=food_repository,
            repository=entry_repository,
        ),
        stats_service=StatsService(
            repository=entry_repository,
            food_repository=food_repository,
        ),
        goal_service=GoalService(
            repository=SupabaseGoalRepository(supabase_client),
            notification_service=notification_service,
        ),
        notification_service=notification_service,
        progress_service=ProgressService(SupabaseProgressRepository(supabase_client)),
    )
