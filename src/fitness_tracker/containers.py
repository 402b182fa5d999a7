"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from fitness_tracker.adapters.supabase_food_repository import (
    SupabaseFoodCatalogRepository,
    SupabaseFoodLogRepository,
)
from fitness_tracker.adapters.supabase_goal_repository import SupabaseGoalRepository
from fitness_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from fitness_tracker.adapters.supabase_reference_repository import (
    SupabaseReferenceRepository,
)
from fitness_tracker.config import Settings
from fitness_tracker.services.cache import InMemoryCache
from fitness_tracker.services.exercise import ExerciseService
from fitness_tracker.services.food import FoodService
from fitness_tracker.services.goals import GoalService
from fitness_tracker.services.profile import ProfileService
from fitness_tracker.services.reference import ReferenceService
from fitness_tracker.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    goal_service: GoalService
    profile_service: ProfileService
    stats_service: StatsService
    food_service: FoodService
    exercise_service: ExerciseService
    reference_service: ReferenceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    A single Supabase client is created here and shared by every repository
    for the life of the process.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    goal_repository = SupabaseGoalRepository(supabase_client)
    food_log_repository = SupabaseFoodLogRepository(supabase_client)
    exercise_repository = SupabaseExerciseRepository(supabase_client)

    goal_service = GoalService(
        goal_repository=goal_repository,
        profile_repository=profile_repository,
    )
    profile_service = ProfileService(
        repository=profile_repository,
        goal_service=goal_service,
    )
    stats_service = StatsService(
        food_log_repository=food_log_repository,
        exercise_log_repository=exercise_repository,
        goal_service=goal_service,
        timezone_name=resolved_settings.timezone,
    )
    food_service = FoodService(
        catalog_repository=SupabaseFoodCatalogRepository(supabase_client),
        log_repository=food_log_repository,
    )
    exercise_service = ExerciseService(exercise_repository)
    reference_service = ReferenceService(
        repository=SupabaseReferenceRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.reference_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        supabase_client.postgrest.session.close()

    return AppContainer(
        settings=resolved_settings,
        goal_service=goal_service,
        profile_service=profile_service,
        stats_service=stats_service,
        food_service=food_service,
        exercise_service=exercise_service,
        reference_service=reference_service,
        close_resources=close_resources,
    )
