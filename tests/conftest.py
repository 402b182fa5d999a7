"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, time
from uuid import UUID, uuid4

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.goals import DailyGoal, DailyGoalTargets
from fitness_tracker.domain.logs import (
    Exercise,
    ExerciseLogEntry,
    FoodItem,
    FoodLogEntry,
    ReferenceItem,
)
from fitness_tracker.domain.profile import Gender, Profile
from fitness_tracker.services.cache import InMemoryCache
from fitness_tracker.services.exercise import ExerciseLogRepository, ExerciseService
from fitness_tracker.services.food import (
    FoodCatalogRepository,
    FoodLogRepository,
    FoodService,
)
from fitness_tracker.services.goals import DailyGoalRepository, GoalService
from fitness_tracker.services.profile import ProfileRepository, ProfileService
from fitness_tracker.services.reference import ReferenceRepository, ReferenceService
from fitness_tracker.services.stats import StatsService

API_TOKEN = "api-token"


def make_food(  # noqa: PLR0913
    name: str = "Banana",
    calories: float | None = 100,
    protein_g: float | None = 10,
    fat_g: float | None = 2,
    carbs_g: float | None = 15,
    fiber_g: float | None = 1,
) -> FoodItem:
    return FoodItem(
        id=uuid4(),
        name=name,
        brand=None,
        serving_size_g=100,
        calories=calories,
        protein_g=protein_g,
        fat_g=fat_g,
        carbs_g=carbs_g,
        fiber_g=fiber_g,
        sugar_g=None,
        sodium_mg=None,
    )


def make_food_log(  # noqa: PLR0913
    user_id: UUID,
    log_date: date,
    food: FoodItem | None = None,
    quantity: float = 1.0,
    meal_type_name: str | None = "Breakfast",
    created_at: datetime | None = None,
) -> FoodLogEntry:
    return FoodLogEntry(
        id=uuid4(),
        user_id=user_id,
        food=food or make_food(),
        meal_type_id=1,
        meal_type_name=meal_type_name,
        quantity=quantity,
        log_date=log_date,
        created_at=created_at or datetime.combine(log_date, time(12, 0), tzinfo=UTC),
    )


def make_exercise_log(  # noqa: PLR0913
    user_id: UUID,
    log_date: date,
    name: str = "Running",
    duration_minutes: int = 30,
    calories_burned: float = 300,
    created_at: datetime | None = None,
) -> ExerciseLogEntry:
    return ExerciseLogEntry(
        id=uuid4(),
        user_id=user_id,
        exercise=Exercise(id=uuid4(), name=name),
        duration_minutes=duration_minutes,
        calories_burned=calories_burned,
        log_date=log_date,
        created_at=created_at or datetime.combine(log_date, time(18, 0), tzinfo=UTC),
    )


def make_profile(user_id: UUID, **overrides: object) -> Profile:
    values: dict[str, object] = {
        "user_id": user_id,
        "birth_date": date(2000, 1, 1),
        "gender": Gender.MALE,
        "height_cm": 175.0,
        "weight_kg": 70.5,
        "activity_level_id": 2,
        "goal_id": 2,
    }
    values.update(overrides)
    return Profile(**values)


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        current = self.profiles.get(user_id) or Profile(
            user_id=user_id,
            birth_date=None,
            gender=None,
            height_cm=None,
            weight_kg=None,
            activity_level_id=None,
            goal_id=None,
        )
        updated = replace(current, **payload)
        self.profiles[user_id] = updated
        return updated


@dataclass
class InMemoryGoalRepository(DailyGoalRepository):
    """In-memory goal repository keyed by user and day."""

    goals: dict[tuple[UUID, date], DailyGoal] = field(default_factory=dict)

    def get_daily_goal(self, user_id: UUID, day: date) -> DailyGoal | None:
        return self.goals.get((user_id, day))

    def upsert_daily_goal(
        self, user_id: UUID, day: date, targets: DailyGoalTargets
    ) -> DailyGoal:
        goal = DailyGoal(user_id=user_id, day=day, targets=targets)
        self.goals[(user_id, day)] = goal
        return goal

    def insert_daily_goal_if_absent(
        self, user_id: UUID, day: date, targets: DailyGoalTargets
    ) -> DailyGoal:
        key = (user_id, day)
        if key not in self.goals:
            self.goals[key] = DailyGoal(user_id=user_id, day=day, targets=targets)
        return self.goals[key]


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)

    def add(self, food: FoodItem) -> FoodItem:
        self.foods[food.id] = food
        return food

    def search_foods(self, query: str, limit: int) -> list[FoodItem]:
        query_lower = query.lower()
        return [
            food for food in self.foods.values() if query_lower in food.name.lower()
        ][:limit]

    def get_food(self, food_id: UUID) -> FoodItem | None:
        return self.foods.get(food_id)

    def create_food(self, created_by: UUID, payload: dict[str, object]) -> FoodItem:
        food = FoodItem(
            id=uuid4(),
            name=str(payload["name"]),
            brand=payload.get("brand"),
            serving_size_g=payload.get("serving_size_g"),
            calories=payload.get("calories"),
            protein_g=payload.get("protein_g"),
            fat_g=payload.get("fat_g"),
            carbs_g=payload.get("carbs_g"),
            fiber_g=payload.get("fiber_g"),
            sugar_g=payload.get("sugar_g"),
            sodium_mg=payload.get("sodium_mg"),
            is_custom=True,
            created_by=created_by,
        )
        return self.add(food)


@dataclass
class InMemoryFoodLogRepository(FoodLogRepository):
    """In-memory food log repository backed by a catalog."""

    catalog: InMemoryFoodCatalogRepository = field(
        default_factory=InMemoryFoodCatalogRepository
    )
    logs: dict[UUID, FoodLogEntry] = field(default_factory=dict)
    meal_types: dict[int, str] = field(
        default_factory=lambda: {1: "Breakfast", 2: "Lunch", 3: "Dinner", 4: "Snack"}
    )

    def add(self, *entries: FoodLogEntry) -> None:
        for entry in entries:
            self.logs[entry.id] = entry

    def list_food_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogEntry]:
        return [
            log
            for log in self.logs.values()
            if log.user_id == user_id and start <= log.log_date <= end
        ]

    def list_recent_food_logs(
        self, user_id: UUID, since: date, until: date, limit: int
    ) -> list[FoodLogEntry]:
        logs = [
            log
            for log in self.logs.values()
            if log.user_id == user_id and since <= log.log_date <= until
        ]
        logs.sort(
            key=lambda log: log.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        return logs[:limit]

    def get_food_log(self, log_id: UUID) -> FoodLogEntry | None:
        return self.logs.get(log_id)

    def create_food_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_item_id: UUID,
        meal_type_id: int,
        quantity: float,
        log_date: date,
    ) -> FoodLogEntry:
        entry = FoodLogEntry(
            id=uuid4(),
            user_id=user_id,
            food=self.catalog.foods[food_item_id],
            meal_type_id=meal_type_id,
            meal_type_name=self.meal_types.get(meal_type_id),
            quantity=quantity,
            log_date=log_date,
            created_at=datetime.now(tz=UTC),
        )
        self.logs[entry.id] = entry
        return entry

    def update_food_log_quantity(self, log_id: UUID, quantity: float) -> FoodLogEntry:
        updated = replace(self.logs[log_id], quantity=quantity)
        self.logs[log_id] = updated
        return updated

    def delete_food_log(self, log_id: UUID) -> None:
        self.logs.pop(log_id, None)


@dataclass
class InMemoryExerciseRepository(ExerciseLogRepository):
    """In-memory exercise repository for tests."""

    exercises: dict[UUID, Exercise] = field(default_factory=dict)
    logs: dict[UUID, ExerciseLogEntry] = field(default_factory=dict)

    def add(self, *entries: ExerciseLogEntry) -> None:
        for entry in entries:
            self.logs[entry.id] = entry

    def search_exercises(self, query: str, limit: int) -> list[Exercise]:
        query_lower = query.lower()
        return [
            exercise
            for exercise in self.exercises.values()
            if query_lower in exercise.name.lower()
        ][:limit]

    def get_exercise(self, exercise_id: UUID) -> Exercise | None:
        return self.exercises.get(exercise_id)

    def list_exercise_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExerciseLogEntry]:
        return [
            log
            for log in self.logs.values()
            if log.user_id == user_id and start <= log.log_date <= end
        ]

    def list_recent_exercise_logs(
        self, user_id: UUID, since: date, until: date, limit: int
    ) -> list[ExerciseLogEntry]:
        logs = [
            log
            for log in self.logs.values()
            if log.user_id == user_id and since <= log.log_date <= until
        ]
        logs.sort(
            key=lambda log: log.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )
        return logs[:limit]

    def count_exercise_logs(self, user_id: UUID) -> int:
        return sum(1 for log in self.logs.values() if log.user_id == user_id)

    def get_exercise_log(self, log_id: UUID) -> ExerciseLogEntry | None:
        return self.logs.get(log_id)

    def create_exercise_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        exercise_id: UUID,
        duration_minutes: int,
        calories_burned: float,
        log_date: date,
    ) -> ExerciseLogEntry:
        entry = ExerciseLogEntry(
            id=uuid4(),
            user_id=user_id,
            exercise=self.exercises[exercise_id],
            duration_minutes=duration_minutes,
            calories_burned=calories_burned,
            log_date=log_date,
            created_at=datetime.now(tz=UTC),
        )
        self.logs[entry.id] = entry
        return entry

    def delete_exercise_log(self, log_id: UUID) -> None:
        self.logs.pop(log_id, None)


@dataclass
class InMemoryReferenceRepository(ReferenceRepository):
    """In-memory lookup tables that count loads."""

    loads: int = 0

    def list_activity_levels(self) -> list[ReferenceItem]:
        self.loads += 1
        return [
            ReferenceItem(id=1, name="Sedentary"),
            ReferenceItem(id=2, name="Lightly active"),
            ReferenceItem(id=3, name="Moderately active"),
            ReferenceItem(id=4, name="Very active"),
        ]

    def list_goals(self) -> list[ReferenceItem]:
        self.loads += 1
        return [
            ReferenceItem(id=1, name="Lose weight"),
            ReferenceItem(id=2, name="Maintain weight"),
            ReferenceItem(id=3, name="Gain weight"),
        ]

    def list_meal_types(self) -> list[ReferenceItem]:
        self.loads += 1
        return [
            ReferenceItem(id=1, name="Breakfast"),
            ReferenceItem(id=2, name="Lunch"),
            ReferenceItem(id=3, name="Dinner"),
            ReferenceItem(id=4, name="Snack"),
        ]


@dataclass
class Repositories:
    """Bundle of in-memory repositories shared by a test's services."""

    profiles: InMemoryProfileRepository = field(
        default_factory=InMemoryProfileRepository
    )
    goals: InMemoryGoalRepository = field(default_factory=InMemoryGoalRepository)
    food_logs: InMemoryFoodLogRepository = field(
        default_factory=InMemoryFoodLogRepository
    )
    exercises: InMemoryExerciseRepository = field(
        default_factory=InMemoryExerciseRepository
    )
    reference: InMemoryReferenceRepository = field(
        default_factory=InMemoryReferenceRepository
    )


def build_goal_service(repos: Repositories) -> GoalService:
    return GoalService(
        goal_repository=repos.goals, profile_repository=repos.profiles
    )


def build_stats_service(repos: Repositories) -> StatsService:
    return StatsService(
        food_log_repository=repos.food_logs,
        exercise_log_repository=repos.exercises,
        goal_service=build_goal_service(repos),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        api_token=API_TOKEN,
    )


@pytest.fixture
def repos() -> Repositories:
    return Repositories()


@pytest.fixture
def container(settings: Settings, repos: Repositories) -> AppContainer:
    goal_service = build_goal_service(repos)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        goal_service=goal_service,
        profile_service=ProfileService(
            repository=repos.profiles, goal_service=goal_service
        ),
        stats_service=StatsService(
            food_log_repository=repos.food_logs,
            exercise_log_repository=repos.exercises,
            goal_service=goal_service,
            timezone_name=settings.timezone,
        ),
        food_service=FoodService(
            catalog_repository=repos.food_logs.catalog,
            log_repository=repos.food_logs,
        ),
        exercise_service=ExerciseService(repos.exercises),
        reference_service=ReferenceService(
            repository=repos.reference, cache=InMemoryCache()
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Api-Token": API_TOKEN, "X-User-Id": str(uuid4())}
