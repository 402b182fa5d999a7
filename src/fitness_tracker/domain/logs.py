"""Domain models for the food catalog and activity logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class FoodItem:
    """Catalog food with nutrition per serving."""

    id: UUID
    name: str
    brand: str | None
    serving_size_g: float | None
    calories: float | None
    protein_g: float | None
    fat_g: float | None
    carbs_g: float | None
    fiber_g: float | None
    sugar_g: float | None
    sodium_mg: float | None
    is_custom: bool = False
    created_by: UUID | None = None


@dataclass(frozen=True)
class FoodLogEntry:
    """A logged portion of a food item."""

    id: UUID
    user_id: UUID
    food: FoodItem
    meal_type_id: int
    meal_type_name: str | None
    quantity: float
    log_date: date
    created_at: datetime | None

    @property
    def calories(self) -> float:
        """Calories for the logged quantity."""
        return (self.food.calories or 0.0) * self.quantity

    @property
    def protein_g(self) -> float:
        """Protein for the logged quantity."""
        return (self.food.protein_g or 0.0) * self.quantity

    @property
    def fat_g(self) -> float:
        """Fat for the logged quantity."""
        return (self.food.fat_g or 0.0) * self.quantity

    @property
    def carbs_g(self) -> float:
        """Carbs for the logged quantity."""
        return (self.food.carbs_g or 0.0) * self.quantity

    @property
    def fiber_g(self) -> float:
        """Fiber for the logged quantity."""
        return (self.food.fiber_g or 0.0) * self.quantity


@dataclass(frozen=True)
class Exercise:
    """Catalog exercise."""

    id: UUID
    name: str


@dataclass(frozen=True)
class ExerciseLogEntry:
    """A logged workout."""

    id: UUID
    user_id: UUID
    exercise: Exercise
    duration_minutes: int
    calories_burned: float
    log_date: date
    created_at: datetime | None


@dataclass(frozen=True)
class NutritionTotals:
    """Summed nutrition for a set of food log entries."""

    calories: float
    protein_g: float
    fat_g: float
    carbs_g: float
    fiber_g: float


@dataclass(frozen=True)
class DailyFoodLog:
    """Food log entries for one day with their totals."""

    day: date
    entries: list[FoodLogEntry]
    totals: NutritionTotals


@dataclass(frozen=True)
class ReferenceItem:
    """Lookup row such as an activity level, goal or meal type."""

    id: int
    name: str
