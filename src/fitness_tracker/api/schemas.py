"""Request models for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from fitness_tracker.domain.profile import Gender, age_on

MIN_AGE = 13
MAX_AGE = 120


def is_allowed_age(birth_date: date, today: date) -> bool:
    """Return True when the age on today is within the accepted range."""
    return MIN_AGE <= age_on(birth_date, today) <= MAX_AGE


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged.

    The birth date is range-checked by the route against today in the
    configured timezone.
    """

    birth_date: date | None = None
    gender: Gender | None = None
    height_cm: float | None = Field(default=None, ge=50, le=300)
    weight_kg: float | None = Field(default=None, ge=20, le=500)
    activity_level_id: int | None = Field(default=None, ge=1)
    goal_id: int | None = Field(default=None, ge=1)


class FoodCreate(BaseModel):
    """Custom food item; only the name is required."""

    name: str = Field(min_length=1)
    brand: str | None = None
    serving_size_g: float | None = Field(default=None, gt=0)
    calories: float | None = Field(default=None, ge=0)
    protein_g: float | None = Field(default=None, ge=0)
    fat_g: float | None = Field(default=None, ge=0)
    carbs_g: float | None = Field(default=None, ge=0)
    fiber_g: float | None = Field(default=None, ge=0)
    sugar_g: float | None = Field(default=None, ge=0)
    sodium_mg: float | None = Field(default=None, ge=0)


class FoodLogCreate(BaseModel):
    food_item_id: UUID
    meal_type_id: int
    quantity: float = Field(gt=0)
    log_date: date | None = None


class FoodLogUpdate(BaseModel):
    quantity: float = Field(gt=0)


class ExerciseLogCreate(BaseModel):
    exercise_id: UUID
    duration_minutes: int = Field(gt=0)
    calories_burned: float = Field(ge=0)
    log_date: date | None = None
