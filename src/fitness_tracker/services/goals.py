"""Daily nutrition goal calculation and resolution."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.goals import DEFAULT_GOALS, DailyGoal, DailyGoalTargets
from fitness_tracker.domain.profile import Gender, Profile
from fitness_tracker.services.profile import ProfileRepository

_BMR_OFFSETS = {
    Gender.MALE: 5.0,
    Gender.FEMALE: -161.0,
    Gender.OTHER: -78.0,
}

_CALORIE_FLOORS = {
    Gender.MALE: 1500.0,
    Gender.FEMALE: 1200.0,
    Gender.OTHER: 1350.0,
}

ACTIVITY_MULTIPLIERS = {
    1: 1.2,
    2: 1.375,
    3: 1.55,
    4: 1.725,
}
SEDENTARY_MULTIPLIER = ACTIVITY_MULTIPLIERS[1]

GOAL_LOSE = 1
GOAL_MAINTAIN = 2
GOAL_GAIN = 3
GOAL_ADJUSTMENT_KCAL = 500.0

PROTEIN_G_PER_KG = 1.8
FAT_CALORIE_SHARE = 0.30
KCAL_PER_G_PROTEIN = 4.0
KCAL_PER_G_CARBS = 4.0
KCAL_PER_G_FAT = 9.0

_logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_daily_goals(  # noqa: PLR0913
    age: int,
    gender: Gender | str,
    height_cm: float,
    weight_kg: float,
    activity_level_id: int,
    goal_id: int,
) -> DailyGoalTargets:
    """Compute calorie and macro targets with the Mifflin-St Jeor equation.

    Inputs are expected to be range-checked by the caller. Unknown activity
    levels fall back to the sedentary multiplier. Carbs are derived from the
    calories left after protein and fat and are not clamped, so extreme
    inputs can produce a negative carb target.
    """
    resolved_gender = Gender(gender)
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age + _BMR_OFFSETS[resolved_gender]
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level_id, SEDENTARY_MULTIPLIER)
    calories = bmr * multiplier

    if goal_id == GOAL_LOSE:
        calories -= GOAL_ADJUSTMENT_KCAL
    elif goal_id == GOAL_GAIN:
        calories += GOAL_ADJUSTMENT_KCAL
    calories = max(calories, _CALORIE_FLOORS[resolved_gender])

    protein_g = weight_kg * PROTEIN_G_PER_KG
    fat_calories = calories * FAT_CALORIE_SHARE
    fat_g = fat_calories / KCAL_PER_G_FAT
    protein_calories = protein_g * KCAL_PER_G_PROTEIN
    carbs_g = (calories - protein_calories - fat_calories) / KCAL_PER_G_CARBS

    return DailyGoalTargets(
        calories=round_half_up(calories),
        protein_g=round_half_up(protein_g),
        fat_g=round_half_up(fat_g),
        carbs_g=round_half_up(carbs_g),
    )


def compute_goals_for_profile(profile: Profile, day: date) -> DailyGoalTargets:
    """Compute targets for a complete profile as of the given day."""
    if not profile.is_complete:
        raise ValueError("Profile is incomplete")
    return compute_daily_goals(
        age=profile.age_on(day),
        gender=profile.gender,
        height_cm=profile.height_cm,
        weight_kg=profile.weight_kg,
        activity_level_id=profile.activity_level_id,
        goal_id=profile.goal_id,
    )


class DailyGoalRepository(Protocol):
    """Persistence interface for per-day goals."""

    def get_daily_goal(self, user_id: UUID, day: date) -> DailyGoal | None:
        """Return the goal row for the user and day, if present."""

    def upsert_daily_goal(
        self, user_id: UUID, day: date, targets: DailyGoalTargets
    ) -> DailyGoal:
        """Create or overwrite the goal row keyed by user and day."""

    def insert_daily_goal_if_absent(
        self, user_id: UUID, day: date, targets: DailyGoalTargets
    ) -> DailyGoal:
        """Insert the goal row unless one exists, returning the stored row."""


@dataclass
class GoalService:
    """Resolves the goal targets that apply to a user on a day."""

    goal_repository: DailyGoalRepository
    profile_repository: ProfileRepository

    def resolve_goal(self, user_id: UUID, day: date) -> DailyGoalTargets:
        """Return the stored goal, creating it from the profile when missing.

        Users without a complete profile get the default targets, which are
        not persisted.
        """
        existing = self.goal_repository.get_daily_goal(user_id, day)
        if existing is not None:
            return existing.targets

        profile = self.profile_repository.get_profile(user_id)
        if profile is None or not profile.is_complete:
            return DEFAULT_GOALS

        targets = compute_goals_for_profile(profile, day)
        stored = self.goal_repository.insert_daily_goal_if_absent(
            user_id, day, targets
        )
        _logger.info("Created daily goal", extra={"user_id": str(user_id)})
        return stored.targets

    def get_stored_goal(self, user_id: UUID, day: date) -> DailyGoalTargets | None:
        """Return the persisted targets for a day without creating them."""
        stored = self.goal_repository.get_daily_goal(user_id, day)
        return stored.targets if stored else None

    def refresh_goal(self, user_id: UUID, day: date) -> DailyGoalTargets | None:
        """Recompute and overwrite the day's goal after a profile change."""
        profile = self.profile_repository.get_profile(user_id)
        if profile is None or not profile.is_complete:
            return None
        targets = compute_goals_for_profile(profile, day)
        return self.goal_repository.upsert_daily_goal(user_id, day, targets).targets
