"""Domain models for daily nutrition goals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class DailyGoalTargets:
    """Calorie and macro targets for one day."""

    calories: int
    protein_g: int
    fat_g: int
    carbs_g: int


@dataclass(frozen=True)
class DailyGoal:
    """Persisted goal row, unique per user per day."""

    user_id: UUID
    day: date
    targets: DailyGoalTargets


DEFAULT_GOALS = DailyGoalTargets(calories=2000, protein_g=150, fat_g=65, carbs_g=250)
