"""Domain models for statistics."""

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class DailyTotals:
    """Daily consumed calories and protein."""

    day: date
    calories: float
    protein_g: float


@dataclass(frozen=True)
class RecentActivity:
    """Dashboard line for a recent food or exercise log."""

    id: str
    type: str
    name: str
    time: str
    calories: str
    occurred_at: datetime


@dataclass(frozen=True)
class StatsSnapshot:
    """Dashboard statistics for a user on a reference day."""

    calories_consumed: int
    calories_target: int
    protein_consumed: int
    protein_target: int
    fat_target: int
    carbs_target: int
    workouts_completed: int
    weekly_goal: int
    current_streak: int
    total_workouts: int
    avg_calories_per_day: int
    goals_met_percentage: int
    recent_activities: list[RecentActivity] = field(default_factory=list)
