"""Dashboard statistics for food and exercise logs."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from uuid import UUID
from zoneinfo import ZoneInfo

from fitness_tracker.domain.goals import DEFAULT_GOALS, DailyGoalTargets
from fitness_tracker.domain.logs import ExerciseLogEntry, FoodLogEntry
from fitness_tracker.domain.stats import DailyTotals, RecentActivity, StatsSnapshot
from fitness_tracker.services.exercise import ExerciseLogRepository
from fitness_tracker.services.food import FoodLogRepository
from fitness_tracker.services.goals import GoalService, round_half_up

WEEKLY_WORKOUT_GOAL = 5
STREAK_LOOKBACK_DAYS = 30
ROLLING_WINDOW_DAYS = 7
GOAL_TOLERANCE = Decimal("0.10")
RECENT_FETCH_LIMIT = 10
RECENT_ACTIVITY_LIMIT = 4

_logger = logging.getLogger(__name__)


class StatsUnavailableError(RuntimeError):
    """Raised when stats cannot be computed because the store failed."""


@dataclass
class StatsService:
    """Service computing dashboard stats for a reference day."""

    food_log_repository: FoodLogRepository
    exercise_log_repository: ExerciseLogRepository
    goal_service: GoalService
    timezone_name: str = "UTC"

    def compute_user_stats(self, user_id: UUID, reference_date: date) -> StatsSnapshot:
        """Return the stats snapshot, failing as a whole on any store error."""
        try:
            return self._compute(user_id, reference_date)
        except Exception as exc:
            _logger.exception("Stats computation failed", extra={"user_id": user_id})
            raise StatsUnavailableError("Unable to load stats") from exc

    def _compute(self, user_id: UUID, reference_date: date) -> StatsSnapshot:
        window_start = reference_date - timedelta(days=ROLLING_WINDOW_DAYS - 1)
        lookback_start = reference_date - timedelta(days=STREAK_LOOKBACK_DAYS - 1)
        food_logs = self.food_log_repository.list_food_logs(
            user_id, lookback_start, reference_date
        )

        today = aggregate_day(reference_date, food_logs)
        targets = self.goal_service.resolve_goal(user_id, reference_date)

        week_start = start_of_week(reference_date)
        week_logs = self.exercise_log_repository.list_exercise_logs(
            user_id, week_start, week_start + timedelta(days=6)
        )
        total_workouts = self.exercise_log_repository.count_exercise_logs(user_id)

        window_logs = [log for log in food_logs if log.log_date >= window_start]
        daily = bucket_by_day(window_logs)
        goals_met = self._goals_met_percentage(
            user_id, reference_date, targets, daily
        )

        recent_food = self.food_log_repository.list_recent_food_logs(
            user_id,
            since=window_start,
            until=reference_date,
            limit=RECENT_FETCH_LIMIT,
        )
        recent_exercise = self.exercise_log_repository.list_recent_exercise_logs(
            user_id,
            since=window_start,
            until=reference_date,
            limit=RECENT_FETCH_LIMIT,
        )

        return StatsSnapshot(
            calories_consumed=round_half_up(today.calories),
            calories_target=targets.calories,
            protein_consumed=round_half_up(today.protein_g),
            protein_target=targets.protein_g,
            fat_target=targets.fat_g,
            carbs_target=targets.carbs_g,
            workouts_completed=len(week_logs),
            weekly_goal=WEEKLY_WORKOUT_GOAL,
            current_streak=current_streak(
                {log.log_date for log in food_logs}, reference_date
            ),
            total_workouts=total_workouts,
            avg_calories_per_day=average_logged_calories(daily),
            goals_met_percentage=goals_met,
            recent_activities=merge_recent_activities(
                recent_food, recent_exercise, ZoneInfo(self.timezone_name)
            ),
        )

    def _goals_met_percentage(
        self,
        user_id: UUID,
        reference_date: date,
        today_targets: DailyGoalTargets,
        daily: dict[date, DailyTotals],
    ) -> int:
        if not daily:
            return 0
        met = 0
        for day, totals in daily.items():
            if day == reference_date:
                target = today_targets.calories
            else:
                stored = self.goal_service.get_stored_goal(user_id, day)
                target = (stored or DEFAULT_GOALS).calories
            if is_goal_met(totals.calories, target):
                met += 1
        return round_half_up(met / len(daily) * 100)


def start_of_week(day: date) -> date:
    """Return the Sunday that starts the calendar week containing day."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def aggregate_day(day: date, logs: list[FoodLogEntry]) -> DailyTotals:
    """Sum calories and protein of the logs dated on day."""
    calories = 0.0
    protein_g = 0.0
    for log in logs:
        if log.log_date != day:
            continue
        calories += log.calories
        protein_g += log.protein_g
    return DailyTotals(day=day, calories=calories, protein_g=protein_g)


def bucket_by_day(logs: list[FoodLogEntry]) -> dict[date, DailyTotals]:
    """Group logs by log date; only days with entries appear."""
    days = sorted({log.log_date for log in logs})
    return {day: aggregate_day(day, logs) for day in days}


def average_logged_calories(daily: dict[date, DailyTotals]) -> int:
    """Average calories over the days that have at least one entry."""
    if not daily:
        return 0
    total = sum(totals.calories for totals in daily.values())
    return round_half_up(total / len(daily))


def is_goal_met(consumed: float, target: float) -> bool:
    """Return True when consumption is within the tolerance of the target.

    Compared in decimal so a day at exactly the tolerance counts as met.
    """
    target_value = Decimal(str(target))
    difference = abs(Decimal(str(consumed)) - target_value)
    return difference <= target_value * GOAL_TOLERANCE


def current_streak(
    logged_days: set[date],
    reference_date: date,
    max_days: int = STREAK_LOOKBACK_DAYS,
) -> int:
    """Count consecutive logged days walking back from the reference date.

    All looked-back days are known up front; the walk is evaluated most
    recent first and stops at the first day without a log, including the
    reference day itself.
    """
    streak = 0
    for offset in range(max_days):
        day = reference_date - timedelta(days=offset)
        if day not in logged_days:
            break
        streak += 1
    return streak


def merge_recent_activities(
    food_logs: list[FoodLogEntry],
    exercise_logs: list[ExerciseLogEntry],
    tz: ZoneInfo,
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[RecentActivity]:
    """Merge food and exercise logs into the newest dashboard activities."""
    activities = [
        _food_activity(log, tz) for log in food_logs if log.created_at is not None
    ]
    activities.extend(
        _exercise_activity(log) for log in exercise_logs if log.created_at is not None
    )
    activities.sort(key=lambda activity: activity.occurred_at, reverse=True)
    return activities[:limit]


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _food_activity(log: FoodLogEntry, tz: ZoneInfo) -> RecentActivity:
    occurred_at = _as_aware(log.created_at)
    return RecentActivity(
        id=str(log.id),
        type="food",
        name=f"{log.meal_type_name or 'Meal'} Logged",
        time=occurred_at.astimezone(tz).strftime("%H:%M"),
        calories=f"+{round_half_up(log.calories)} kcal",
        occurred_at=occurred_at,
    )


def _exercise_activity(log: ExerciseLogEntry) -> RecentActivity:
    return RecentActivity(
        id=str(log.id),
        type="exercise",
        name=log.exercise.name,
        time=f"{log.duration_minutes} min",
        calories=f"-{round_half_up(log.calories_burned)} kcal",
        occurred_at=_as_aware(log.created_at),
    )
