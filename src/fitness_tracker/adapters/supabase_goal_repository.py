"""Supabase repository for daily goals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.goals import DailyGoal, DailyGoalTargets
from fitness_tracker.services.goals import DailyGoalRepository, round_half_up

_GOAL_COLUMNS = "user_id, date, calories_goal, protein_goal, fat_goal, carbs_goal"
_GOAL_KEY = "user_id,date"


@dataclass
class SupabaseGoalRepository(DailyGoalRepository):
    """Supabase implementation for daily goals.

    The daily_goals table carries a unique constraint on (user_id, date);
    both writes go through PostgREST upserts on that key, so concurrent
    writers never produce duplicate rows.
    """

    client: Client

    def get_daily_goal(self, user_id: UUID, day: date) -> DailyGoal | None:
        """Return the goal row for the user and day, if present."""
        response = (
            self.client.table("daily_goals")
            .select(_GOAL_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def upsert_daily_goal(
        self, user_id: UUID, day: date, targets: DailyGoalTargets
    ) -> DailyGoal:
        """Create or overwrite the goal row."""
        response = (
            self.client.table("daily_goals")
            .upsert(_goal_payload(user_id, day, targets), on_conflict=_GOAL_KEY)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily goal")
        return _parse_goal(response.data[0])

    def insert_daily_goal_if_absent(
        self, user_id: UUID, day: date, targets: DailyGoalTargets
    ) -> DailyGoal:
        """Insert the goal row unless present; the first writer wins."""
        self.client.table("daily_goals").upsert(
            _goal_payload(user_id, day, targets),
            on_conflict=_GOAL_KEY,
            ignore_duplicates=True,
        ).execute()
        stored = self.get_daily_goal(user_id, day)
        if stored is None:
            raise RuntimeError("Failed to create daily goal")
        return stored


def _goal_payload(
    user_id: UUID, day: date, targets: DailyGoalTargets
) -> dict[str, object]:
    return {
        "user_id": str(user_id),
        "date": day.isoformat(),
        "calories_goal": targets.calories,
        "protein_goal": targets.protein_g,
        "fat_goal": targets.fat_g,
        "carbs_goal": targets.carbs_g,
        "updated_at": datetime.now(tz=UTC).isoformat(),
    }


def _parse_goal(row: dict[str, object]) -> DailyGoal:
    return DailyGoal(
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        targets=DailyGoalTargets(
            calories=int(row.get("calories_goal") or 0),
            protein_g=round_half_up(float(row.get("protein_goal") or 0)),
            fat_g=round_half_up(float(row.get("fat_goal") or 0)),
            carbs_g=round_half_up(float(row.get("carbs_goal") or 0)),
        ),
    )
