"""Supabase repository for exercises and exercise logs."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_food_repository import parse_timestamp
from fitness_tracker.domain.logs import Exercise, ExerciseLogEntry
from fitness_tracker.services.exercise import ExerciseLogRepository

_EXERCISE_LOG_COLUMNS = (
    "id, user_id, duration_minutes, calories_burned, log_date, created_at, "
    "exercises(id, name)"
)


@dataclass
class SupabaseExerciseRepository(ExerciseLogRepository):
    """Supabase implementation for workouts."""

    client: Client

    def search_exercises(self, query: str, limit: int) -> list[Exercise]:
        """Return exercises whose name contains the query."""
        response = (
            self.client.table("exercises")
            .select("id, name")
            .ilike("name", f"%{query}%")
            .order("name", desc=False)
            .limit(limit)
            .execute()
        )
        return [_parse_exercise(row) for row in response.data or []]

    def get_exercise(self, exercise_id: UUID) -> Exercise | None:
        """Return an exercise by id."""
        response = (
            self.client.table("exercises")
            .select("id, name")
            .eq("id", str(exercise_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_exercise(response.data[0])

    def list_exercise_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExerciseLogEntry]:
        """Return entries logged between start and end inclusive."""
        response = (
            self.client.table("exercise_logs")
            .select(_EXERCISE_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .lte("log_date", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_exercise_log(row) for row in response.data or []]

    def list_recent_exercise_logs(
        self, user_id: UUID, since: date, until: date, limit: int
    ) -> list[ExerciseLogEntry]:
        """Return the newest entries logged between since and until inclusive."""
        response = (
            self.client.table("exercise_logs")
            .select(_EXERCISE_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("log_date", since.isoformat())
            .lte("log_date", until.isoformat())
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_exercise_log(row) for row in response.data or []]

    def count_exercise_logs(self, user_id: UUID) -> int:
        """Return the lifetime number of workouts."""
        response = (
            self.client.table("exercise_logs")
            .select("id", count="exact")
            .eq("user_id", str(user_id))
            .execute()
        )
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def get_exercise_log(self, log_id: UUID) -> ExerciseLogEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("exercise_logs")
            .select(_EXERCISE_LOG_COLUMNS)
            .eq("id", str(log_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_exercise_log(response.data[0])

    def create_exercise_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        exercise_id: UUID,
        duration_minutes: int,
        calories_burned: float,
        log_date: date,
    ) -> ExerciseLogEntry:
        """Insert an entry and return it with its exercise embedded."""
        response = (
            self.client.table("exercise_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "exercise_id": str(exercise_id),
                    "duration_minutes": duration_minutes,
                    "calories_burned": calories_burned,
                    "log_date": log_date.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create exercise log")
        log_id = UUID(str(response.data[0]["id"]))
        entry = self.get_exercise_log(log_id)
        if entry is None:
            raise RuntimeError(f"Exercise log {log_id} not found after write")
        return entry

    def delete_exercise_log(self, log_id: UUID) -> None:
        """Delete an entry."""
        self.client.table("exercise_logs").delete().eq("id", str(log_id)).execute()


def _parse_exercise(row: dict[str, object]) -> Exercise:
    return Exercise(id=UUID(str(row["id"])), name=str(row.get("name", "")))


def _parse_exercise_log(row: dict[str, object]) -> ExerciseLogEntry:
    return ExerciseLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        exercise=_parse_exercise(row["exercises"]),
        duration_minutes=int(row.get("duration_minutes") or 0),
        calories_burned=float(row.get("calories_burned") or 0.0),
        log_date=date.fromisoformat(str(row["log_date"])[:10]),
        created_at=parse_timestamp(row.get("created_at")),
    )
