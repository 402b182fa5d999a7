"""Services for exercise logging."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.logs import Exercise, ExerciseLogEntry
from fitness_tracker.services.food import MIN_SEARCH_LENGTH, LogNotFoundError


class ExerciseNotFoundError(LookupError):
    """Raised when an exercise reference is unknown."""


class ExerciseLogRepository(Protocol):
    """Persistence interface for exercises and exercise logs."""

    def search_exercises(self, query: str, limit: int) -> list[Exercise]:
        """Return exercises whose name contains the query."""

    def get_exercise(self, exercise_id: UUID) -> Exercise | None:
        """Return an exercise by id, if present."""

    def list_exercise_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[ExerciseLogEntry]:
        """Return entries with log dates in the inclusive range."""

    def list_recent_exercise_logs(
        self, user_id: UUID, since: date, until: date, limit: int
    ) -> list[ExerciseLogEntry]:
        """Return the newest entries by creation time logged from since to until."""

    def count_exercise_logs(self, user_id: UUID) -> int:
        """Return the lifetime number of entries for a user."""

    def get_exercise_log(self, log_id: UUID) -> ExerciseLogEntry | None:
        """Return an entry by id, if present."""

    def create_exercise_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        exercise_id: UUID,
        duration_minutes: int,
        calories_burned: float,
        log_date: date,
    ) -> ExerciseLogEntry:
        """Create an entry and return it."""

    def delete_exercise_log(self, log_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class ExerciseService:
    """Application service for workouts."""

    repository: ExerciseLogRepository

    def search(self, query: str, limit: int = 20) -> list[Exercise]:
        """Search exercises by name."""
        cleaned = query.strip()
        if len(cleaned) < MIN_SEARCH_LENGTH:
            return []
        return self.repository.search_exercises(cleaned, limit)

    def log_exercise(  # noqa: PLR0913
        self,
        user_id: UUID,
        exercise_id: UUID,
        duration_minutes: int,
        calories_burned: float,
        log_date: date,
    ) -> ExerciseLogEntry:
        """Log a workout for a day."""
        if self.repository.get_exercise(exercise_id) is None:
            raise ExerciseNotFoundError(str(exercise_id))
        return self.repository.create_exercise_log(
            user_id=user_id,
            exercise_id=exercise_id,
            duration_minutes=duration_minutes,
            calories_burned=calories_burned,
            log_date=log_date,
        )

    def list_logs(self, user_id: UUID, day: date) -> list[ExerciseLogEntry]:
        """Return the day's workouts."""
        return self.repository.list_exercise_logs(user_id, day, day)

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete one of the user's workouts."""
        entry = self.repository.get_exercise_log(log_id)
        if entry is None or entry.user_id != user_id:
            raise LogNotFoundError(str(log_id))
        self.repository.delete_exercise_log(log_id)
