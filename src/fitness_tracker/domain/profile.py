"""Domain models for user profiles."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Supported gender values."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


@dataclass(frozen=True)
class Profile:
    """Physiological profile owned by a single user."""

    user_id: UUID
    birth_date: date | None
    gender: Gender | None
    height_cm: float | None
    weight_kg: float | None
    activity_level_id: int | None
    goal_id: int | None

    @property
    def is_complete(self) -> bool:
        """Return True when every field needed for goal math is filled."""
        return bool(
            self.birth_date
            and self.gender
            and self.height_cm
            and self.weight_kg
            and self.activity_level_id
            and self.goal_id
        )

    def age_on(self, day: date) -> int | None:
        """Return the age in whole years on the given day."""
        if self.birth_date is None:
            return None
        return age_on(self.birth_date, day)


def age_on(birth_date: date, day: date) -> int:
    """Return completed years between birth_date and day."""
    had_birthday = (day.month, day.day) >= (birth_date.month, birth_date.day)
    return day.year - birth_date.year - (0 if had_birthday else 1)


@dataclass(frozen=True)
class ProfileStatus:
    """Profile lookup result for the current user."""

    exists: bool
    is_complete: bool
    profile: Profile | None
