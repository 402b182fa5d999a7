"""Profile services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from fitness_tracker.domain.profile import Profile, ProfileStatus

if TYPE_CHECKING:
    from datetime import date
    from uuid import UUID

    from fitness_tracker.services.goals import GoalService


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile, if present."""

    def upsert_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create the profile or update the given fields and return it."""


@dataclass
class ProfileService:
    """Service for reading and updating the user profile."""

    repository: ProfileRepository
    goal_service: GoalService

    def get_status(self, user_id: UUID) -> ProfileStatus:
        """Return whether the profile exists and is complete."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return ProfileStatus(exists=False, is_complete=False, profile=None)
        return ProfileStatus(
            exists=True, is_complete=profile.is_complete, profile=profile
        )

    def update_profile(
        self, user_id: UUID, payload: dict[str, object], today: date
    ) -> Profile:
        """Persist profile changes and refresh today's goal when complete."""
        profile = self.repository.upsert_profile(user_id, payload)
        if profile.is_complete:
            self.goal_service.refresh_goal(user_id, today)
        return profile
