"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.profile import Gender, Profile
from fitness_tracker.services.profile import ProfileRepository

_PROFILE_COLUMNS = (
    "user_id, birth_date, gender, height_cm, weight_kg, activity_level_id, goal_id"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def get_profile(self, user_id: UUID) -> Profile | None:
        """Return the user's profile, if present."""
        response = (
            self.client.table("user_profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def upsert_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        """Create or update the profile row keyed by user id."""
        row: dict[str, object] = {
            "user_id": str(user_id),
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        for key, value in payload.items():
            row[key] = value.isoformat() if isinstance(value, date) else value
        response = (
            self.client.table("user_profiles")
            .upsert(row, on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> Profile:
    birth_date_raw = row.get("birth_date")
    gender_raw = row.get("gender")
    height = row.get("height_cm")
    weight = row.get("weight_kg")
    return Profile(
        user_id=UUID(str(row["user_id"])),
        birth_date=date.fromisoformat(birth_date_raw)
        if isinstance(birth_date_raw, str) and birth_date_raw
        else None,
        gender=Gender(gender_raw) if gender_raw else None,
        height_cm=float(height) if height is not None else None,
        weight_kg=float(weight) if weight is not None else None,
        activity_level_id=row.get("activity_level_id"),
        goal_id=row.get("goal_id"),
    )
