"""Supabase repository for lookup tables."""

from dataclasses import dataclass

from supabase import Client

from fitness_tracker.domain.logs import ReferenceItem
from fitness_tracker.services.reference import ReferenceRepository


@dataclass
class SupabaseReferenceRepository(ReferenceRepository):
    """Supabase implementation for activity levels, goals and meal types."""

    client: Client

    def list_activity_levels(self) -> list[ReferenceItem]:
        return self._list("activity_levels")

    def list_goals(self) -> list[ReferenceItem]:
        return self._list("goals")

    def list_meal_types(self) -> list[ReferenceItem]:
        return self._list("meal_types")

    def _list(self, table: str) -> list[ReferenceItem]:
        response = (
            self.client.table(table)
            .select("id, name")
            .order("id", desc=False)
            .execute()
        )
        return [
            ReferenceItem(id=int(row["id"]), name=str(row.get("name", "")))
            for row in response.data or []
        ]
