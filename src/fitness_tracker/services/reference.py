"""Lookup lists for activity levels, goals and meal types."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from fitness_tracker.domain.logs import ReferenceItem
from fitness_tracker.services.cache import Cache


class ReferenceRepository(Protocol):
    """Persistence interface for lookup tables."""

    def list_activity_levels(self) -> list[ReferenceItem]:
        """Return activity levels ordered by id."""

    def list_goals(self) -> list[ReferenceItem]:
        """Return weight goals ordered by id."""

    def list_meal_types(self) -> list[ReferenceItem]:
        """Return meal types ordered by id."""


@dataclass
class ReferenceService:
    """Cached access to lookup tables."""

    repository: ReferenceRepository
    cache: Cache
    ttl_seconds: int = 3600

    def activity_levels(self) -> list[ReferenceItem]:
        """Return activity levels."""
        return self._cached("ref:activity_levels", self.repository.list_activity_levels)

    def goals(self) -> list[ReferenceItem]:
        """Return weight goals."""
        return self._cached("ref:goals", self.repository.list_goals)

    def meal_types(self) -> list[ReferenceItem]:
        """Return meal types."""
        return self._cached("ref:meal_types", self.repository.list_meal_types)

    def _cached(
        self, key: str, loader: Callable[[], list[ReferenceItem]]
    ) -> list[ReferenceItem]:
        cached = self.cache.get(key)
        if isinstance(cached, list):
            return cached
        items = loader()
        self.cache.set(key, items, ttl_seconds=self.ttl_seconds)
        return items
