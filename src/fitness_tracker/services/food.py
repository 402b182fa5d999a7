"""Services for the food catalog and food logging."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.logs import (
    DailyFoodLog,
    FoodItem,
    FoodLogEntry,
    NutritionTotals,
)

MIN_SEARCH_LENGTH = 2


class FoodNotFoundError(LookupError):
    """Raised when a food item reference is unknown."""


class LogNotFoundError(LookupError):
    """Raised when a log entry is missing or owned by another user."""


class FoodCatalogRepository(Protocol):
    """Persistence interface for catalog food items."""

    def search_foods(self, query: str, limit: int) -> list[FoodItem]:
        """Return foods whose name contains the query."""

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def create_food(self, created_by: UUID, payload: dict[str, object]) -> FoodItem:
        """Create a custom food item and return it."""


class FoodLogRepository(Protocol):
    """Persistence interface for food log entries."""

    def list_food_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogEntry]:
        """Return entries with log dates in the inclusive range."""

    def list_recent_food_logs(
        self, user_id: UUID, since: date, until: date, limit: int
    ) -> list[FoodLogEntry]:
        """Return the newest entries by creation time logged from since to until."""

    def get_food_log(self, log_id: UUID) -> FoodLogEntry | None:
        """Return an entry by id, if present."""

    def create_food_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_item_id: UUID,
        meal_type_id: int,
        quantity: float,
        log_date: date,
    ) -> FoodLogEntry:
        """Create an entry and return it."""

    def update_food_log_quantity(self, log_id: UUID, quantity: float) -> FoodLogEntry:
        """Update the quantity of an entry and return it."""

    def delete_food_log(self, log_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class FoodService:
    """Application service for searching foods and logging meals."""

    catalog_repository: FoodCatalogRepository
    log_repository: FoodLogRepository

    def search(self, query: str, limit: int = 20) -> list[FoodItem]:
        """Search the catalog by name."""
        cleaned = query.strip()
        if len(cleaned) < MIN_SEARCH_LENGTH:
            return []
        return self.catalog_repository.search_foods(cleaned, limit)

    def create_custom_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem:
        """Create a user-owned food item."""
        return self.catalog_repository.create_food(user_id, payload)

    def log_food(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_item_id: UUID,
        meal_type_id: int,
        quantity: float,
        log_date: date,
    ) -> FoodLogEntry:
        """Log servings of a food for a day."""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        if self.catalog_repository.get_food(food_item_id) is None:
            raise FoodNotFoundError(str(food_item_id))
        return self.log_repository.create_food_log(
            user_id=user_id,
            food_item_id=food_item_id,
            meal_type_id=meal_type_id,
            quantity=quantity,
            log_date=log_date,
        )

    def update_quantity(
        self, user_id: UUID, log_id: UUID, quantity: float
    ) -> FoodLogEntry:
        """Change the quantity of one of the user's entries."""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")
        self._owned_log(user_id, log_id)
        return self.log_repository.update_food_log_quantity(log_id, quantity)

    def delete_log(self, user_id: UUID, log_id: UUID) -> None:
        """Delete one of the user's entries."""
        self._owned_log(user_id, log_id)
        self.log_repository.delete_food_log(log_id)

    def daily_log(self, user_id: UUID, day: date) -> DailyFoodLog:
        """Return the day's entries with summed nutrition."""
        entries = self.log_repository.list_food_logs(user_id, day, day)
        return DailyFoodLog(day=day, entries=entries, totals=sum_nutrition(entries))

    def _owned_log(self, user_id: UUID, log_id: UUID) -> FoodLogEntry:
        entry = self.log_repository.get_food_log(log_id)
        if entry is None or entry.user_id != user_id:
            raise LogNotFoundError(str(log_id))
        return entry


def sum_nutrition(entries: list[FoodLogEntry]) -> NutritionTotals:
    """Sum nutrition of entries scaled by their quantities."""
    return NutritionTotals(
        calories=sum(entry.calories for entry in entries),
        protein_g=sum(entry.protein_g for entry in entries),
        fat_g=sum(entry.fat_g for entry in entries),
        carbs_g=sum(entry.carbs_g for entry in entries),
        fiber_g=sum(entry.fiber_g for entry in entries),
    )
