"""Supabase repositories for the food catalog and food logs."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.logs import FoodItem, FoodLogEntry
from fitness_tracker.services.food import FoodCatalogRepository, FoodLogRepository

_FOOD_COLUMNS = (
    "id, name, brand, serving_size_g, calories, protein_g, fat_g, carbs_g, "
    "fiber_g, sugar_g, sodium_mg, is_custom, created_by"
)
_FOOD_LOG_COLUMNS = (
    "id, user_id, meal_type_id, quantity, log_date, created_at, "
    f"food_items({_FOOD_COLUMNS}), meal_types(name)"
)
_FOOD_FIELDS = (
    "name",
    "brand",
    "serving_size_g",
    "calories",
    "protein_g",
    "fat_g",
    "carbs_g",
    "fiber_g",
    "sugar_g",
    "sodium_mg",
)


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Supabase implementation for catalog foods."""

    client: Client

    def search_foods(self, query: str, limit: int) -> list[FoodItem]:
        """Return foods whose name contains the query, case-insensitive."""
        response = (
            self.client.table("food_items")
            .select(_FOOD_COLUMNS)
            .ilike("name", f"%{query}%")
            .order("name", desc=False)
            .limit(limit)
            .execute()
        )
        return [parse_food_item(row) for row in response.data or []]

    def get_food(self, food_id: UUID) -> FoodItem | None:
        """Return a food item by id."""
        response = (
            self.client.table("food_items")
            .select(_FOOD_COLUMNS)
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food_item(response.data[0])

    def create_food(self, created_by: UUID, payload: dict[str, object]) -> FoodItem:
        """Insert a custom food owned by the creator."""
        row = {key: payload.get(key) for key in _FOOD_FIELDS}
        row["is_custom"] = True
        row["created_by"] = str(created_by)
        response = self.client.table("food_items").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create food item")
        return parse_food_item(response.data[0])


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository):
    """Supabase implementation for food log entries."""

    client: Client

    def list_food_logs(
        self, user_id: UUID, start: date, end: date
    ) -> list[FoodLogEntry]:
        """Return entries logged between start and end inclusive."""
        response = (
            self.client.table("food_logs")
            .select(_FOOD_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("log_date", start.isoformat())
            .lte("log_date", end.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_food_log(row) for row in response.data or []]

    def list_recent_food_logs(
        self, user_id: UUID, since: date, until: date, limit: int
    ) -> list[FoodLogEntry]:
        """Return the newest entries logged between since and until inclusive."""
        response = (
            self.client.table("food_logs")
            .select(_FOOD_LOG_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("log_date", since.isoformat())
            .lte("log_date", until.isoformat())
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_food_log(row) for row in response.data or []]

    def get_food_log(self, log_id: UUID) -> FoodLogEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("food_logs")
            .select(_FOOD_LOG_COLUMNS)
            .eq("id", str(log_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food_log(response.data[0])

    def create_food_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_item_id: UUID,
        meal_type_id: int,
        quantity: float,
        log_date: date,
    ) -> FoodLogEntry:
        """Insert an entry and return it with its food embedded."""
        response = (
            self.client.table("food_logs")
            .insert(
                {
                    "user_id": str(user_id),
                    "food_item_id": str(food_item_id),
                    "meal_type_id": meal_type_id,
                    "quantity": quantity,
                    "log_date": log_date.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food log")
        return self._reload(UUID(str(response.data[0]["id"])))

    def update_food_log_quantity(self, log_id: UUID, quantity: float) -> FoodLogEntry:
        """Update the quantity of an entry."""
        self.client.table("food_logs").update({"quantity": quantity}).eq(
            "id", str(log_id)
        ).execute()
        return self._reload(log_id)

    def delete_food_log(self, log_id: UUID) -> None:
        """Delete an entry."""
        self.client.table("food_logs").delete().eq("id", str(log_id)).execute()

    def _reload(self, log_id: UUID) -> FoodLogEntry:
        entry = self.get_food_log(log_id)
        if entry is None:
            raise RuntimeError(f"Food log {log_id} not found after write")
        return entry


def parse_food_item(row: dict[str, object]) -> FoodItem:
    """Build a food item from a food_items row."""
    created_by = row.get("created_by")
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        brand=row.get("brand"),
        serving_size_g=_optional_float(row.get("serving_size_g")),
        calories=_optional_float(row.get("calories")),
        protein_g=_optional_float(row.get("protein_g")),
        fat_g=_optional_float(row.get("fat_g")),
        carbs_g=_optional_float(row.get("carbs_g")),
        fiber_g=_optional_float(row.get("fiber_g")),
        sugar_g=_optional_float(row.get("sugar_g")),
        sodium_mg=_optional_float(row.get("sodium_mg")),
        is_custom=bool(row.get("is_custom", False)),
        created_by=UUID(str(created_by)) if created_by else None,
    )


def _parse_food_log(row: dict[str, object]) -> FoodLogEntry:
    meal_type = row.get("meal_types") or {}
    return FoodLogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food=parse_food_item(row["food_items"]),
        meal_type_id=int(row.get("meal_type_id") or 0),
        meal_type_name=meal_type.get("name"),
        quantity=float(row.get("quantity") or 0.0),
        log_date=date.fromisoformat(str(row["log_date"])[:10]),
        created_at=parse_timestamp(row.get("created_at")),
    )


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, returning None when unusable."""
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None
