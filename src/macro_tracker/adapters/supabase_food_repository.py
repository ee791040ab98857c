"""Supabase implementation for the user food library."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_support import (
    execute,
    name_key,
    parse_datetime,
)
from macro_tracker.domain.foods import FoodItem
from macro_tracker.errors import PersistenceError, ValidationError
from macro_tracker.services.ledger import FoodRepository

TABLE = "food_library"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for user food libraries."""

    client: Client

    def find_by_name(self, user_id: UUID, name: str) -> FoodItem | None:
        """Return the user's food whose name matches case-insensitively."""
        response = execute(
            self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .eq("name_key", name_key(name))
            .limit(1),
            "look up food",
        )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        """Create a food entry, or return None if the name already exists."""
        response = execute(
            self.client.table(TABLE).insert(
                {"user_id": str(user_id), **payload, "times_used": 1}
            ),
            "create food",
            conflict_ok=True,
        )
        if response is None:
            return None
        if not response.data:
            raise PersistenceError("Failed to create food")
        return parse_food(response.data[0])

    def increment_usage(self, food: FoodItem) -> FoodItem:
        """Bump the usage counter from the value read during lookup."""
        response = execute(
            self.client.table(TABLE)
            .update({"times_used": food.times_used + 1})
            .eq("id", str(food.id))
            .eq("user_id", str(food.user_id)),
            "update food usage",
        )
        if not response.data:
            raise PersistenceError("Failed to update food usage")
        return parse_food(response.data[0])

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        """Return the user's foods, most used first."""
        response = execute(
            self.client.table(TABLE)
            .select("*")
            .eq("user_id", str(user_id))
            .order("times_used", desc=True),
            "list foods",
        )
        return [parse_food(row) for row in response.data or []]

    def update_food(
        self, food_id: UUID, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        """Update a food entry and return it."""
        response = execute(
            self.client.table(TABLE)
            .update(payload)
            .eq("id", str(food_id))
            .eq("user_id", str(user_id)),
            "update food",
            conflict_ok=True,
        )
        if response is None:
            raise ValidationError("Another food already uses that name")
        if not response.data:
            return None
        return parse_food(response.data[0])

    def delete_food(self, food_id: UUID, user_id: UUID) -> None:
        """Delete a food entry."""
        execute(
            self.client.table(TABLE)
            .delete()
            .eq("id", str(food_id))
            .eq("user_id", str(user_id)),
            "delete food",
        )


def parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food library row into a domain model."""
    return FoodItem(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        serving_unit=str(row.get("serving_unit", "")),
        calories_per_serving=float(row.get("calories_per_serving", 0.0)),
        protein_per_serving=float(row.get("protein_per_serving", 0.0)),
        carbs_per_serving=float(row.get("carbs_per_serving", 0.0)),
        fat_per_serving=float(row.get("fat_per_serving", 0.0)),
        times_used=int(row.get("times_used", 0)),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
