"""Supabase repository for log entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_food_repository import parse_food
from macro_tracker.adapters.supabase_support import (
    execute,
    parse_date,
    parse_datetime,
)
from macro_tracker.domain.log import LogEntry
from macro_tracker.errors import PersistenceError
from macro_tracker.services.ledger import LogRepository

TABLE = "meal_log"
SELECT_WITH_FOOD = "*, food:food_library(*)"


@dataclass
class SupabaseLogRepository(LogRepository):
    """Supabase implementation for log entries."""

    client: Client

    def create_entry(
        self, user_id: UUID, food_id: UUID, servings: float, logged_at: date
    ) -> LogEntry:
        """Create a log entry row and return it."""
        response = execute(
            self.client.table(TABLE).insert(
                {
                    "user_id": str(user_id),
                    "food_library_id": str(food_id),
                    "servings": servings,
                    "logged_at": logged_at.isoformat(),
                }
            ),
            "create log entry",
        )
        if not response.data:
            raise PersistenceError("Failed to create log entry")
        return parse_entry(response.data[0])

    def get_entry(self, entry_id: UUID, user_id: UUID) -> LogEntry | None:
        """Return a log entry with its food."""
        response = execute(
            self.client.table(TABLE)
            .select(SELECT_WITH_FOOD)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1),
            "fetch log entry",
        )
        if not response.data:
            return None
        return parse_entry(response.data[0])

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[LogEntry]:
        """Return entries with foods in the inclusive date range."""
        response = execute(
            self.client.table(TABLE)
            .select(SELECT_WITH_FOOD)
            .eq("user_id", str(user_id))
            .gte("logged_at", start.isoformat())
            .lte("logged_at", end.isoformat())
            .order("logged_at", desc=False)
            .order("created_at", desc=False),
            "list log entries",
        )
        return [parse_entry(row) for row in response.data or []]

    def update_servings(
        self, entry_id: UUID, user_id: UUID, servings: float
    ) -> LogEntry | None:
        """Update servings and return the entry with its food."""
        response = execute(
            self.client.table(TABLE)
            .update({"servings": servings})
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id)),
            "update log entry",
        )
        if not response.data:
            return None
        return self.get_entry(entry_id, user_id)

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> None:
        """Delete a log entry."""
        execute(
            self.client.table(TABLE)
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id)),
            "delete log entry",
        )

    def delete_entries_for_food(self, food_id: UUID, user_id: UUID) -> None:
        """Delete all of the user's entries for a food."""
        execute(
            self.client.table(TABLE)
            .delete()
            .eq("food_library_id", str(food_id))
            .eq("user_id", str(user_id)),
            "delete log entries",
        )


def parse_entry(row: dict[str, object]) -> LogEntry:
    """Parse a log row, including the joined food when selected."""
    food_row = row.get("food")
    return LogEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food_library_id=UUID(str(row["food_library_id"])),
        servings=float(row.get("servings", 1)),
        logged_at=parse_date(row["logged_at"]),
        created_at=parse_datetime(row.get("created_at")),
        food=parse_food(food_row) if isinstance(food_row, dict) else None,
    )
