"""Food library and log entry reconciliation."""

import logging
import math
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.foods import FoodItem, ParsedFood
from macro_tracker.domain.log import DayLog, LogEntry
from macro_tracker.errors import NotFoundError, PersistenceError, ValidationError
from macro_tracker.services.stats import daily_totals

logger = logging.getLogger(__name__)

MACRO_FIELDS = (
    "calories_per_serving",
    "protein_per_serving",
    "carbs_per_serving",
    "fat_per_serving",
)


class FoodRepository(Protocol):
    """Persistence interface for the user food library.

    Implementations raise ``PersistenceError`` when the datastore fails.
    """

    def find_by_name(self, user_id: UUID, name: str) -> FoodItem | None:
        """Return the user's food whose name matches case-insensitively."""

    def create_food(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        """Create a food with ``times_used`` set to 1 and return it.

        Returns None when the per-user unique name index rejects the insert
        because a concurrent request created the same food first.
        """

    def increment_usage(self, food: FoodItem) -> FoodItem:
        """Add one to the food's usage counter and return the updated row."""

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        """Return the user's foods, most used first."""

    def update_food(
        self, food_id: UUID, user_id: UUID, payload: dict[str, object]
    ) -> FoodItem | None:
        """Update a food and return it, or None when absent.

        A rename onto another food's name raises ``ValidationError``.
        """

    def delete_food(self, food_id: UUID, user_id: UUID) -> None:
        """Delete a food row."""


class LogRepository(Protocol):
    """Persistence interface for log entries.

    Entries returned by reads carry their joined food.
    """

    def create_entry(
        self, user_id: UUID, food_id: UUID, servings: float, logged_at: date
    ) -> LogEntry:
        """Create a log entry and return it."""

    def get_entry(self, entry_id: UUID, user_id: UUID) -> LogEntry | None:
        """Return a log entry by id, if the user owns it."""

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[LogEntry]:
        """Return entries logged within the inclusive date range."""

    def update_servings(
        self, entry_id: UUID, user_id: UUID, servings: float
    ) -> LogEntry | None:
        """Update an entry's servings and return it, or None when absent."""

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> None:
        """Delete a log entry."""

    def delete_entries_for_food(self, food_id: UUID, user_id: UUID) -> None:
        """Delete every entry of the user that references the food."""


@dataclass
class LedgerService:
    """Service that reconciles parsed foods into the library and log."""

    food_repository: FoodRepository
    log_repository: LogRepository

    def log_food(self, user_id: UUID, parsed: ParsedFood, logged_at: date) -> LogEntry:
        """Resolve the parsed food against the library and record an entry."""
        _validate_parsed(parsed)
        food = self._resolve_food(user_id, parsed)
        entry = self.log_repository.create_entry(
            user_id=user_id,
            food_id=food.id,
            servings=parsed.servings,
            logged_at=logged_at,
        )
        return replace(entry, food=food)

    def get_entry(self, entry_id: UUID, user_id: UUID) -> LogEntry:
        """Return a log entry or raise ``NotFoundError``."""
        entry = self.log_repository.get_entry(entry_id, user_id)
        if entry is None:
            raise NotFoundError(f"Log entry {entry_id} not found")
        return entry

    def get_day(self, user_id: UUID, day: date) -> DayLog:
        """Return the day's entries in creation order with totals."""
        entries = self.log_repository.list_entries(user_id, day, day)
        entries = sorted(
            entries,
            key=lambda entry: entry.created_at or datetime.min.replace(tzinfo=UTC),
        )
        return DayLog(day=day, entries=entries, totals=daily_totals(entries))

    def update_servings(
        self, entry_id: UUID, user_id: UUID, servings: float
    ) -> LogEntry:
        """Change the servings of an entry without touching its food."""
        if not math.isfinite(servings) or servings <= 0:
            raise ValidationError("servings must be greater than 0")
        updated = self.log_repository.update_servings(entry_id, user_id, servings)
        if updated is None:
            raise NotFoundError(f"Log entry {entry_id} not found")
        return updated

    def delete_entry(self, entry_id: UUID, user_id: UUID) -> None:
        """Delete an entry; deleting an absent entry is not an error."""
        self.log_repository.delete_entry(entry_id, user_id)

    def list_foods(self, user_id: UUID) -> list[FoodItem]:
        """Return the user's library, most used first."""
        return self.food_repository.list_foods(user_id)

    def update_food(
        self, food_id: UUID, user_id: UUID, changes: dict[str, object]
    ) -> FoodItem:
        """Apply a partial update to a library food."""
        for key in MACRO_FIELDS:
            value = changes.get(key)
            if value is not None:
                _validate_macro(key, float(value))
        payload = {**changes, "updated_at": datetime.now(tz=UTC).isoformat()}
        food = self.food_repository.update_food(food_id, user_id, payload)
        if food is None:
            raise NotFoundError(f"Food {food_id} not found")
        return food

    def delete_food(self, food_id: UUID, user_id: UUID) -> None:
        """Delete a food after removing every log entry that references it."""
        self.log_repository.delete_entries_for_food(food_id, user_id)
        self.food_repository.delete_food(food_id, user_id)
        logger.info("Deleted food", extra={"food_id": str(food_id)})

    def _resolve_food(self, user_id: UUID, parsed: ParsedFood) -> FoodItem:
        existing = self.food_repository.find_by_name(user_id, parsed.name)
        if existing is not None:
            return self.food_repository.increment_usage(existing)
        food = self.food_repository.create_food(user_id, parsed.library_payload())
        if food is not None:
            logger.info("Created library food", extra={"food_id": str(food.id)})
            return food

        # A concurrent request inserted the same name first.
        logger.info("Food created concurrently", extra={"user_id": str(user_id)})
        existing = self.food_repository.find_by_name(user_id, parsed.name)
        if existing is None:
            raise PersistenceError("Failed to resolve concurrently created food")
        return self.food_repository.increment_usage(existing)


def _validate_parsed(parsed: ParsedFood) -> None:
    if not math.isfinite(parsed.servings) or parsed.servings <= 0:
        raise ValidationError("servings must be greater than 0")
    for key in MACRO_FIELDS:
        _validate_macro(key, getattr(parsed, key))


def _validate_macro(key: str, value: float) -> None:
    if not math.isfinite(value):
        raise ValidationError(f"{key} must be a finite number")
    if value < 0:
        raise ValidationError(f"{key} must not be negative")
