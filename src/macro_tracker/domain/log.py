"""Domain models for logged food entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

from macro_tracker.domain.foods import FoodItem


@dataclass(frozen=True)
class LogEntry:
    """A single recorded consumption of a library food."""

    id: UUID
    user_id: UUID
    food_library_id: UUID
    servings: float
    logged_at: date
    created_at: datetime | None = None
    food: FoodItem | None = None


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macro grams."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass(frozen=True)
class DailyTotals:
    """Totals for one calendar day."""

    day: date
    calories: float
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DayLog:
    """Entries logged on one day with their totals."""

    day: date
    entries: list[LogEntry]
    totals: MacroTotals


@dataclass(frozen=True)
class RangeSummary:
    """Averages over the logged days of a date range."""

    start_date: date
    end_date: date
    days_logged: int
    avg_calories: float
    avg_protein: float
    avg_carbs: float
    avg_fat: float
    daily_data: list[DailyTotals] = field(default_factory=list)
