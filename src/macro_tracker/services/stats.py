"""Aggregation of logged entries into daily totals and range averages."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from macro_tracker.domain.log import DailyTotals, LogEntry, MacroTotals, RangeSummary
from macro_tracker.errors import ValidationError

if TYPE_CHECKING:
    from macro_tracker.services.ledger import LogRepository


@dataclass
class StatsService:
    """Service for daily and multi-day summaries."""

    repository: "LogRepository"

    def get_range(self, user_id: UUID, start: date, end: date) -> RangeSummary:
        """Return averages over the days logged between start and end."""
        if start > end:
            raise ValidationError("start_date must not be after end_date")
        entries = self.repository.list_entries(user_id, start, end)
        return range_summary(entries, start, end)


def daily_totals(entries: list[LogEntry]) -> MacroTotals:
    """Sum per-serving macros times servings; entries without a food are skipped."""
    calories = protein = carbs = fat = 0.0
    for entry in entries:
        food = entry.food
        if food is None:
            continue
        calories += food.calories_per_serving * entry.servings
        protein += food.protein_per_serving * entry.servings
        carbs += food.carbs_per_serving * entry.servings
        fat += food.fat_per_serving * entry.servings
    return MacroTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def range_summary(entries: list[LogEntry], start: date, end: date) -> RangeSummary:
    """Average daily totals over the number of days that have entries."""
    by_day: dict[date, list[LogEntry]] = defaultdict(list)
    for entry in entries:
        if start <= entry.logged_at <= end:
            by_day[entry.logged_at].append(entry)

    daily = []
    for day in sorted(by_day):
        totals = daily_totals(by_day[day])
        daily.append(
            DailyTotals(
                day=day,
                calories=totals.calories,
                protein=totals.protein,
                carbs=totals.carbs,
                fat=totals.fat,
            )
        )

    days_logged = len(daily)
    if days_logged == 0:
        return RangeSummary(
            start_date=start,
            end_date=end,
            days_logged=0,
            avg_calories=0,
            avg_protein=0,
            avg_carbs=0,
            avg_fat=0,
            daily_data=[],
        )
    return RangeSummary(
        start_date=start,
        end_date=end,
        days_logged=days_logged,
        avg_calories=sum(day.calories for day in daily) / days_logged,
        avg_protein=sum(day.protein for day in daily) / days_logged,
        avg_carbs=sum(day.carbs for day in daily) / days_logged,
        avg_fat=sum(day.fat for day in daily) / days_logged,
        daily_data=daily,
    )
