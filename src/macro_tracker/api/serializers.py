"""JSON shapes returned by the HTTP API."""

from dataclasses import asdict

from macro_tracker.domain.foods import FoodItem
from macro_tracker.domain.log import DayLog, LogEntry, MacroTotals, RangeSummary
from macro_tracker.domain.profile import UserProfile
from macro_tracker.domain.targets import MacroTargets


def serialize_food(food: FoodItem) -> dict[str, object]:
    return {
        "id": str(food.id),
        "user_id": str(food.user_id),
        "name": food.name,
        "serving_unit": food.serving_unit,
        "calories_per_serving": food.calories_per_serving,
        "protein_per_serving": food.protein_per_serving,
        "carbs_per_serving": food.carbs_per_serving,
        "fat_per_serving": food.fat_per_serving,
        "times_used": food.times_used,
        "created_at": food.created_at.isoformat() if food.created_at else None,
        "updated_at": food.updated_at.isoformat() if food.updated_at else None,
    }


def serialize_entry(entry: LogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "user_id": str(entry.user_id),
        "food_library_id": str(entry.food_library_id),
        "servings": entry.servings,
        "logged_at": entry.logged_at.isoformat(),
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
        "food": serialize_food(entry.food) if entry.food else None,
    }


def serialize_totals(totals: MacroTotals | MacroTargets) -> dict[str, object]:
    return asdict(totals)


def serialize_day(day_log: DayLog) -> dict[str, object]:
    return {
        "date": day_log.day.isoformat(),
        "entries": [serialize_entry(entry) for entry in day_log.entries],
        "totals": serialize_totals(day_log.totals),
    }


def serialize_summary(summary: RangeSummary) -> dict[str, object]:
    return {
        "start_date": summary.start_date.isoformat(),
        "end_date": summary.end_date.isoformat(),
        "days_logged": summary.days_logged,
        "avg_calories": summary.avg_calories,
        "avg_protein": summary.avg_protein,
        "avg_carbs": summary.avg_carbs,
        "avg_fat": summary.avg_fat,
        "daily_data": [
            {
                "date": day.day.isoformat(),
                "calories": day.calories,
                "protein": day.protein,
                "carbs": day.carbs,
                "fat": day.fat,
            }
            for day in summary.daily_data
        ],
    }


def serialize_profile(profile: UserProfile) -> dict[str, object]:
    data = asdict(profile)
    data["id"] = str(profile.id)
    data["user_id"] = str(profile.user_id)
    data["created_at"] = profile.created_at.isoformat() if profile.created_at else None
    data["updated_at"] = profile.updated_at.isoformat() if profile.updated_at else None
    return data
