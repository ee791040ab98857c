"""Domain models for user profiles."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

BODY_STAT_FIELDS = (
    "gender",
    "age",
    "height_inches",
    "weight_lbs",
    "activity_level",
    "diet_plan",
)


@dataclass(frozen=True)
class UserProfile:
    """Body stats, diet plan and daily targets for a user."""

    id: UUID
    user_id: UUID
    gender: str | None = None
    age: float | None = None
    height_inches: float | None = None
    weight_lbs: float | None = None
    activity_level: str | None = None
    diet_plan: str | None = None
    calorie_target: float | None = None
    protein_target_g: float | None = None
    carbs_target_g: float | None = None
    fat_target_g: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
