"""Pydantic request models for the HTTP API."""

from datetime import date

from pydantic import BaseModel, Field

from macro_tracker.domain.targets import ActivityLevel, DietPlan, Gender


class CreateLogRequest(BaseModel):
    """Free-text food description to parse and log."""

    input: str = Field(min_length=1)
    logged_at: date | None = None


class UpdateLogRequest(BaseModel):
    """New servings for a log entry."""

    servings: float = Field(gt=0)


class UpdateFoodRequest(BaseModel):
    """Partial update of a library food."""

    name: str | None = Field(default=None, min_length=1)
    serving_unit: str | None = Field(default=None, min_length=1)
    calories_per_serving: float | None = Field(default=None, ge=0)
    protein_per_serving: float | None = Field(default=None, ge=0)
    carbs_per_serving: float | None = Field(default=None, ge=0)
    fat_per_serving: float | None = Field(default=None, ge=0)


class UpdateProfileRequest(BaseModel):
    """Partial profile update; explicit nulls clear a field."""

    gender: Gender | None = None
    age: float | None = Field(default=None, gt=0)
    height_inches: float | None = Field(default=None, gt=0)
    weight_lbs: float | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None
    diet_plan: DietPlan | None = None
    calorie_target: float | None = Field(default=None, gt=0)
    protein_target_g: float | None = Field(default=None, ge=0)
    carbs_target_g: float | None = Field(default=None, ge=0)
    fat_target_g: float | None = Field(default=None, ge=0)


class TargetsPreviewRequest(BaseModel):
    """Body stats used to preview targets."""

    gender: Gender
    age: float = Field(gt=0)
    height_inches: float = Field(gt=0)
    weight_lbs: float = Field(gt=0)
    activity_level: ActivityLevel
    diet_plan: DietPlan
