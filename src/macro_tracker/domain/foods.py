"""Domain models for the user food library."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, model_validator

DEFAULT_SERVING_UNIT = "1 serving"


@dataclass(frozen=True)
class FoodItem:
    """Represents a reusable food entry in a user's library."""

    id: UUID
    user_id: UUID
    name: str
    serving_unit: str
    calories_per_serving: float
    protein_per_serving: float
    carbs_per_serving: float
    fat_per_serving: float
    times_used: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ParsedFood(BaseModel):
    """Structured food record produced from a free-text description.

    Missing, null or zero-valued fields fall back to their defaults.
    """

    name: str
    servings: float = 1
    serving_unit: str = DEFAULT_SERVING_UNIT
    calories_per_serving: float = 0
    protein_per_serving: float = 0
    carbs_per_serving: float = 0
    fat_per_serving: float = 0

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_values(cls, data: object) -> object:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value}
        return data

    def library_payload(self) -> dict[str, object]:
        """Return the columns used to create a library entry."""
        return {
            "name": self.name,
            "serving_unit": self.serving_unit,
            "calories_per_serving": self.calories_per_serving,
            "protein_per_serving": self.protein_per_serving,
            "carbs_per_serving": self.carbs_per_serving,
            "fat_per_serving": self.fat_per_serving,
        }
