"""User profile service with automatic macro targets."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.profile import BODY_STAT_FIELDS, UserProfile
from macro_tracker.domain.targets import (
    MacroTargets,
    OtherGenderPolicy,
    compute_macro_targets,
    compute_tdee,
)

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile, if present."""

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Create the user's profile and return it."""

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Update the user's profile and return it."""


@dataclass
class ProfileService:
    """Application service for profile reads and writes."""

    repository: ProfileRepository
    other_gender_policy: OtherGenderPolicy = OtherGenderPolicy.FEMALE

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile or None when the user has not set one up."""
        return self.repository.get_profile(user_id)

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserProfile:
        """Write the supplied fields, recalculating targets when possible.

        Targets are derived only when every body stat arrives in this update
        and no calorie target was given alongside them.
        """
        payload = dict(changes)
        if _has_all_body_stats(changes) and not changes.get("calorie_target"):
            targets = self.preview_targets(changes)
            payload.update(
                {
                    "calorie_target": targets.calories,
                    "protein_target_g": targets.protein,
                    "carbs_target_g": targets.carbs,
                    "fat_target_g": targets.fat,
                }
            )
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()

        if self.repository.get_profile(user_id) is None:
            logger.info("Creating profile", extra={"user_id": str(user_id)})
            return self.repository.create_profile(user_id, payload)
        return self.repository.update_profile(user_id, payload)

    def preview_targets(self, stats: dict[str, object]) -> MacroTargets:
        """Compute targets from body stats without persisting anything."""
        tdee = compute_tdee(
            gender=str(stats["gender"]),
            age=float(stats["age"]),
            height_inches=float(stats["height_inches"]),
            weight_lbs=float(stats["weight_lbs"]),
            activity_level=str(stats["activity_level"]),
            other_policy=self.other_gender_policy,
        )
        return compute_macro_targets(
            tdee, str(stats["diet_plan"]), float(stats["weight_lbs"])
        )


def _has_all_body_stats(changes: dict[str, object]) -> bool:
    return all(changes.get(key) for key in BODY_STAT_FIELDS)
