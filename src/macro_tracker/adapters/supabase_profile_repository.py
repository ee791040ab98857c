"""Supabase repository for user profiles."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_tracker.adapters.supabase_support import (
    execute,
    optional_float,
    parse_datetime,
)
from macro_tracker.domain.profile import UserProfile
from macro_tracker.errors import PersistenceError
from macro_tracker.services.profiles import ProfileRepository

TABLE = "user_profile"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the stored profile for a user."""
        response = execute(
            self.client.table(TABLE).select("*").eq("user_id", str(user_id)).limit(1),
            "fetch profile",
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Insert a profile row."""
        response = execute(
            self.client.table(TABLE).insert({"user_id": str(user_id), **payload}),
            "create profile",
        )
        if not response.data:
            raise PersistenceError("Failed to create profile")
        return _parse_profile(response.data[0])

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserProfile:
        """Update the user's profile row."""
        response = execute(
            self.client.table(TABLE).update(payload).eq("user_id", str(user_id)),
            "update profile",
        )
        if not response.data:
            raise PersistenceError("Failed to update profile")
        return _parse_profile(response.data[0])


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        gender=row.get("gender"),
        age=optional_float(row.get("age")),
        height_inches=optional_float(row.get("height_inches")),
        weight_lbs=optional_float(row.get("weight_lbs")),
        activity_level=row.get("activity_level"),
        diet_plan=row.get("diet_plan"),
        calorie_target=optional_float(row.get("calorie_target")),
        protein_target_g=optional_float(row.get("protein_target_g")),
        carbs_target_g=optional_float(row.get("carbs_target_g")),
        fat_target_g=optional_float(row.get("fat_target_g")),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
