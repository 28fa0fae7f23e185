"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitcore.services.profiles import ProfileRepository

_PROFILE_COLUMNS = "date_of_birth, gender, height, weight, activity_level"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile documents."""

    client: Client

    def get_profile_document(self, user_id: UUID) -> dict[str, object] | None:
        """Return the stored profile row for a user."""
        response = (
            self.client.table("profiles")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return dict(response.data[0])

    def save_profile_document(
        self, user_id: UUID, document: dict[str, object]
    ) -> None:
        """Upsert the profile row for a user."""
        payload = {
            **document,
            "user_id": str(user_id),
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        self.client.table("profiles").upsert(payload, on_conflict="user_id").execute()
