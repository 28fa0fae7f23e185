"""Supabase repository for daily consumed-calorie totals."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from fitcore.services.ledgers import ConsumedTotalRepository


@dataclass
class SupabaseCalorieRepository(ConsumedTotalRepository):
    """Supabase implementation for consumed totals, one row per user and day."""

    client: Client

    def load_consumed(self, user_id: UUID, day: date) -> float | None:
        """Return the stored total for a user and day."""
        response = (
            self.client.table("calorie_totals")
            .select("consumed_calories")
            .eq("user_id", str(user_id))
            .eq("day", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("consumed_calories")
        if isinstance(value, int | float):
            return float(value)
        return None

    def save_consumed(self, user_id: UUID, day: date, total: float) -> None:
        """Upsert the total for a user and day."""
        self.client.table("calorie_totals").upsert(
            {
                "user_id": str(user_id),
                "day": day.isoformat(),
                "consumed_calories": total,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,day",
        ).execute()
