"""Domain models for the daily calorie ledger."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class MealType(str, Enum):
    """Standard meal slots."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MealEntry:
    """A single meal's calories, consumed by the ledger and then discarded."""

    calories: float
    meal_type: MealType | str
    logged_at: datetime

    @property
    def label(self) -> str:
        """Return the meal type as plain text."""
        if isinstance(self.meal_type, MealType):
            return self.meal_type.value
        return self.meal_type


@dataclass(frozen=True)
class LedgerSnapshot:
    """Point-in-time view of a user's ledger."""

    user_id: UUID
    day: date
    budget: float
    consumed: float
    remaining: float
    default_budget_used: bool


@dataclass(frozen=True)
class DailySummary:
    """Ledger state with today's activity."""

    ledger: LedgerSnapshot
    steps: float
    calories_burned: float
    burn_goal_kcal: float
    burn_progress: float
