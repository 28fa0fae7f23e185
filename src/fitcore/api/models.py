"""Pydantic models for ledger API payloads."""

from datetime import date

from pydantic import BaseModel, Field

from fitcore.domain.ledger import DailySummary, LedgerSnapshot
from fitcore.domain.nutrition import FoodMatch
from fitcore.domain.profile import ActivityLevel, BiologicalSex


class MealRequest(BaseModel):
    """Manually entered meal calories."""

    calories: float = Field(ge=0, allow_inf_nan=False)
    meal_type: str = "snack"


class FoodLookupRequest(BaseModel):
    """Free-text food to look up and log."""

    query: str = Field(min_length=1)
    meal_type: str = "snack"


class ConsumedRequest(BaseModel):
    """Authoritative consumed total for today."""

    total: float = Field(ge=0, allow_inf_nan=False)


class StepsRequest(BaseModel):
    """Step count reported by the health-data source."""

    steps: float = Field(ge=0, allow_inf_nan=False)


class ProfileRequest(BaseModel):
    """Body and activity profile."""

    date_of_birth: date | None = None
    biological_sex: BiologicalSex = BiologicalSex.OTHER
    height_cm: float | None = Field(default=None, allow_inf_nan=False)
    weight_kg: float | None = Field(default=None, allow_inf_nan=False)
    activity_level: ActivityLevel | None = None


class RolloverRequest(BaseModel):
    """Day to roll ledgers to; defaults to the current local day."""

    day: date | None = None


class LedgerResponse(BaseModel):
    """Ledger state for a single day."""

    user_id: str
    day: date
    budget: float
    consumed: float
    remaining: float
    default_budget_used: bool

    @classmethod
    def from_snapshot(cls, snapshot: LedgerSnapshot) -> "LedgerResponse":
        """Build a response from a ledger snapshot."""
        return cls(
            user_id=str(snapshot.user_id),
            day=snapshot.day,
            budget=snapshot.budget,
            consumed=snapshot.consumed,
            remaining=snapshot.remaining,
            default_budget_used=snapshot.default_budget_used,
        )


class SummaryResponse(BaseModel):
    """Ledger state with today's activity."""

    ledger: LedgerResponse
    steps: float
    calories_burned: float
    burn_goal_kcal: float
    burn_progress: float

    @classmethod
    def from_summary(cls, summary: DailySummary) -> "SummaryResponse":
        """Build a response from a daily summary."""
        return cls(
            ledger=LedgerResponse.from_snapshot(summary.ledger),
            steps=summary.steps,
            calories_burned=summary.calories_burned,
            burn_goal_kcal=summary.burn_goal_kcal,
            burn_progress=summary.burn_progress,
        )


class FoodMatchResponse(BaseModel):
    """Food with energy and macros per 100 g."""

    food_id: str
    label: str
    energy_kcal: float | None
    protein_g: float
    fat_g: float
    carbs_g: float
    image_url: str | None

    @classmethod
    def from_match(cls, match: FoodMatch) -> "FoodMatchResponse":
        """Build a response from a lookup match."""
        return cls(
            food_id=match.food_id,
            label=match.label,
            energy_kcal=match.energy_kcal,
            protein_g=match.protein_g,
            fat_g=match.fat_g,
            carbs_g=match.carbs_g,
            image_url=match.image_url,
        )


class FoodSearchResponse(BaseModel):
    """Foods matching a search query."""

    query: str
    results: list[FoodMatchResponse]


class FoodResponse(FoodMatchResponse):
    """Matched food and the resulting ledger."""

    ledger: LedgerResponse

    @classmethod
    def from_logged(cls, match: FoodMatch, snapshot: LedgerSnapshot) -> "FoodResponse":
        """Build a response from a lookup match and ledger snapshot."""
        return cls(
            **FoodMatchResponse.from_match(match).model_dump(),
            ledger=LedgerResponse.from_snapshot(snapshot),
        )
