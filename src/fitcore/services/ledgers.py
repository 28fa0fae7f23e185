"""Application service owning one calorie ledger per user."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from fitcore.domain.ledger import DailySummary, LedgerSnapshot, MealEntry, MealType
from fitcore.domain.nutrition import FoodMatch
from fitcore.domain.profile import UserProfile
from fitcore.services.activity import (
    DEFAULT_BURN_GOAL_KCAL,
    DEFAULT_KCAL_PER_STEP,
    burn_progress,
    calories_burned,
)
from fitcore.services.budget import BudgetCalculator
from fitcore.services.ledger import CalorieLedger, require_non_negative
from fitcore.services.nutrition import NutritionService
from fitcore.services.profiles import ProfileService

_logger = logging.getLogger(__name__)


class ConsumedTotalRepository(Protocol):
    """Persistence interface for daily consumed totals."""

    def load_consumed(self, user_id: UUID, day: date) -> float | None:
        """Return the stored consumed total for a user and day."""

    def save_consumed(self, user_id: UUID, day: date, total: float) -> None:
        """Persist the consumed total for a user and day."""


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class LedgerService:
    """Hydrates, mutates and rolls over per-user ledgers."""

    profile_service: ProfileService
    repository: ConsumedTotalRepository
    nutrition_service: NutritionService
    calculator: BudgetCalculator
    timezone_name: str = "UTC"
    kcal_per_step: float = DEFAULT_KCAL_PER_STEP
    burn_goal_kcal: float = DEFAULT_BURN_GOAL_KCAL
    clock: Callable[[], datetime] = _utc_now
    _ledgers: dict[UUID, CalorieLedger] = field(default_factory=dict, init=False)
    _steps: dict[UUID, float] = field(default_factory=dict, init=False)

    def today(self) -> date:
        """Return the current local calendar day."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    def get_ledger(self, user_id: UUID) -> CalorieLedger:
        """Return the user's ledger for today, hydrating it on first use."""
        today = self.today()
        ledger = self._ledgers.get(user_id)
        if ledger is not None and ledger.day < today:
            self._evict(user_id)
            ledger = None
        if ledger is None:
            ledger = self._hydrate(user_id, today)
            self._ledgers[user_id] = ledger
        return ledger

    def log_meal(self, user_id: UUID, entry: MealEntry) -> LedgerSnapshot:
        """Record a meal entry against today's budget."""
        ledger = self.get_ledger(user_id)
        ledger.record_entry(entry)
        return ledger.snapshot()

    async def log_food(
        self, user_id: UUID, query: str, meal_type: MealType | str
    ) -> tuple[FoodMatch, LedgerSnapshot]:
        """Look up a food's energy and record it as a meal."""
        match = await self.nutrition_service.lookup_energy(query)
        entry = MealEntry(
            calories=match.energy_kcal or 0.0,
            meal_type=meal_type,
            logged_at=self.clock(),
        )
        return match, self.log_meal(user_id, entry)

    def set_consumed(self, user_id: UUID, total: float) -> LedgerSnapshot:
        """Store an authoritative consumed total and apply it to the ledger."""
        total = require_non_negative(total, "total")
        ledger = self.get_ledger(user_id)
        self.repository.save_consumed(user_id, ledger.day, total)
        ledger.set_consumed(total)
        return ledger.snapshot()

    def update_profile(self, user_id: UUID, profile: UserProfile) -> LedgerSnapshot:
        """Persist a profile and recompute today's budget from it."""
        self.profile_service.save_profile(user_id, profile)
        ledger = self.get_ledger(user_id)
        ledger.update_profile(profile)
        return ledger.snapshot()

    def record_steps(self, user_id: UUID, steps: float) -> DailySummary:
        """Store today's step count reported by the health-data source."""
        steps = require_non_negative(steps, "steps")
        self.get_ledger(user_id)
        self._steps[user_id] = steps
        return self.summary(user_id)

    def rollover_all(self, day: date) -> int:
        """Release every held ledger older than ``day``; returns how many.

        Released ledgers are rebuilt from storage on next access.
        """
        stale = [
            user_id for user_id, ledger in self._ledgers.items() if ledger.day < day
        ]
        for user_id in stale:
            self._evict(user_id)
        _logger.info("Rollover to %s released %s ledgers", day, len(stale))
        return len(stale)

    def held_ledgers(self) -> int:
        """Return how many ledgers are currently in memory."""
        return len(self._ledgers)

    def summary(self, user_id: UUID) -> DailySummary:
        """Return today's ledger state with activity."""
        snapshot = self.get_ledger(user_id).snapshot()
        steps = self._steps.get(user_id, 0.0)
        burned = calories_burned(steps, self.kcal_per_step)
        return DailySummary(
            ledger=snapshot,
            steps=steps,
            calories_burned=burned,
            burn_goal_kcal=self.burn_goal_kcal,
            burn_progress=burn_progress(burned, self.burn_goal_kcal),
        )

    def _evict(self, user_id: UUID) -> None:
        self._ledgers.pop(user_id, None)
        self._steps.pop(user_id, None)

    def _hydrate(self, user_id: UUID, day: date) -> CalorieLedger:
        profile = self.profile_service.get_profile(user_id)
        ledger = CalorieLedger(
            user_id=user_id,
            profile=profile,
            day=day,
            calculator=self.calculator,
            sink=self.repository,
        )
        stored = self.repository.load_consumed(user_id, day)
        if stored is not None:
            ledger.set_consumed(stored)
        _logger.info(
            "Opened ledger for user %s on %s: budget=%.1f consumed=%.1f",
            user_id,
            day,
            ledger.budget,
            ledger.consumed,
        )
        return ledger
