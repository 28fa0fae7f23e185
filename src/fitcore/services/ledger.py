"""Per-user daily calorie ledger."""

import logging
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from fitcore.domain.errors import (
    InvalidInputError,
    InvalidProfileError,
    OverBudgetError,
)
from fitcore.domain.ledger import LedgerSnapshot, MealEntry
from fitcore.domain.profile import UserProfile
from fitcore.services.budget import BudgetCalculator

_logger = logging.getLogger(__name__)


class ConsumedTotalSink(Protocol):
    """Receives the consumed total whenever the ledger changes it."""

    def save_consumed(self, user_id: UUID, day: date, total: float) -> None:
        """Persist the consumed total for a user and day."""


@dataclass
class CalorieLedger:
    """Accrues consumed calories against a daily budget.

    The ledger is not internally synchronized; callers serialize access.
    Budget is fixed at creation, rollover and profile updates.
    """

    user_id: UUID
    profile: UserProfile
    day: date
    calculator: BudgetCalculator
    sink: ConsumedTotalSink | None = None
    consumed: float = 0.0
    budget: float = field(init=False, default=0.0)
    profile_error: InvalidProfileError | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self.consumed = require_non_negative(self.consumed, "consumed")
        self._recompute_budget()

    def record_meal(self, calories: float) -> float:
        """Add a meal's calories and return the new consumed total."""
        calories = require_non_negative(calories, "calories")
        if self.consumed + calories > self.budget:
            raise OverBudgetError(requested=calories, remaining=self.remaining())
        self.consumed += calories
        self._persist()
        return self.consumed

    def record_entry(self, entry: MealEntry) -> float:
        """Record a meal entry and return the new consumed total."""
        try:
            total = self.record_meal(entry.calories)
        except OverBudgetError:
            _logger.info(
                "Rejected %s of %s kcal for user %s logged at %s",
                entry.label,
                entry.calories,
                self.user_id,
                entry.logged_at.isoformat(),
            )
            raise
        _logger.info(
            "Recorded %s of %s kcal for user %s logged at %s (total %s)",
            entry.label,
            entry.calories,
            self.user_id,
            entry.logged_at.isoformat(),
            total,
        )
        return total

    def remaining(self) -> float:
        """Return calories left for the day, never negative."""
        return max(0.0, self.budget - self.consumed)

    def set_consumed(self, total: float) -> None:
        """Overwrite the consumed total from an authoritative store."""
        self.consumed = require_non_negative(total, "total")

    def rollover(self, as_of_day: date) -> bool:
        """Start a new day; returns False when the ledger is already there."""
        if as_of_day <= self.day:
            return False
        previous = self.day
        self.day = as_of_day
        self.consumed = 0.0
        self._recompute_budget()
        self._persist()
        _logger.info(
            "Rolled over ledger for user %s from %s to %s",
            self.user_id,
            previous,
            as_of_day,
        )
        return True

    def update_profile(self, profile: UserProfile) -> None:
        """Replace the profile and recompute today's budget."""
        self.profile = profile
        self._recompute_budget()

    def snapshot(self) -> LedgerSnapshot:
        """Return the current ledger state."""
        return LedgerSnapshot(
            user_id=self.user_id,
            day=self.day,
            budget=self.budget,
            consumed=self.consumed,
            remaining=self.remaining(),
            default_budget_used=self.profile_error is not None,
        )

    def _recompute_budget(self) -> None:
        resolution = self.calculator.resolve(self.profile, self.day)
        self.budget = resolution.kcal
        self.profile_error = resolution.error

    def _persist(self) -> None:
        if self.sink is None:
            return
        try:
            self.sink.save_consumed(self.user_id, self.day, self.consumed)
        except Exception:
            _logger.exception(
                "Failed to persist consumed total for user %s", self.user_id
            )


def require_non_negative(value: float, name: str) -> float:
    """Return ``value`` as a float, rejecting non-finite and negative numbers."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidInputError(f"{name} must be a number")
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(f"{name} must be a non-negative number")
    return float(value)
