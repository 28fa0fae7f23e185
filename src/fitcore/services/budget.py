"""Daily energy budget from BMR and activity level."""

import logging
from dataclasses import dataclass
from datetime import date

from fitcore.domain.errors import InvalidProfileError
from fitcore.domain.profile import ActivityLevel, BiologicalSex, UserProfile

DEFAULT_DAILY_BUDGET_KCAL = 2000.0

_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.NOT_ACTIVE: 1.2,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}
_UNKNOWN_ACTIVITY_MULTIPLIER = 1.0

_logger = logging.getLogger(__name__)


def calculate_age(date_of_birth: date, as_of: date) -> int:
    """Return whole years between birth and the reference date."""
    before_birthday = (as_of.month, as_of.day) < (
        date_of_birth.month,
        date_of_birth.day,
    )
    return as_of.year - date_of_birth.year - int(before_birthday)


def activity_multiplier(level: ActivityLevel | None) -> float:
    """Return the TDEE multiplier for an activity level."""
    if level is None:
        return _UNKNOWN_ACTIVITY_MULTIPLIER
    return _ACTIVITY_MULTIPLIERS.get(level, _UNKNOWN_ACTIVITY_MULTIPLIER)


def compute_bmr(
    sex: BiologicalSex, weight_kg: float, height_cm: float, age: int
) -> float:
    """Mifflin-St Jeor BMR; female and other share the same offset."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if sex == BiologicalSex.MALE:
        return base + 5
    return base - 161


def compute_daily_budget(profile: UserProfile, as_of: date) -> float:
    """Return the kcal/day budget for a profile on a given date.

    Raises InvalidProfileError when the date of birth, height or weight is
    missing or non-positive, or when the reference date precedes birth.
    """
    missing = profile.missing_fields()
    date_of_birth = profile.date_of_birth
    height_cm = profile.height_cm
    weight_kg = profile.weight_kg
    if missing or date_of_birth is None or height_cm is None or weight_kg is None:
        raise InvalidProfileError(missing)
    if as_of < date_of_birth:
        raise InvalidProfileError(["date_of_birth"])

    age = calculate_age(date_of_birth, as_of)
    bmr = compute_bmr(profile.biological_sex, weight_kg, height_cm, age)
    return max(0.0, bmr * activity_multiplier(profile.activity_level))


@dataclass(frozen=True)
class BudgetResolution:
    """Budget actually applied, with the profile error that forced a default."""

    kcal: float
    error: InvalidProfileError | None = None

    @property
    def is_default(self) -> bool:
        """Return True when the default budget was substituted."""
        return self.error is not None


@dataclass(frozen=True)
class BudgetCalculator:
    """Computes budgets and substitutes the product default on bad profiles."""

    default_budget_kcal: float = DEFAULT_DAILY_BUDGET_KCAL

    def resolve(self, profile: UserProfile, as_of: date) -> BudgetResolution:
        """Compute the budget, falling back to the default on invalid profiles."""
        try:
            return BudgetResolution(kcal=compute_daily_budget(profile, as_of))
        except InvalidProfileError as exc:
            _logger.warning(
                "Using default budget %s kcal: %s", self.default_budget_kcal, exc
            )
            return BudgetResolution(kcal=self.default_budget_kcal, error=exc)
