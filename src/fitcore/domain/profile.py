"""Domain models for user body and activity profiles."""

from dataclasses import dataclass
from datetime import date
from enum import Enum


class BiologicalSex(str, Enum):
    """Sex used to pick the BMR formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    NOT_ACTIVE = "not_active"
    MODERATELY_ACTIVE = "moderately_active"
    EXTREMELY_ACTIVE = "extremely_active"


@dataclass(frozen=True)
class UserProfile:
    """Body and activity attributes used for the daily budget."""

    date_of_birth: date | None = None
    biological_sex: BiologicalSex = BiologicalSex.OTHER
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel | None = None

    def missing_fields(self) -> list[str]:
        """Return required fields that are absent or non-positive."""
        missing: list[str] = []
        if self.date_of_birth is None:
            missing.append("date_of_birth")
        if self.height_cm is None or self.height_cm <= 0:
            missing.append("height_cm")
        if self.weight_kg is None or self.weight_kg <= 0:
            missing.append("weight_kg")
        return missing
