"""Profile store access and document validation."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from uuid import UUID

from fitcore.domain.profile import ActivityLevel, BiologicalSex, UserProfile

_DOB_FORMATS = ("%m/%d/%Y", "%Y-%m-%d")
_MEASUREMENT_PATTERN = re.compile(r"\d+(?:\.\d+)?")

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for raw profile documents."""

    def get_profile_document(self, user_id: UUID) -> dict[str, object] | None:
        """Return the stored profile document, if any."""

    def save_profile_document(
        self, user_id: UUID, document: dict[str, object]
    ) -> None:
        """Create or replace the profile document for a user."""


@dataclass
class ProfileService:
    """Loads and stores typed user profiles."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the user's profile, empty when none is stored."""
        document = self.repository.get_profile_document(user_id)
        if document is None:
            _logger.warning("No profile stored for user %s", user_id)
            return UserProfile()
        profile = profile_from_document(document)
        missing = profile.missing_fields()
        if missing:
            _logger.warning(
                "Incomplete profile for user %s: %s", user_id, ", ".join(missing)
            )
        return profile

    def save_profile(self, user_id: UUID, profile: UserProfile) -> None:
        """Persist a user's profile."""
        self.repository.save_profile_document(user_id, profile_to_document(profile))


def profile_from_document(document: dict[str, object]) -> UserProfile:
    """Build a profile from a stored document, dropping unreadable values."""
    return UserProfile(
        date_of_birth=parse_date_of_birth(document.get("date_of_birth")),
        biological_sex=parse_biological_sex(document.get("gender")),
        height_cm=parse_measurement(document.get("height")),
        weight_kg=parse_measurement(document.get("weight")),
        activity_level=parse_activity_level(document.get("activity_level")),
    )


def profile_to_document(profile: UserProfile) -> dict[str, object]:
    """Serialize a profile for storage."""
    return {
        "date_of_birth": (
            profile.date_of_birth.isoformat() if profile.date_of_birth else None
        ),
        "gender": profile.biological_sex.value,
        "height": profile.height_cm,
        "weight": profile.weight_kg,
        "activity_level": (
            profile.activity_level.value if profile.activity_level else None
        ),
    }


def parse_measurement(value: object) -> float | None:
    """Extract the number from values like ``182``, ``"182 cm"`` or ``"78.5kg"``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value)
    if not isinstance(value, str):
        return None
    match = _MEASUREMENT_PATTERN.search(value)
    if match is None:
        return None
    return float(match.group())


def parse_date_of_birth(value: object) -> date | None:
    """Parse a birth date in ``MM/DD/YYYY`` or ISO format."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    cleaned = value.strip()
    for fmt in _DOB_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def parse_biological_sex(value: object) -> BiologicalSex:
    """Map a sex label to the enum, defaulting to OTHER."""
    label = _normalize_label(value)
    try:
        return BiologicalSex(label)
    except ValueError:
        return BiologicalSex.OTHER


def parse_activity_level(value: object) -> ActivityLevel | None:
    """Map labels like ``"Moderately active"`` to the enum."""
    label = _normalize_label(value)
    try:
        return ActivityLevel(label)
    except ValueError:
        return None


def _normalize_label(value: object) -> str:
    if not isinstance(value, str):
        return ""
    return re.sub(r"[\s\-_]+", "_", value.strip().lower())
