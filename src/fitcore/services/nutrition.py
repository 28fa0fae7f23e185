"""Nutrition lookups against the Edamam food database."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fitcore.adapters.edamam_client import EdamamClient
from fitcore.domain.errors import (
    EnergyUnavailableError,
    FoodNotFoundError,
    InvalidInputError,
)
from fitcore.domain.nutrition import FoodMatch
from fitcore.services.cache import Cache

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


@dataclass
class NutritionService:
    """Service for food energy lookups with caching."""

    client: EdamamClient
    cache: Cache
    search_ttl_seconds: int = 3600
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 10) -> list[FoodMatch]:
        """Return up to ``limit`` foods matching a free-text query."""
        normalized = query.strip().lower()
        if not normalized:
            raise InvalidInputError("food query must not be empty")
        if limit < 1:
            raise InvalidInputError("limit must be at least 1")
        cache_key = f"edamam:parser:{normalized}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached[:limit]

        payload = await self._call_with_retry(
            lambda: self.client.parse_food(normalized), action="parse"
        )
        matches = [
            _parse_food(hint.get("food") or {})
            for hint in payload.get("hints", [])
            if isinstance(hint, dict)
        ]
        self.cache.set(cache_key, matches, ttl_seconds=self.search_ttl_seconds)
        _logger.debug("Nutrition search: query=%s results=%s", query, len(matches))
        return matches[:limit]

    async def lookup_energy(self, query: str) -> FoodMatch:
        """Return the best match for a query, which always carries energy."""
        matches = await self.search(query, limit=1)
        if not matches:
            raise FoodNotFoundError(query)
        match = matches[0]
        if match.energy_kcal is None:
            raise EnergyUnavailableError(query)
        return match

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Nutrition %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _parse_food(food: dict[str, object]) -> FoodMatch:
    """Build a match from an Edamam ``food`` object."""
    nutrients = food.get("nutrients") or {}
    if not isinstance(nutrients, dict):
        nutrients = {}
    energy = nutrients.get("ENERC_KCAL")
    image = food.get("image")
    return FoodMatch(
        food_id=str(food.get("foodId") or ""),
        label=str(food.get("label") or ""),
        energy_kcal=float(energy) if isinstance(energy, int | float) else None,
        protein_g=_nutrient(nutrients, "PROCNT"),
        fat_g=_nutrient(nutrients, "FAT"),
        carbs_g=_nutrient(nutrients, "CHOCDF"),
        image_url=image if isinstance(image, str) and image else None,
    )


def _nutrient(nutrients: dict[str, object], key: str) -> float:
    value = nutrients.get(key)
    if isinstance(value, int | float):
        return float(value)
    return 0.0
