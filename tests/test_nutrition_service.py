"""Tests for nutrition service."""

import asyncio
from dataclasses import dataclass

import httpx
import pytest

from fitcore.adapters.edamam_client import EdamamClient
from fitcore.domain.errors import (
    EnergyUnavailableError,
    FoodNotFoundError,
    InvalidInputError,
)
from fitcore.services.cache import InMemoryCache
from fitcore.services.nutrition import NutritionService
from tests.conftest import FakeEdamamClient


@dataclass
class FlakyEdamamClient(EdamamClient):
    failures: int = 1
    calls: int = 0

    async def parse_food(self, query: str) -> dict[str, object]:
        self.calls += 1
        if self.calls <= self.failures:
            request = httpx.Request("GET", "https://api.edamam.com")
            raise httpx.HTTPStatusError(
                "server error",
                request=request,
                response=httpx.Response(503, request=request),
            )
        return {"hints": [{"food": {"foodId": "f1", "label": "Rice"}}]}


def test_search_uses_cache() -> None:
    client = FakeEdamamClient()
    service = NutritionService(client, InMemoryCache())

    results = asyncio.run(service.search("Apple"))
    assert results[0].food_id == "food_apple"
    assert client.calls == 1

    cached = asyncio.run(service.search("apple "))
    assert cached[0].energy_kcal == 52.0
    assert client.calls == 1


def test_lookup_energy_returns_macros() -> None:
    service = NutritionService(FakeEdamamClient(), InMemoryCache())

    match = asyncio.run(service.lookup_energy("apple"))

    assert match.label == "Apple"
    assert match.energy_kcal == 52.0
    assert match.carbs_g == 13.81
    assert match.image_url == "https://example.com/apple.jpg"


def test_lookup_energy_no_hits() -> None:
    client = FakeEdamamClient(payload={"hints": []})
    service = NutritionService(client, InMemoryCache())

    with pytest.raises(FoodNotFoundError):
        asyncio.run(service.lookup_energy("unobtainium"))


def test_lookup_energy_without_energy_value() -> None:
    service = NutritionService(
        FlakyEdamamClient(failures=0), InMemoryCache(), retry_delay_seconds=0
    )

    with pytest.raises(EnergyUnavailableError):
        asyncio.run(service.lookup_energy("rice"))


def test_lookup_energy_rejects_blank_query() -> None:
    service = NutritionService(FakeEdamamClient(), InMemoryCache())

    with pytest.raises(InvalidInputError):
        asyncio.run(service.lookup_energy("   "))


def test_search_retries_once_then_succeeds() -> None:
    client = FlakyEdamamClient(failures=1)
    service = NutritionService(client, InMemoryCache(), retry_delay_seconds=0)

    results = asyncio.run(service.search("rice"))

    assert results[0].label == "Rice"
    assert client.calls == 2


def test_search_gives_up_after_retries() -> None:
    client = FlakyEdamamClient(failures=5)
    service = NutritionService(client, InMemoryCache(), retry_delay_seconds=0)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(service.search("rice"))

    assert client.calls == 2


def test_search_returns_macros_up_to_limit() -> None:
    food = {
        "foodId": "food_rice",
        "label": "Rice",
        "nutrients": {"ENERC_KCAL": 130, "PROCNT": 2.7, "FAT": 0.3, "CHOCDF": 28},
    }
    client = FakeEdamamClient(payload={"hints": [{"food": food}] * 12})
    service = NutritionService(client, InMemoryCache())

    results = asyncio.run(service.search("rice"))
    first_two = asyncio.run(service.search("rice", limit=2))

    assert len(results) == 10
    assert results[0].protein_g == 2.7
    assert results[0].carbs_g == 28.0
    assert len(first_two) == 2
    assert client.calls == 1


@pytest.mark.parametrize(("query", "limit"), [("  ", 5), ("rice", 0)])
def test_search_rejects_bad_arguments(query: str, limit: int) -> None:
    client = FakeEdamamClient()
    service = NutritionService(client, InMemoryCache())

    with pytest.raises(InvalidInputError):
        asyncio.run(service.search(query, limit=limit))

    assert client.calls == 0
