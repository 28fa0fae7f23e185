"""Edamam Food Database API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class EdamamClient(Protocol):
    """Interface for Edamam food database lookups."""

    async def parse_food(self, query: str) -> dict[str, object]:
        """Run a free-text food query and return raw API data."""


@dataclass
class HttpxEdamamClient(EdamamClient):
    """HTTPX-backed Edamam client."""

    app_id: str
    app_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, app_id: str, app_key: str, base_url: str) -> "HttpxEdamamClient":
        """Create an Edamam client with a managed httpx session."""
        return cls(
            app_id=app_id,
            app_key=app_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
        )

    async def parse_food(self, query: str) -> dict[str, object]:
        """Query the food-database parser endpoint."""
        url = f"{self.base_url}/api/food-database/v2/parser"
        response = await self.http_client.get(
            url,
            params={"ingr": query, "app_id": self.app_id, "app_key": self.app_key},
            timeout=15,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
