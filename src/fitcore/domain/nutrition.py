"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class FoodMatch:
    """A food returned by the nutrition lookup, values per 100 g."""

    food_id: str
    label: str
    energy_kcal: float | None
    protein_g: float
    fat_g: float
    carbs_g: float
    image_url: str | None = None
