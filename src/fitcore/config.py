"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    api_token: str
    edamam_app_id: str
    edamam_app_key: str
    edamam_base_url: str = "https://api.edamam.com"
    default_daily_budget_kcal: float = 2000.0
    timezone: str = "UTC"
    kcal_per_step: float = 0.04
    daily_burn_goal_kcal: float = 1000.0
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
