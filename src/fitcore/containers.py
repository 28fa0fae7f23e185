"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitcore.adapters.edamam_client import HttpxEdamamClient
from fitcore.adapters.supabase_calorie_repository import SupabaseCalorieRepository
from fitcore.adapters.supabase_profile_repository import SupabaseProfileRepository
from fitcore.config import Settings
from fitcore.services.budget import BudgetCalculator
from fitcore.services.cache import InMemoryCache
from fitcore.services.day_boundary import MidnightRolloverScheduler
from fitcore.services.ledgers import LedgerService
from fitcore.services.nutrition import NutritionService
from fitcore.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    nutrition_service: NutritionService
    ledger_service: LedgerService
    rollover_scheduler: MidnightRolloverScheduler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    edamam_client = HttpxEdamamClient.create(
        app_id=resolved_settings.edamam_app_id,
        app_key=resolved_settings.edamam_app_key,
        base_url=resolved_settings.edamam_base_url,
    )
    nutrition_service = NutritionService(client=edamam_client, cache=InMemoryCache())
    ledger_service = LedgerService(
        profile_service=profile_service,
        repository=SupabaseCalorieRepository(supabase_client),
        nutrition_service=nutrition_service,
        calculator=BudgetCalculator(
            default_budget_kcal=resolved_settings.default_daily_budget_kcal
        ),
        timezone_name=resolved_settings.timezone,
        kcal_per_step=resolved_settings.kcal_per_step,
        burn_goal_kcal=resolved_settings.daily_burn_goal_kcal,
    )
    rollover_scheduler = MidnightRolloverScheduler(
        ledger_service, resolved_settings.timezone
    )

    async def close_resources() -> None:
        await edamam_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        nutrition_service=nutrition_service,
        ledger_service=ledger_service,
        rollover_scheduler=rollover_scheduler,
        close_resources=close_resources,
    )
