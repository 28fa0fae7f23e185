"""Ledger API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from fitcore.api.models import (
    ConsumedRequest,
    FoodLookupRequest,
    FoodMatchResponse,
    FoodResponse,
    FoodSearchResponse,
    LedgerResponse,
    MealRequest,
    ProfileRequest,
    RolloverRequest,
    StepsRequest,
    SummaryResponse,
)
from fitcore.domain.errors import (
    EnergyUnavailableError,
    FitCoreError,
    FoodNotFoundError,
    InvalidInputError,
    OverBudgetError,
)
from fitcore.domain.ledger import MealEntry, MealType
from fitcore.domain.profile import UserProfile

if TYPE_CHECKING:
    from fitcore.containers import AppContainer

router = APIRouter(tags=["ledger"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/users/{user_id}/ledger", dependencies=[Depends(require_api_token)])
async def get_ledger(user_id: UUID, request: Request) -> SummaryResponse:
    """Return today's budget, consumption and activity."""
    container: AppContainer = request.app.state.container
    summary = container.ledger_service.summary(user_id)
    return SummaryResponse.from_summary(summary)


@router.post("/users/{user_id}/meals", dependencies=[Depends(require_api_token)])
async def log_meal(
    user_id: UUID, payload: MealRequest, request: Request
) -> LedgerResponse:
    """Record manually entered meal calories."""
    container: AppContainer = request.app.state.container
    entry = MealEntry(
        calories=payload.calories,
        meal_type=_parse_meal_type(payload.meal_type),
        logged_at=container.ledger_service.clock(),
    )
    try:
        snapshot = container.ledger_service.log_meal(user_id, entry)
    except FitCoreError as exc:
        raise _http_error(exc) from exc
    return LedgerResponse.from_snapshot(snapshot)


@router.post(
    "/users/{user_id}/meals/lookup", dependencies=[Depends(require_api_token)]
)
async def log_food(
    user_id: UUID, payload: FoodLookupRequest, request: Request
) -> FoodResponse:
    """Look up a food's energy value and record it."""
    container: AppContainer = request.app.state.container
    try:
        match, snapshot = await container.ledger_service.log_food(
            user_id, payload.query, _parse_meal_type(payload.meal_type)
        )
    except FitCoreError as exc:
        raise _http_error(exc) from exc
    return FoodResponse.from_logged(match, snapshot)


@router.get("/foods/search", dependencies=[Depends(require_api_token)])
async def search_foods(
    request: Request,
    query: str = Query(min_length=1),
    limit: int = Query(default=10, ge=1, le=50),
) -> FoodSearchResponse:
    """List foods matching a query with their energy and macros."""
    container: AppContainer = request.app.state.container
    try:
        matches = await container.nutrition_service.search(query, limit=limit)
    except FitCoreError as exc:
        raise _http_error(exc) from exc
    return FoodSearchResponse(
        query=query,
        results=[FoodMatchResponse.from_match(match) for match in matches],
    )


@router.put("/users/{user_id}/consumed", dependencies=[Depends(require_api_token)])
async def set_consumed(
    user_id: UUID, payload: ConsumedRequest, request: Request
) -> LedgerResponse:
    """Overwrite today's consumed total."""
    container: AppContainer = request.app.state.container
    try:
        snapshot = container.ledger_service.set_consumed(user_id, payload.total)
    except FitCoreError as exc:
        raise _http_error(exc) from exc
    return LedgerResponse.from_snapshot(snapshot)


@router.put("/users/{user_id}/profile", dependencies=[Depends(require_api_token)])
async def update_profile(
    user_id: UUID, payload: ProfileRequest, request: Request
) -> LedgerResponse:
    """Store a profile and recompute today's budget."""
    container: AppContainer = request.app.state.container
    profile = UserProfile(
        date_of_birth=payload.date_of_birth,
        biological_sex=payload.biological_sex,
        height_cm=payload.height_cm,
        weight_kg=payload.weight_kg,
        activity_level=payload.activity_level,
    )
    snapshot = container.ledger_service.update_profile(user_id, profile)
    return LedgerResponse.from_snapshot(snapshot)


@router.post("/users/{user_id}/steps", dependencies=[Depends(require_api_token)])
async def record_steps(
    user_id: UUID, payload: StepsRequest, request: Request
) -> SummaryResponse:
    """Store today's step count."""
    container: AppContainer = request.app.state.container
    try:
        summary = container.ledger_service.record_steps(user_id, payload.steps)
    except FitCoreError as exc:
        raise _http_error(exc) from exc
    return SummaryResponse.from_summary(summary)


@router.post("/rollover", dependencies=[Depends(require_api_token)])
async def rollover(payload: RolloverRequest, request: Request) -> dict[str, object]:
    """Roll every ledger to the given day, or to today."""
    container: AppContainer = request.app.state.container
    day = payload.day or container.ledger_service.today()
    advanced = container.ledger_service.rollover_all(day)
    return {"day": day.isoformat(), "advanced": advanced}


def _parse_meal_type(value: str) -> MealType | str:
    try:
        return MealType(value.strip().lower())
    except ValueError:
        return value


def _http_error(exc: FitCoreError) -> HTTPException:
    if isinstance(exc, OverBudgetError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": "over_budget",
                "message": str(exc),
                "requested": exc.requested,
                "remaining": exc.remaining,
            },
        )
    if isinstance(exc, FoodNotFoundError | EnergyUnavailableError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=422, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
