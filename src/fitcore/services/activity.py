"""Step-based activity calculations."""

DEFAULT_KCAL_PER_STEP = 0.04
DEFAULT_BURN_GOAL_KCAL = 1000.0


def calories_burned(
    steps: float, kcal_per_step: float = DEFAULT_KCAL_PER_STEP
) -> float:
    """Estimate calories burned from a step count."""
    return max(0.0, steps) * kcal_per_step


def burn_progress(burned: float, goal_kcal: float = DEFAULT_BURN_GOAL_KCAL) -> float:
    """Return progress toward the burn goal, clamped to [0, 1]."""
    if goal_kcal <= 0:
        return 1.0
    return min(1.0, max(0.0, burned / goal_kcal))
