"""Domain exceptions for the calorie ledger."""


class FitCoreError(Exception):
    """Base exception for ledger domain errors."""


class InvalidProfileError(FitCoreError):
    """Raised when a profile lacks the data needed for a budget."""

    def __init__(self, fields: list[str]):
        super().__init__(f"Invalid profile fields: {', '.join(fields)}")
        self.fields = fields


class OverBudgetError(FitCoreError):
    """Raised when a meal would push consumption past the daily budget."""

    def __init__(self, requested: float, remaining: float):
        super().__init__(
            f"Meal of {requested:g} kcal exceeds remaining {remaining:g} kcal"
        )
        self.requested = requested
        self.remaining = remaining


class InvalidInputError(FitCoreError):
    """Raised when a calorie or step value is negative or not a number."""


class FoodNotFoundError(FitCoreError):
    """Raised when a nutrition lookup returns no matching food."""

    def __init__(self, query: str):
        super().__init__(f"No matching food found for {query}")
        self.query = query


class EnergyUnavailableError(FitCoreError):
    """Raised when the matched food carries no energy value."""

    def __init__(self, query: str):
        super().__init__(f"Calories information not available for {query}")
        self.query = query
