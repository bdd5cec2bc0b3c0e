"""Exceptions for plan generation.

Expected, user-facing failures (empty catalog, no candidates, bad locks)
are reported as PlanError values inside PlanGenerationResult. The
exceptions below cover programming and infrastructure failures only.
"""


class MealPlanError(Exception):
    """Base exception for all mealspin errors."""

    pass


class CatalogError(MealPlanError):
    """Raised when the dish catalog or profile store cannot be read."""

    pass


class InvalidPlanRequestError(MealPlanError):
    """Raised when a generation request is malformed (e.g., unknown mode or category)."""

    pass
