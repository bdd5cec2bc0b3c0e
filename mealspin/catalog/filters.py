"""Shared dish filter predicate.

The in-memory catalog and the lock validator both call
find_filter_violation so that a locked dish and a randomly drawn dish are
held to exactly the same rules. SqlDishCatalog mirrors these checks in SQL.

Checks run in a fixed order and the first failure wins:
1. kosher_only
2. kosher_styles
3. difficulties
4. main_proteins (a dish without a protein fails an active protein filter)
5. cuisines (same rule for a missing cuisine)
6. include_ingredients (dish must contain all)
7. exclude_ingredients
8. exclude_allergens
9. max_total_time_minutes (prep + cook, missing times count as 0)
"""

from mealspin.plans.types import Dish, FilterOptions


def find_filter_violation(dish: Dish, filters: FilterOptions) -> str | None:
    """Return a short description of the first filter the dish violates.

    Args:
        dish: Dish to check
        filters: Active filter options

    Returns:
        None if the dish satisfies every active filter, otherwise a
        description such as "difficulty (hard) not allowed"
    """
    if filters.kosher_only and not dish.kosher:
        return "is not kosher"

    if filters.kosher_styles and dish.kosher_style not in filters.kosher_styles:
        return f"kosher style ({dish.kosher_style}) not allowed"

    if filters.difficulties and dish.difficulty not in filters.difficulties:
        return f"difficulty ({dish.difficulty}) not allowed"

    if filters.main_proteins and dish.main_protein not in filters.main_proteins:
        return f"protein ({dish.main_protein or 'none'}) not allowed"

    if filters.cuisines and dish.cuisine not in filters.cuisines:
        return f"cuisine ({dish.cuisine or 'none'}) not allowed"

    if filters.include_ingredients:
        missing = next((ing for ing in filters.include_ingredients if ing not in dish.ingredients), None)
        if missing is not None:
            return f"is missing required ingredient: {missing}"

    if filters.exclude_ingredients:
        excluded = next((ing for ing in filters.exclude_ingredients if ing in dish.ingredients), None)
        if excluded is not None:
            return f"contains excluded ingredient: {excluded}"

    if filters.exclude_allergens:
        excluded = next((alg for alg in filters.exclude_allergens if alg in dish.allergens), None)
        if excluded is not None:
            return f"contains excluded allergen: {excluded}"

    if filters.max_total_time_minutes:
        total_time = dish.total_time_minutes
        if total_time > filters.max_total_time_minutes:
            return f"total time ({total_time}min) exceeds maximum ({filters.max_total_time_minutes}min)"

    return None


def dish_matches_filters(dish: Dish, filters: FilterOptions) -> bool:
    """Check whether a dish satisfies every active filter."""
    return find_filter_violation(dish, filters) is None
