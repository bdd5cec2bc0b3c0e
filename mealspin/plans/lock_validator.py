"""Locked dish validation.

A lock is a hard pre-selection made by the caller. It still has to satisfy
the slot's category and every active filter. An invalid lock is never
dropped or replaced: the caller gets a LOCK_CONFLICT naming the reason.
"""

from dataclasses import dataclass

from mealspin.catalog.base import DishCatalog
from mealspin.catalog.filters import find_filter_violation
from mealspin.plans.types import Dish, FilterOptions


@dataclass(frozen=True)
class LockValidation:
    """Result of validating a locked dish.

    Attributes:
        valid: Whether the lock can be used for the slot
        dish: The locked dish when valid
        reason: Human-readable failure reason when invalid
    """

    valid: bool
    dish: Dish | None = None
    reason: str | None = None


def validate_locked_dish(
    catalog: DishCatalog,
    dish_id: str,
    category: str,
    filters: FilterOptions,
) -> LockValidation:
    """Check a locked dish against its slot and the active filters.

    Rules (first failure wins):
    1. Dish must exist
    2. Dish category must match the slot
    3. Dish must pass every active filter (see catalog.filters)

    Args:
        catalog: Catalog to look the dish up in
        dish_id: Locked dish id
        category: Slot being resolved
        filters: Active filter options

    Returns:
        LockValidation with the dish or a reason
    """
    dish = catalog.get_dish_by_id(dish_id)
    if dish is None:
        return LockValidation(valid=False, reason="Locked dish not found")

    if dish.slot_category != category:
        return LockValidation(
            valid=False,
            reason=f"Locked dish category ({dish.slot_category}) does not match slot {category}",
        )

    violation = find_filter_violation(dish, filters)
    if violation is not None:
        return LockValidation(valid=False, reason=f"Locked dish {violation}")

    return LockValidation(valid=True, dish=dish)
