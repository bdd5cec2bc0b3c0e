"""Plans module - seeded, filter-aware meal plan generation.

This module provides:
- Domain types for dishes, filters, locks and plan results
- A reproducible seeded RNG and Fisher-Yates shuffle
- The generator pipeline: lock validation, slot resolution, day and plan
  generation (see generator.py for the entry point)

Only leaf modules are re-exported here. Import the generator pipeline from
its own modules (mealspin.plans.generator, mealspin.plans.service).
"""

from mealspin.plans.errors import CatalogError, InvalidPlanRequestError, MealPlanError
from mealspin.plans.rng import create_seeded_rng, generate_seed, shuffle_items
from mealspin.plans.types import (
    SLOT_CATEGORIES,
    Dish,
    FilterOptions,
    GeneratedDay,
    GeneratedPlan,
    LockedDishes,
    PlanError,
    PlanGenerationResult,
    SlotCategory,
)

__all__ = [
    "SLOT_CATEGORIES",
    "CatalogError",
    "Dish",
    "FilterOptions",
    "GeneratedDay",
    "GeneratedPlan",
    "InvalidPlanRequestError",
    "LockedDishes",
    "MealPlanError",
    "PlanError",
    "PlanGenerationResult",
    "SlotCategory",
    "create_seeded_rng",
    "generate_seed",
    "shuffle_items",
]
