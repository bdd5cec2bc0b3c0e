"""Plan generation: the public entry point of the generator core.

Flow:
1. Fail fast with NO_DISHES_IN_DB when the catalog is empty
2. Resolve the category list (explicit > profile > default)
3. Create one seeded RNG for the whole plan
4. Generate each day in order; locks apply to day 0 only
5. Decide success: no days -> failure, some days -> partial success with a
   warning, all days -> success

WEEKLY LOCKS:
In weekly mode locks pin the first day only and the rest of the week is
drawn freely. This is deliberate ("lock today's picks, vary the week"),
not a missing loop.
"""

from collections.abc import Mapping, Sequence

from loguru import logger

from mealspin.catalog.base import DishCatalog, ProfileStore
from mealspin.plans.day_generator import generate_day
from mealspin.plans.errors import InvalidPlanRequestError
from mealspin.plans.rng import create_seeded_rng, generate_seed
from mealspin.plans.types import (
    DAYS_PER_MODE,
    SLOT_CATEGORIES,
    FilterOptions,
    GeneratedDay,
    GeneratedPlan,
    PlanError,
    PlanErrorDetails,
    PlanGenerationResult,
)
from mealspin.profiles.rules import resolve_categories


def _effective_categories(
    categories: Sequence[str] | None,
    profile_id: str | None,
    profile_store: ProfileStore | None,
) -> list[str]:
    if categories is None:
        return list(resolve_categories(profile_id, profile_store))

    if not categories:
        raise InvalidPlanRequestError("Category list must not be empty")
    unknown = [c for c in categories if c not in SLOT_CATEGORIES]
    if unknown:
        raise InvalidPlanRequestError(f"Unknown slot categories: {', '.join(unknown)}")
    return list(dict.fromkeys(categories))


def generate_plan(
    catalog: DishCatalog,
    filters: FilterOptions | None = None,
    mode: str = "daily",
    *,
    categories: Sequence[str] | None = None,
    profile_id: str | None = None,
    profile_store: ProfileStore | None = None,
    locks: Mapping[str, str] | None = None,
    seed: str | None = None,
    no_repeat_across_week: bool = False,
) -> PlanGenerationResult:
    """Generate a daily or weekly meal plan.

    Args:
        catalog: Read-only dish catalog
        filters: Filter options applied to every slot (None = no filters)
        mode: "daily" (1 day) or "weekly" (7 days)
        categories: Explicit slot list; overrides the profile when given
        profile_id: Profile whose category list to use
        profile_store: Where to look profile_id up
        locks: Category -> dish id pinned by the caller (day 0 only)
        seed: Seed for reproducible plans; generated when omitted
        no_repeat_across_week: Exclude dishes used on earlier days

    Returns:
        PlanGenerationResult. Expected failures are reported in errors,
        never raised.

    Raises:
        InvalidPlanRequestError: If mode or an explicit category is unknown
        CatalogError: If the catalog cannot be read
    """
    if mode not in DAYS_PER_MODE:
        raise InvalidPlanRequestError(f"Unknown plan mode: {mode}")

    filters = filters or FilterOptions()
    locks = dict(locks or {})

    total_dishes = catalog.count_all_dishes()
    if total_dishes == 0:
        logger.warning("Plan generation aborted: catalog is empty")
        return PlanGenerationResult(
            success=False,
            errors=[
                PlanError(
                    code="NO_DISHES_IN_DB",
                    message="No dishes in database. Please upload a CSV to add dishes.",
                    details=PlanErrorDetails(total_dishes=0),
                )
            ],
        )

    slot_categories = _effective_categories(categories, profile_id, profile_store)

    seed = seed or generate_seed()
    rng = create_seeded_rng(seed)
    num_days = DAYS_PER_MODE[mode]

    logger.info(
        "Starting plan generation",
        mode=mode,
        seed=seed,
        categories=slot_categories,
        active_filters=filters.active_fields(),
        locked_categories=sorted(locks),
        no_repeat_across_week=no_repeat_across_week,
    )

    week_excluded: set[str] = set()
    days: list[GeneratedDay] = []
    all_errors: list[PlanError] = []
    all_warnings: list[str] = []

    for day_index in range(num_days):
        day_result = generate_day(
            catalog,
            day_index,
            slot_categories,
            filters,
            locks if day_index == 0 else {},
            rng,
            week_excluded,
            no_repeat_across_week=no_repeat_across_week,
        )

        if day_result.day is not None:
            days.append(day_result.day)
        else:
            all_errors.extend(day_result.errors)

        all_warnings.extend(day_result.warnings)

    if not days:
        logger.warning("Plan generation failed: no day could be generated", seed=seed, errors=len(all_errors))
        return PlanGenerationResult(success=False, errors=all_errors, warnings=all_warnings)

    if len(days) < num_days:
        all_warnings.append(f"Could only generate {len(days)} out of {num_days} days due to constraints")

    logger.info(
        "Plan generation finished",
        seed=seed,
        days=len(days),
        days_requested=num_days,
        warnings=len(all_warnings),
    )

    return PlanGenerationResult(
        success=True,
        plan=GeneratedPlan(
            days=days,
            seed=seed,
            mode=mode,
            profile_id=profile_id,
            days_requested=num_days,
        ),
        errors=all_errors,
        warnings=all_warnings,
    )
