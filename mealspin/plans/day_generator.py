"""Day generation: resolve every slot for one day.

Categories are resolved in the order given. Each resolved dish joins the
day's exclusion set before the next category is resolved, so category
order decides which slot gets first pick. Resolution continues past a
failed slot so the caller sees every problem with the day at once, but
any error fails the whole day: no partial day is returned.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from loguru import logger

from mealspin.catalog.base import DishCatalog
from mealspin.plans.rng import RNG
from mealspin.plans.slot_resolver import resolve_slot
from mealspin.plans.types import Dish, FilterOptions, GeneratedDay, PlanError


@dataclass
class DayResult:
    """Outcome of generating one day.

    Attributes:
        day_index: Zero-based day index
        day: The generated day (None if any slot failed)
        errors: Errors from failed slots
        warnings: Warnings from all slots, including those before a failure
    """

    day_index: int
    day: GeneratedDay | None = None
    errors: list[PlanError] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.day is not None


def generate_day(
    catalog: DishCatalog,
    day_index: int,
    categories: Sequence[str],
    filters: FilterOptions,
    locks: Mapping[str, str],
    rng: RNG,
    week_excluded: set[str],
    *,
    no_repeat_across_week: bool,
) -> DayResult:
    """Generate one day of a plan.

    Args:
        catalog: Dish catalog
        day_index: Zero-based day index
        categories: Slots to fill, in resolution order
        filters: Active filter options
        locks: Category -> locked dish id for this day
        rng: The plan's shared RNG stream
        week_excluded: Dish ids used on earlier days. Updated in place with
            this day's picks when the day succeeds and no_repeat_across_week
            is enabled.
        no_repeat_across_week: Whether earlier days' dishes are excluded

    Returns:
        DayResult with either a GeneratedDay or the day's errors
    """
    selected: dict[str, Dish] = {}
    day_excluded: set[str] = set()
    result = DayResult(day_index=day_index)
    weekly = frozenset(week_excluded) if no_repeat_across_week else frozenset()

    for category in categories:
        resolution = resolve_slot(
            catalog,
            category,
            day_index,
            filters,
            rng,
            locked_dish_id=locks.get(category),
            day_excluded=frozenset(day_excluded),
            week_excluded=weekly,
        )

        if resolution.warning:
            result.warnings.append(resolution.warning)

        if resolution.error is not None:
            result.errors.append(resolution.error)
            continue

        if resolution.dish is not None:
            selected[category] = resolution.dish
            day_excluded.add(resolution.dish.id)

    if result.errors:
        logger.info(
            "Day generation failed",
            day_index=day_index,
            failed_categories=[e.category for e in result.errors],
        )
        return result

    if no_repeat_across_week:
        week_excluded.update(day_excluded)

    result.day = GeneratedDay(day_index=day_index, dishes=selected)
    return result
