"""Slot resolution: fill one category for one day.

Locked path:
    LOCKED_PENDING -> RESOLVED | LOCK_ERROR

Unlocked path:
    query(category, filters, exclude = day picks + week picks)
      -> candidates: shuffle, take first -> RESOLVED
      -> none and week picks exist: query again excluding day picks only
           -> candidates: shuffle, take first, warn -> RESOLVED_RELAXED
           -> none -> NO_CANDIDATES
      -> none -> NO_CANDIDATES

Relaxation only ever drops the weekly exclusion. Same-day duplicates and
filter violations are never allowed.

The resolver does not mutate the exclusion sets; the day generator adds
each resolved dish before resolving the next category.
"""

from collections.abc import Set
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from mealspin.catalog.base import DishCatalog
from mealspin.plans.lock_validator import validate_locked_dish
from mealspin.plans.rng import RNG, shuffle_items
from mealspin.plans.types import Dish, FilterOptions, PlanError, PlanErrorDetails, category_label


class SlotState(str, Enum):
    """Terminal state of a slot resolution."""

    RESOLVED = "resolved"
    RESOLVED_RELAXED = "resolved_relaxed"
    LOCK_ERROR = "lock_error"
    NO_CANDIDATES = "no_candidates"


@dataclass(frozen=True)
class SlotResolution:
    """Outcome of resolving one slot.

    Attributes:
        category: Slot category
        state: Terminal state
        dish: Selected dish (RESOLVED / RESOLVED_RELAXED)
        error: PlanError (LOCK_ERROR / NO_CANDIDATES)
        warning: Set when a weekly repeat was forced
    """

    category: str
    state: SlotState
    dish: Dish | None = None
    error: PlanError | None = None
    warning: str | None = None

    @property
    def resolved(self) -> bool:
        return self.dish is not None


def _select(candidates: list[Dish], rng: RNG) -> Dish:
    # First of shuffled, so every selection consumes the shared stream the same way
    return shuffle_items(candidates, rng)[0]


def _no_candidates_error(
    catalog: DishCatalog,
    category: str,
    day_index: int,
    filters: FilterOptions,
) -> PlanError:
    total = len(catalog.query_candidates(category, FilterOptions()))
    matching = len(catalog.query_candidates(category, filters))
    label = category_label(category)

    if total == 0:
        failed_constraint = "No dishes in this category"
    elif matching == 0:
        failed_constraint = "All dishes filtered out by constraints"
    else:
        failed_constraint = "All matching dishes already used"

    return PlanError(
        code="NO_CANDIDATES_FOR_CATEGORY",
        message=f"No dishes available for {label} that match your filters ({matching} of {total} dishes qualify)",
        category=category,
        day_index=day_index,
        details=PlanErrorDetails(
            total_dishes=total,
            candidates_per_category={category: matching},
            applied_filters=filters,
            failed_constraint=failed_constraint,
        ),
    )


def resolve_slot(
    catalog: DishCatalog,
    category: str,
    day_index: int,
    filters: FilterOptions,
    rng: RNG,
    *,
    locked_dish_id: str | None = None,
    day_excluded: Set[str] = frozenset(),
    week_excluded: Set[str] = frozenset(),
) -> SlotResolution:
    """Resolve one category slot for one day.

    Args:
        catalog: Dish catalog
        category: Slot category to fill
        day_index: Zero-based day index (used in warnings and errors)
        filters: Active filter options
        rng: The plan's shared RNG stream
        locked_dish_id: Caller-pinned dish for this slot, if any
        day_excluded: Dish ids already chosen today
        week_excluded: Dish ids chosen on earlier days (empty unless
            no-repeat-across-week is enabled)

    Returns:
        SlotResolution in a terminal state
    """
    if locked_dish_id:
        validation = validate_locked_dish(catalog, locked_dish_id, category, filters)
        if not validation.valid:
            logger.info(
                "Locked dish rejected",
                category=category,
                day_index=day_index,
                dish_id=locked_dish_id,
                reason=validation.reason,
            )
            return SlotResolution(
                category=category,
                state=SlotState.LOCK_ERROR,
                error=PlanError(
                    code="LOCK_CONFLICT",
                    message=f"Locked dish for {category}: {validation.reason}",
                    category=category,
                    day_index=day_index,
                    details=PlanErrorDetails(failed_constraint=validation.reason),
                ),
            )
        logger.debug("Using locked dish", category=category, day_index=day_index, dish_id=locked_dish_id)
        return SlotResolution(category=category, state=SlotState.RESOLVED, dish=validation.dish)

    candidates = catalog.query_candidates(category, filters, day_excluded | week_excluded)
    if candidates:
        dish = _select(candidates, rng)
        logger.debug(
            "Slot resolved",
            category=category,
            day_index=day_index,
            dish_id=dish.id,
            candidates=len(candidates),
        )
        return SlotResolution(category=category, state=SlotState.RESOLVED, dish=dish)

    if week_excluded:
        candidates = catalog.query_candidates(category, filters, day_excluded)
        if candidates:
            dish = _select(candidates, rng)
            warning = f"Day {day_index + 1}: Had to repeat a dish from earlier in the week for {category}"
            logger.warning(
                "Weekly no-repeat relaxed",
                category=category,
                day_index=day_index,
                dish_id=dish.id,
            )
            return SlotResolution(
                category=category,
                state=SlotState.RESOLVED_RELAXED,
                dish=dish,
                warning=warning,
            )

    error = _no_candidates_error(catalog, category, day_index, filters)
    logger.info(
        "No candidates for slot",
        category=category,
        day_index=day_index,
        failed_constraint=error.details.failed_constraint,
    )
    return SlotResolution(category=category, state=SlotState.NO_CANDIDATES, error=error)
