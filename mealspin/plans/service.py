"""Service entry point for spinning a plan against the database.

This is what a request handler calls: it validates the request payload,
opens a session, wires the SQL catalog and profile store into the
generator and returns the result unchanged.
"""

from loguru import logger
from pydantic import BaseModel, Field

from mealspin.catalog.sql import SqlDishCatalog, SqlProfileStore
from mealspin.config.settings import settings
from mealspin.core.logger import setup_logger_from_settings
from mealspin.db.session import get_session
from mealspin.plans.generator import generate_plan
from mealspin.plans.types import FilterOptions, LockedDishes, PlanGenerationResult, PlanMode

setup_logger_from_settings()


class SpinRequest(BaseModel):
    """Plan generation request.

    Attributes:
        filters: Filter options applied to every slot
        locks: Category -> dish id pinned by the caller (first day only)
        profile_id: Profile whose category list to use
        mode: "daily" or "weekly"
        seed: Seed to reproduce an earlier plan
        no_repeat_across_week: Exclude dishes used on earlier days;
            defaults to MEALSPIN_NO_REPEAT_ACROSS_WEEK
    """

    filters: FilterOptions = Field(default_factory=FilterOptions)
    locks: LockedDishes = Field(default_factory=dict)
    profile_id: str | None = None
    mode: PlanMode = "daily"
    seed: str | None = None
    no_repeat_across_week: bool = Field(default_factory=lambda: settings.default_no_repeat_across_week)


def spin(request: SpinRequest) -> PlanGenerationResult:
    """Generate a plan from the database-backed catalog.

    Args:
        request: Spin request

    Returns:
        PlanGenerationResult from the generator

    Raises:
        CatalogError: If the database cannot be read
    """
    logger.info(
        "Spin requested",
        mode=request.mode,
        profile_id=request.profile_id,
        seeded=request.seed is not None,
    )

    with get_session() as session:
        result = generate_plan(
            SqlDishCatalog(session),
            request.filters,
            request.mode,
            profile_id=request.profile_id,
            profile_store=SqlProfileStore(session),
            locks=request.locks,
            seed=request.seed,
            no_repeat_across_week=request.no_repeat_across_week,
        )

    if result.success:
        logger.info("Spin succeeded", seed=result.plan.seed if result.plan else None, warnings=len(result.warnings))
    else:
        logger.info("Spin failed", error_codes=[e.code for e in result.errors])
    return result
