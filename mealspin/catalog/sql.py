"""SQLAlchemy-backed catalog and profile store.

Expresses the same conjunction as catalog.filters.find_filter_violation
in SQL so that filtering happens in the database. Results are ordered by
dish id to honour the ordering contract in catalog.base.
"""

from collections.abc import Collection

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mealspin.db.models import CustomerProfile, DishAllergen, DishIngredient, DishRecord
from mealspin.plans.errors import CatalogError
from mealspin.plans.types import Dish, FilterOptions


def build_candidate_query(
    category: str,
    filters: FilterOptions,
    exclude_ids: Collection[str] = (),
) -> Select[tuple[DishRecord]]:
    """Build the SELECT for candidate dishes.

    Args:
        category: Slot category to draw from
        filters: Filter options (None / empty fields are skipped)
        exclude_ids: Dish ids to leave out

    Returns:
        Select statement ordered by dish id
    """
    stmt = select(DishRecord).where(DishRecord.slot_category == category)

    if filters.kosher_only:
        stmt = stmt.where(DishRecord.kosher.is_(True))

    if filters.kosher_styles:
        stmt = stmt.where(DishRecord.kosher_style.in_(filters.kosher_styles))

    if filters.difficulties:
        stmt = stmt.where(DishRecord.difficulty.in_(filters.difficulties))

    # IN never matches NULL, so dishes without a protein/cuisine drop out
    if filters.main_proteins:
        stmt = stmt.where(DishRecord.main_protein.in_(filters.main_proteins))

    if filters.cuisines:
        stmt = stmt.where(DishRecord.cuisine.in_(filters.cuisines))

    # Dish must contain ALL required ingredients: one EXISTS per ingredient
    for ingredient in filters.include_ingredients or []:
        stmt = stmt.where(DishRecord.ingredients.any(func.lower(DishIngredient.name) == ingredient))

    if filters.exclude_ingredients:
        stmt = stmt.where(
            ~DishRecord.ingredients.any(func.lower(DishIngredient.name).in_(filters.exclude_ingredients))
        )

    if filters.exclude_allergens:
        stmt = stmt.where(
            ~DishRecord.allergens.any(func.lower(DishAllergen.name).in_(filters.exclude_allergens))
        )

    if filters.max_total_time_minutes:
        total_time = func.coalesce(DishRecord.prep_time_minutes, 0) + func.coalesce(DishRecord.cook_time_minutes, 0)
        stmt = stmt.where(total_time <= filters.max_total_time_minutes)

    if exclude_ids:
        stmt = stmt.where(DishRecord.id.not_in(sorted(exclude_ids)))

    return stmt.order_by(DishRecord.id)


def _to_domain(record: DishRecord) -> Dish:
    try:
        return record.to_domain()
    except ValidationError as e:
        logger.error(f"Dish {record.id} has invalid catalog data: {e}")
        raise CatalogError(f"Dish {record.id} has invalid catalog data") from e


class SqlDishCatalog:
    """DishCatalog reading from the dishes tables through a Session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def count_all_dishes(self) -> int:
        try:
            return self._session.scalar(select(func.count()).select_from(DishRecord)) or 0
        except SQLAlchemyError as e:
            logger.error(f"Failed to count dishes: {e}")
            raise CatalogError("Failed to count dishes") from e

    def query_candidates(
        self,
        category: str,
        filters: FilterOptions,
        exclude_ids: Collection[str] = (),
    ) -> list[Dish]:
        stmt = build_candidate_query(category, filters, exclude_ids)
        try:
            records = self._session.scalars(stmt).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to query candidates for {category}: {e}")
            raise CatalogError(f"Failed to query candidates for {category}") from e
        return [_to_domain(record) for record in records]

    def get_dish_by_id(self, dish_id: str) -> Dish | None:
        try:
            record = self._session.get(DishRecord, dish_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load dish {dish_id}: {e}")
            raise CatalogError(f"Failed to load dish {dish_id}") from e
        return _to_domain(record) if record is not None else None


class SqlProfileStore:
    """ProfileStore reading customer_profiles through a Session."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_rules_json(self, profile_id: str) -> str | None:
        try:
            profile = self._session.get(CustomerProfile, profile_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load profile {profile_id}: {e}")
            raise CatalogError(f"Failed to load profile {profile_id}") from e
        return profile.rules_json if profile is not None else None
