"""Read-only catalog contracts consumed by the plan generator.

The generator never talks to a database directly. It receives a
DishCatalog (and optionally a ProfileStore) so that storage can be a SQL
database in production and a plain list in tests.

ORDERING CONTRACT:
query_candidates must return dishes in a stable order for identical
inputs (ascending dish id). Seeded selection shuffles this list, so any
ordering drift would change the plan produced by a given seed.
"""

from collections.abc import Collection
from typing import Protocol

from mealspin.plans.types import Dish, FilterOptions


class DishCatalog(Protocol):
    """Query contract for the dish catalog."""

    def count_all_dishes(self) -> int:
        """Total number of dishes across all categories."""
        ...

    def query_candidates(
        self,
        category: str,
        filters: FilterOptions,
        exclude_ids: Collection[str] = (),
    ) -> list[Dish]:
        """Dishes in category matching every active filter, minus exclude_ids, ordered by id."""
        ...

    def get_dish_by_id(self, dish_id: str) -> Dish | None:
        """Single dish lookup, None when absent."""
        ...


class ProfileStore(Protocol):
    """Lookup of stored profile rules (category-list presets)."""

    def get_rules_json(self, profile_id: str) -> str | None:
        """Raw rules JSON for a profile, None when the profile does not exist."""
        ...
