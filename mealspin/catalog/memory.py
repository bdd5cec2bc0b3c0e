"""In-memory catalog and profile store.

Used by tests and by callers that already hold the dish list in memory.
"""

from collections.abc import Collection, Iterable

from mealspin.catalog.filters import dish_matches_filters
from mealspin.plans.types import Dish, FilterOptions


class InMemoryDishCatalog:
    """DishCatalog backed by a dict of dishes.

    Dishes are kept sorted by id so query results honour the ordering
    contract regardless of insertion order.
    """

    def __init__(self, dishes: Iterable[Dish] = ()) -> None:
        self._dishes: dict[str, Dish] = {}
        for dish in dishes:
            if dish.id in self._dishes:
                raise ValueError(f"Duplicate dish id: {dish.id}")
            self._dishes[dish.id] = dish
        self._ordered = sorted(self._dishes.values(), key=lambda d: d.id)

    def count_all_dishes(self) -> int:
        return len(self._ordered)

    def query_candidates(
        self,
        category: str,
        filters: FilterOptions,
        exclude_ids: Collection[str] = (),
    ) -> list[Dish]:
        excluded = set(exclude_ids)
        return [
            dish
            for dish in self._ordered
            if dish.slot_category == category
            and dish.id not in excluded
            and dish_matches_filters(dish, filters)
        ]

    def get_dish_by_id(self, dish_id: str) -> Dish | None:
        return self._dishes.get(dish_id)


class InMemoryProfileStore:
    """ProfileStore backed by a dict of profile id -> rules JSON."""

    def __init__(self, profiles: dict[str, str] | None = None) -> None:
        self._profiles = dict(profiles or {})

    def get_rules_json(self, profile_id: str) -> str | None:
        return self._profiles.get(profile_id)
