"""Root conftest for all tests.

Shared fixtures: dish factories, in-memory catalogs, a spy catalog that
records every query, and a transactional in-memory SQLite session.
"""

from collections.abc import Callable, Collection
from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from mealspin.catalog.memory import InMemoryDishCatalog
from mealspin.plans.types import Dish, FilterOptions


def build_dish(dish_id: str, slot_category: str, **overrides) -> Dish:
    """Helper to create test dishes with sensible defaults."""
    fields = {
        "id": dish_id,
        "name": f"Dish {dish_id}",
        "slot_category": slot_category,
        "kosher": True,
        "kosher_style": "pareve",
        "difficulty": "easy",
    }
    fields.update(overrides)
    return Dish(**fields)


class SpyCatalog(InMemoryDishCatalog):
    """In-memory catalog that records every call made against it."""

    def __init__(self, dishes=()) -> None:
        super().__init__(dishes)
        self.count_calls = 0
        self.queries: list[tuple[str, FilterOptions, frozenset[str]]] = []
        self.lookups: list[str] = []

    def count_all_dishes(self) -> int:
        self.count_calls += 1
        return super().count_all_dishes()

    def query_candidates(self, category: str, filters: FilterOptions, exclude_ids: Collection[str] = ()) -> list[Dish]:
        self.queries.append((category, filters, frozenset(exclude_ids)))
        return super().query_candidates(category, filters, exclude_ids)

    def get_dish_by_id(self, dish_id: str) -> Dish | None:
        self.lookups.append(dish_id)
        return super().get_dish_by_id(dish_id)


@pytest.fixture
def make_dish() -> Callable[..., Dish]:
    """Factory fixture for dishes."""
    return build_dish


@pytest.fixture
def catalog_factory() -> Callable[..., SpyCatalog]:
    """Factory fixture for spy catalogs: catalog_factory([dish, ...])."""
    return SpyCatalog


@pytest.fixture
def full_catalog_dishes() -> list[Dish]:
    """Three dishes per category with varied attributes."""
    dishes = [
        build_dish("chk-1", "main_chicken", kosher_style="meat", main_protein="chicken", cuisine="israeli",
                   prep_time_minutes=15, cook_time_minutes=40, ingredients=["chicken", "lemon", "garlic"]),
        build_dish("chk-2", "main_chicken", kosher_style="meat", main_protein="chicken", cuisine="moroccan",
                   difficulty="medium", prep_time_minutes=20, cook_time_minutes=60,
                   ingredients=["chicken", "apricot", "cumin"]),
        build_dish("chk-3", "main_chicken", kosher_style="meat", main_protein="chicken", cuisine="american",
                   prep_time_minutes=10, cook_time_minutes=15, ingredients=["chicken", "flour", "eggs"],
                   allergens=["gluten", "eggs"]),
        build_dish("beef-1", "main_beef", kosher_style="meat", main_protein="beef", cuisine="american",
                   difficulty="hard", prep_time_minutes=30, cook_time_minutes=180, ingredients=["brisket", "onion"]),
        build_dish("beef-2", "main_beef", kosher_style="meat", main_protein="beef", cuisine="israeli",
                   prep_time_minutes=15, cook_time_minutes=20, ingredients=["ground beef", "parsley", "onion"]),
        build_dish("beef-3", "main_beef", kosher_style="meat", main_protein="beef", cuisine="italian",
                   difficulty="medium", prep_time_minutes=20, cook_time_minutes=40,
                   ingredients=["ground beef", "tomato", "garlic"]),
        build_dish("veg-1", "side_veg", cuisine="israeli", prep_time_minutes=10, cook_time_minutes=0,
                   ingredients=["cucumber", "tomato", "lemon"]),
        build_dish("veg-2", "side_veg", cuisine="american", prep_time_minutes=5, cook_time_minutes=25,
                   ingredients=["broccoli", "garlic"]),
        build_dish("veg-3", "side_veg", cuisine="italian", prep_time_minutes=10, cook_time_minutes=30,
                   ingredients=["zucchini", "tomato"]),
        build_dish("starch-1", "side_starch", cuisine="american", prep_time_minutes=10, cook_time_minutes=45,
                   ingredients=["potato", "olive oil"]),
        build_dish("starch-2", "side_starch", cuisine="israeli", prep_time_minutes=5, cook_time_minutes=20,
                   ingredients=["rice", "onion"]),
        build_dish("starch-3", "side_starch", cuisine="italian", prep_time_minutes=5, cook_time_minutes=12,
                   ingredients=["pasta", "flour"], allergens=["gluten"]),
        build_dish("soup-1", "soup", kosher_style="meat", cuisine="israeli", prep_time_minutes=20,
                   cook_time_minutes=120, ingredients=["chicken", "carrot", "onion"]),
        build_dish("soup-2", "soup", cuisine="american", prep_time_minutes=15, cook_time_minutes=40,
                   ingredients=["butternut squash", "onion"]),
        build_dish("soup-3", "soup", kosher_style="dairy", cuisine="french", difficulty="medium",
                   prep_time_minutes=15, cook_time_minutes=45, ingredients=["onion", "cheese", "bread"],
                   allergens=["dairy", "gluten"]),
        build_dish("muffin-1", "muffin", kosher_style="dairy", cuisine="american", prep_time_minutes=15,
                   cook_time_minutes=25, ingredients=["blueberry", "flour", "butter"],
                   allergens=["dairy", "gluten", "eggs"]),
        build_dish("muffin-2", "muffin", cuisine="american", prep_time_minutes=10, cook_time_minutes=20,
                   ingredients=["banana", "flour"], allergens=["gluten"]),
        build_dish("muffin-3", "muffin", cuisine="american", prep_time_minutes=10, cook_time_minutes=22,
                   ingredients=["pumpkin", "flour", "walnut"], allergens=["gluten", "nuts"]),
    ]
    return dishes


@pytest.fixture
def full_catalog(full_catalog_dishes: list[Dish]) -> SpyCatalog:
    """Spy catalog over full_catalog_dishes."""
    return SpyCatalog(full_catalog_dishes)


@pytest.fixture(scope="function")
def db_session(monkeypatch):
    """
    Provides a transactional in-memory SQLite DB session for tests.

    This fixture:
    - Creates an isolated in-memory SQLite database per test
    - Patches the engine getter to use it
    - Patches get_session() (where defined and where imported) to yield the test session
    - Rolls the outer transaction back afterwards
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )

    def mock_get_engine():
        return engine

    monkeypatch.setattr("mealspin.db.session._get_engine", mock_get_engine)
    monkeypatch.setattr("mealspin.db.session.get_engine", mock_get_engine)

    from mealspin.db.models import Base

    Base.metadata.create_all(engine)

    connection = engine.connect()
    transaction = connection.begin()

    test_session_local = sessionmaker(bind=connection, autocommit=False, autoflush=False)
    session = test_session_local()

    @contextmanager
    def mock_get_session():
        yield session

    import mealspin.db.session as session_module

    monkeypatch.setattr(session_module, "get_session", mock_get_session)

    # service imports: from mealspin.db.session import get_session
    import mealspin.plans.service as service_module

    monkeypatch.setattr(service_module, "get_session", mock_get_session)

    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()
        engine.dispose()
