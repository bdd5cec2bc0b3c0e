"""Domain types for meal plan generation.

Dishes are read-only snapshots of catalog rows. Filters, locks and results
are explicit records so that "field absent" and "empty collection" keep
the same meaning everywhere: no constraint on that dimension.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SlotCategory = Literal[
    "main_chicken",
    "main_beef",
    "side_veg",
    "side_starch",
    "soup",
    "muffin",
]

# Default resolution order. Order matters: earlier slots claim dishes first.
SLOT_CATEGORIES: tuple[SlotCategory, ...] = (
    "main_chicken",
    "main_beef",
    "side_veg",
    "side_starch",
    "soup",
    "muffin",
)

SLOT_CATEGORY_LABELS: dict[str, str] = {
    "main_chicken": "Main (Chicken)",
    "main_beef": "Main (Beef)",
    "side_veg": "Side (Vegetable)",
    "side_starch": "Side (Starch)",
    "soup": "Soup",
    "muffin": "Muffin",
}

KosherStyle = Literal["meat", "dairy", "pareve", "unknown"]
KOSHER_STYLES: tuple[KosherStyle, ...] = ("meat", "dairy", "pareve", "unknown")

DifficultyLevel = Literal["easy", "medium", "hard", "unknown"]
DIFFICULTY_LEVELS: tuple[DifficultyLevel, ...] = ("easy", "medium", "hard", "unknown")

PlanMode = Literal["daily", "weekly"]
PLAN_MODES: tuple[PlanMode, ...] = ("daily", "weekly")
DAYS_PER_MODE: dict[str, int] = {"daily": 1, "weekly": 7}

STANDARD_ALLERGENS: tuple[str, ...] = ("dairy", "eggs", "nuts", "gluten")

PlanErrorCode = Literal[
    "NO_DISHES_IN_DB",
    "NO_CANDIDATES_FOR_CATEGORY",
    "LOCK_CONFLICT",
    "CONSTRAINTS_TOO_STRICT",  # reserved, not emitted yet
]

LockedDishes = dict[SlotCategory, str]


def category_label(category: str) -> str:
    """Human-readable label for a slot category."""
    return SLOT_CATEGORY_LABELS.get(category, category)


def _normalize_terms(values: object) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    terms = {str(v).strip().lower() for v in values}  # type: ignore[union-attr]
    terms.discard("")
    return tuple(sorted(terms))


class Dish(BaseModel):
    """A catalog dish as seen by the generator.

    Attributes:
        id: Catalog identity
        slot_category: The single slot this dish can fill
        ingredients: Lowercase ingredient names (set semantics, sorted)
        allergens: Lowercase allergen names (set semantics, sorted)
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    slot_category: SlotCategory
    kosher: bool = False
    kosher_style: KosherStyle = "unknown"
    difficulty: DifficultyLevel = "unknown"
    main_protein: str | None = None
    cuisine: str | None = None
    prep_time_minutes: int | None = Field(default=None, ge=0)
    cook_time_minutes: int | None = Field(default=None, ge=0)
    servings: int | None = None
    notes: str | None = None
    source_url: str | None = None
    ingredients: tuple[str, ...] = ()
    allergens: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    @field_validator("ingredients", "allergens", "tags", mode="before")
    @classmethod
    def normalize_terms(cls, value: object) -> tuple[str, ...]:
        return _normalize_terms(value)

    @property
    def total_time_minutes(self) -> int:
        """Prep plus cook time, with missing values counted as zero."""
        return (self.prep_time_minutes or 0) + (self.cook_time_minutes or 0)


class FilterOptions(BaseModel):
    """Conjunctive dish filter.

    None and empty collections both mean "no constraint". A
    max_total_time_minutes of 0 is also treated as unset.
    """

    kosher_only: bool | None = None
    kosher_styles: list[KosherStyle] | None = None
    difficulties: list[DifficultyLevel] | None = None
    main_proteins: list[str] | None = None
    cuisines: list[str] | None = None
    include_ingredients: list[str] | None = None
    exclude_ingredients: list[str] | None = None
    exclude_allergens: list[str] | None = None
    max_total_time_minutes: int | None = Field(default=None, ge=0)

    @field_validator("include_ingredients", "exclude_ingredients", "exclude_allergens")
    @classmethod
    def lowercase_terms(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return [v.strip().lower() for v in value if v.strip()]

    def active_fields(self) -> list[str]:
        """Names of the dimensions this filter actually constrains."""
        active: list[str] = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value:
                active.append(name)
        return active

    def is_empty(self) -> bool:
        return not self.active_fields()


class PlanErrorDetails(BaseModel):
    """Diagnostics attached to a PlanError for user-facing explanations."""

    total_dishes: int | None = None
    candidates_per_category: dict[str, int] | None = None
    applied_filters: FilterOptions | None = None
    failed_constraint: str | None = None


class PlanError(BaseModel):
    """A recoverable, reportable generation failure."""

    code: PlanErrorCode
    message: str
    category: SlotCategory | None = None
    day_index: int | None = None
    details: PlanErrorDetails = Field(default_factory=PlanErrorDetails)


class GeneratedDay(BaseModel):
    """One day of a plan. Dishes are keyed in resolution order."""

    day_index: int
    dishes: dict[SlotCategory, Dish]

    def dish_ids(self) -> list[str]:
        return [dish.id for dish in self.dishes.values()]


class GeneratedPlan(BaseModel):
    """A generated plan. The seed is always echoed for reproducibility."""

    days: list[GeneratedDay]
    seed: str
    mode: PlanMode
    profile_id: str | None = None
    days_requested: int

    @property
    def is_complete(self) -> bool:
        return len(self.days) == self.days_requested


class PlanGenerationResult(BaseModel):
    """Outcome of generate_plan.

    success=True with fewer days than requested is a partial plan; the
    failed days' errors are kept alongside the explanatory warning.
    """

    success: bool
    plan: GeneratedPlan | None = None
    errors: list[PlanError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
