"""Profile rules: category-list presets.

A profile decides which slots a plan fills and in which order. Profiles
are stored as JSON; anything that does not parse into a usable category
list falls back to the standard six-slot layout.
"""

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from mealspin.catalog.base import ProfileStore
from mealspin.plans.types import SLOT_CATEGORIES, SlotCategory


class ProfileRules(BaseModel):
    """Parsed profile rules.

    Attributes:
        categories: Slots to fill, in resolution order (duplicates dropped)
        name: Display name
        description: Display description
    """

    categories: list[SlotCategory] = Field(min_length=1)
    name: str | None = None
    description: str | None = None

    @field_validator("categories")
    @classmethod
    def drop_duplicates(cls, value: list[SlotCategory]) -> list[SlotCategory]:
        return list(dict.fromkeys(value))


DEFAULT_PROFILE_RULES = ProfileRules(
    categories=list(SLOT_CATEGORIES),
    name="Standard Weekly",
    description="2 mains (1 chicken + 1 beef), 2 sides (1 vegetable + 1 starch), 1 soup, 1 muffin",
)


def parse_profile_rules(rules_json: str) -> ProfileRules:
    """Parse stored rules JSON, falling back to the default rules.

    Args:
        rules_json: Raw JSON from the profile store

    Returns:
        Parsed rules, or DEFAULT_PROFILE_RULES if the JSON is malformed,
        lists an unknown category, or has no categories
    """
    try:
        return ProfileRules.model_validate_json(rules_json)
    except ValidationError as e:
        logger.warning(f"Invalid profile rules, using default categories: {e.error_count()} error(s)")
        return DEFAULT_PROFILE_RULES


def resolve_categories(
    profile_id: str | None,
    profile_store: ProfileStore | None,
) -> list[SlotCategory]:
    """Resolve the effective category list for a plan.

    Args:
        profile_id: Optional profile to read categories from
        profile_store: Store to look the profile up in

    Returns:
        The profile's categories, or the full default category list when
        no profile is given, the profile does not exist, or its rules do
        not parse
    """
    if not profile_id or profile_store is None:
        return list(SLOT_CATEGORIES)

    rules_json = profile_store.get_rules_json(profile_id)
    if rules_json is None:
        logger.warning("Profile not found, using default categories", profile_id=profile_id)
        return list(SLOT_CATEGORIES)

    return list(parse_profile_rules(rules_json).categories)
