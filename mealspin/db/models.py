from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from mealspin.plans.types import Dish


class Base(DeclarativeBase):
    """Base class for all database models."""


class DishRecord(Base):
    """Catalog dish row.

    Owned by the catalog store (CSV import, admin edits). mealspin only
    reads it. Ingredients, allergens and tags live in child tables so they
    can be matched with EXISTS sub-queries.
    """

    __tablename__ = "dishes"
    __table_args__ = (UniqueConstraint("name", "slot_category", name="uq_dishes_name_slot_category"),)

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String, nullable=False)
    slot_category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    kosher: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    kosher_style: Mapped[str] = mapped_column(String, nullable=False, default="unknown")
    difficulty: Mapped[str] = mapped_column(String, nullable=False, default="unknown")
    main_protein: Mapped[str | None] = mapped_column(String, nullable=True)
    cuisine: Mapped[str | None] = mapped_column(String, nullable=True)
    prep_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cook_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    servings: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    source_url: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    ingredients: Mapped[list[DishIngredient]] = relationship(
        back_populates="dish", cascade="all, delete-orphan", lazy="selectin"
    )
    allergens: Mapped[list[DishAllergen]] = relationship(
        back_populates="dish", cascade="all, delete-orphan", lazy="selectin"
    )
    tags: Mapped[list[DishTag]] = relationship(
        back_populates="dish", cascade="all, delete-orphan", lazy="selectin"
    )

    def to_domain(self) -> Dish:
        """Convert to the immutable Dish used by the generator."""
        return Dish(
            id=self.id,
            name=self.name,
            slot_category=self.slot_category,
            kosher=self.kosher,
            kosher_style=self.kosher_style,
            difficulty=self.difficulty,
            main_protein=self.main_protein,
            cuisine=self.cuisine,
            prep_time_minutes=self.prep_time_minutes,
            cook_time_minutes=self.cook_time_minutes,
            servings=self.servings,
            notes=self.notes,
            source_url=self.source_url,
            ingredients=[i.name for i in self.ingredients],
            allergens=[a.name for a in self.allergens],
            tags=[t.name for t in self.tags],
        )


class DishIngredient(Base):
    """Ingredient name attached to a dish (stored lowercase)."""

    __tablename__ = "dish_ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dish_id: Mapped[str] = mapped_column(String, ForeignKey("dishes.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    dish: Mapped[DishRecord] = relationship(back_populates="ingredients")

    __table_args__ = (
        UniqueConstraint("dish_id", "name", name="uq_dish_ingredients_dish_name"),
        Index("idx_dish_ingredients_name", "name"),
    )


class DishAllergen(Base):
    """Allergen name attached to a dish (stored lowercase)."""

    __tablename__ = "dish_allergens"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dish_id: Mapped[str] = mapped_column(String, ForeignKey("dishes.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    dish: Mapped[DishRecord] = relationship(back_populates="allergens")

    __table_args__ = (
        UniqueConstraint("dish_id", "name", name="uq_dish_allergens_dish_name"),
        Index("idx_dish_allergens_name", "name"),
    )


class DishTag(Base):
    """Free-form tag attached to a dish."""

    __tablename__ = "dish_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    dish_id: Mapped[str] = mapped_column(String, ForeignKey("dishes.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)

    dish: Mapped[DishRecord] = relationship(back_populates="tags")

    __table_args__ = (UniqueConstraint("dish_id", "name", name="uq_dish_tags_dish_name"),)


class CustomerProfile(Base):
    """Category-list preset.

    rules_json holds {"categories": [...], "name": ..., "description": ...}.
    """

    __tablename__ = "customer_profiles"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String, nullable=False)
    rules_json: Mapped[str] = mapped_column(Text, nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
