"""SQLAlchemy ORM models for PantryPlan.

Tables:
- recipes: Canonical recipe records (manual entry or URL import)
- ingredients: Shared ingredient catalog keyed by unique name, with store layout
  metadata and per-100g macros
- recipe_ingredients: Recipe <-> ingredient links with quantity/unit/notes
- meal_plan_entries: One planned dinner per calendar date
- inventory_items: Pantry stock per ingredient
- misc_shopping_items: Ad-hoc shopping items outside the recipe-driven lists
"""

from __future__ import annotations

import uuid
from datetime import datetime, date
from typing import Optional

from sqlalchemy import (
    String,
    DateTime,
    Date,
    Text,
    Integer,
    Boolean,
    Float,
    ForeignKey,
    Index,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .db import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


# Fixed store walk order used to group shopping lists.
STORE_SECTIONS = (
    "meat",
    "seafood",
    "produce",
    "dairy",
    "frozen",
    "grains",
    "pasta",
    "canned",
    "condiments",
    "oils",
    "asian",
    "mexican",
    "bakery",
    "spices",
    "other",
)

PURCHASE_FREQUENCIES = ("weekly", "monthly", "freezer_months")

DIFFICULTIES = ("Easy", "Medium", "Hard")


class Recipe(Base):
    """Core recipe record."""
    __tablename__ = "recipes"
    __table_args__ = (
        Index("ix_recipes_name", "name"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    cuisine_type: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    difficulty: Mapped[str] = mapped_column(String(10), nullable=False, default="Easy")

    prep_time_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cook_time_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    servings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Where the recipe was imported from, if anywhere
    source_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    # Relationships
    ingredient_links: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="recipe", cascade="all, delete-orphan"
    )

    @property
    def total_minutes(self) -> int:
        return (self.prep_time_minutes or 0) + (self.cook_time_minutes or 0)


class Ingredient(Base):
    """Shared ingredient catalog entry.

    `name` is the matching key for imports and shopping-list dedup.
    Macro columns stay NULL until a nutrition lookup fills them.
    """
    __tablename__ = "ingredients"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, default="pantry")
    storage_location: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, default="pantry")
    shelf_life_type: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    shelf_life_value: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # weekly | monthly | freezer_months
    purchase_frequency: Mapped[str] = mapped_column(String(20), nullable=False, default="weekly")
    store_section: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, default="other")

    # Nutrition per 100g
    calories_per_100g: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    protein_per_100g: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    carbs_per_100g: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    fat_per_100g: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    fiber_per_100g: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    recipe_links: Mapped[list["RecipeIngredient"]] = relationship(
        "RecipeIngredient", back_populates="ingredient", cascade="all, delete-orphan"
    )


class RecipeIngredient(Base):
    """Link between a recipe and a catalog ingredient."""
    __tablename__ = "recipe_ingredients"
    __table_args__ = (
        UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_ingredient"),
        Index("ix_recipe_ingredients_recipe_id", "recipe_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    recipe_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    ingredient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False
    )

    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    unit: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    # Relationships
    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="ingredient_links")
    ingredient: Mapped["Ingredient"] = relationship("Ingredient", back_populates="recipe_links")


class MealPlanEntry(Base):
    """Planned dinner for a single calendar date."""
    __tablename__ = "meal_plan_entries"
    __table_args__ = (
        UniqueConstraint("date", name="uq_meal_plan_entries_date"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    date: Mapped[date] = mapped_column(Date, nullable=False)
    day_of_week: Mapped[str] = mapped_column(String(10), nullable=False)

    # Null for "eating out" / unplanned nights
    recipe_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    recipe: Mapped[Optional["Recipe"]] = relationship("Recipe")


class InventoryItem(Base):
    """Pantry stock level for one ingredient."""
    __tablename__ = "inventory_items"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    ingredient_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("ingredients.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    quantity: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    unit: Mapped[str] = mapped_column(String(30), nullable=False, default="")

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    ingredient: Mapped["Ingredient"] = relationship("Ingredient")


class MiscShoppingItem(Base):
    """Free-text shopping item ("tropical juice from Aldi")."""
    __tablename__ = "misc_shopping_items"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=generate_uuid
    )
    item_name: Mapped[str] = mapped_column(String(200), nullable=False)
    checked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
