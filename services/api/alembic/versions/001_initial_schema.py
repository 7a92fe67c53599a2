"""Initial schema: recipes, ingredients, links, meal plan, inventory, misc shopping items

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Recipes table
    op.create_table(
        "recipes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("cuisine_type", sa.String(80), nullable=True),
        sa.Column("difficulty", sa.String(10), nullable=False, server_default="Easy"),
        sa.Column("prep_time_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("cook_time_minutes", sa.Integer, nullable=False, server_default="0"),
        sa.Column("servings", sa.Integer, nullable=True),
        sa.Column("instructions", sa.Text, nullable=True),
        sa.Column("source_url", sa.String(2048), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_recipes_name", "recipes", ["name"])

    # Ingredient catalog
    op.create_table(
        "ingredients",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, unique=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("storage_location", sa.String(50), nullable=True),
        sa.Column("shelf_life_type", sa.String(30), nullable=True),
        sa.Column("shelf_life_value", sa.Integer, nullable=True),
        sa.Column("purchase_frequency", sa.String(20), nullable=False, server_default="weekly"),
        sa.Column("store_section", sa.String(20), nullable=True, server_default="other"),
        sa.Column("calories_per_100g", sa.Float, nullable=True),
        sa.Column("protein_per_100g", sa.Float, nullable=True),
        sa.Column("carbs_per_100g", sa.Float, nullable=True),
        sa.Column("fat_per_100g", sa.Float, nullable=True),
        sa.Column("fiber_per_100g", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Recipe <-> ingredient links
    op.create_table(
        "recipe_ingredients",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("recipe_id", sa.String(36), sa.ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("ingredient_id", sa.String(36), sa.ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("unit", sa.String(30), nullable=False, server_default=""),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.UniqueConstraint("recipe_id", "ingredient_id", name="uq_recipe_ingredient"),
    )
    op.create_index("ix_recipe_ingredients_recipe_id", "recipe_ingredients", ["recipe_id"])

    # Meal plan: one dinner per date
    op.create_table(
        "meal_plan_entries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("day_of_week", sa.String(10), nullable=False),
        sa.Column("recipe_id", sa.String(36), sa.ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("date", name="uq_meal_plan_entries_date"),
    )

    # Pantry inventory
    op.create_table(
        "inventory_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("ingredient_id", sa.String(36), sa.ForeignKey("ingredients.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("quantity", sa.Float, nullable=False, server_default="0"),
        sa.Column("unit", sa.String(30), nullable=False, server_default=""),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # Ad-hoc shopping items
    op.create_table(
        "misc_shopping_items",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("item_name", sa.String(200), nullable=False),
        sa.Column("checked", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("misc_shopping_items")
    op.drop_table("inventory_items")
    op.drop_table("meal_plan_entries")
    op.drop_index("ix_recipe_ingredients_recipe_id", table_name="recipe_ingredients")
    op.drop_table("recipe_ingredients")
    op.drop_table("ingredients")
    op.drop_index("ix_recipes_name", table_name="recipes")
    op.drop_table("recipes")
