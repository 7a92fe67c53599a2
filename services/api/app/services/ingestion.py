import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Ingredient, Recipe, RecipeIngredient
from app.parsing import parse_quantity
from app.schemas import RecipeCreate
from app.services.nutrition_service import NutritionClient
from app.settings import settings

logger = logging.getLogger("pantryplan.ingestion")

# Defaults for catalog entries created by a recipe save
NEW_INGREDIENT_DEFAULTS = {
    "category": "pantry",
    "storage_location": "pantry",
    "shelf_life_type": "pantry_months",
    "shelf_life_value": 12,
    "purchase_frequency": "weekly",
    "store_section": "other",
}

LOOKUP_WORKERS = 4


class IngestionService:
    def __init__(self, db: Session, nutrition: Optional[NutritionClient] = None):
        self.db = db
        # None disables lookups (tests, offline)
        self.nutrition = nutrition

    def _get_or_create_ingredient(self, name: str) -> Ingredient:
        ingredient = self.db.query(Ingredient).filter(Ingredient.name == name).first()
        if ingredient is None:
            ingredient = Ingredient(name=name, **NEW_INGREDIENT_DEFAULTS)
            self.db.add(ingredient)
            self.db.flush()
        return ingredient

    def save_recipe(self, payload: RecipeCreate) -> Recipe:
        """
        Persist a (possibly imported) recipe with its ingredient links.

        The recipe, new catalog ingredients and links commit together; any
        failure rolls the whole save back.
        """
        recipe = Recipe(
            name=payload.name.strip(),
            description=payload.description.strip() or None,
            cuisine_type=payload.cuisine_type.strip() or None,
            difficulty=payload.difficulty,
            prep_time_minutes=payload.prep_time_minutes or 0,
            cook_time_minutes=payload.cook_time_minutes or 0,
            servings=payload.servings or None,
            instructions=payload.instructions.strip() or None,
            source_url=payload.source_url,
        )

        try:
            self.db.add(recipe)
            self.db.flush()

            linked: set[str] = set()
            for line in payload.ingredients:
                name = line.name.strip()
                if not name:
                    continue
                ingredient = self._get_or_create_ingredient(name)
                # One link per (recipe, ingredient); duplicate lines keep the first
                if ingredient.id in linked:
                    continue
                linked.add(ingredient.id)
                self.db.add(RecipeIngredient(
                    recipe_id=recipe.id,
                    ingredient_id=ingredient.id,
                    quantity=parse_quantity(line.quantity),
                    unit=line.unit.strip(),
                    notes=line.notes.strip(),
                ))

            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Saving recipe %r failed, rolled back", payload.name)
            raise

        self.db.refresh(recipe)
        logger.info("Saved recipe %s (%r) with %d ingredients", recipe.id, recipe.name, len(linked))

        if self.nutrition is not None and settings.nutrition_lookup_enabled:
            self.fill_missing_nutrition(
                [link.ingredient for link in recipe.ingredient_links]
            )
        return recipe

    def fill_missing_nutrition(self, ingredients: list[Ingredient]) -> int:
        """Look up macros for ingredients that have none yet. Best effort."""
        missing = [ing for ing in ingredients if ing.calories_per_100g is None]
        if not missing:
            return 0

        names = [ing.name for ing in missing]
        with ThreadPoolExecutor(max_workers=LOOKUP_WORKERS) as pool:
            results = list(pool.map(self.nutrition.lookup, names))

        updated = 0
        for ingredient, macros in zip(missing, results):
            if not macros:
                continue
            for field, value in macros.items():
                setattr(ingredient, field, value)
            updated += 1

        if updated:
            try:
                self.db.commit()
            except SQLAlchemyError:
                self.db.rollback()
                logger.exception("Storing nutrition data failed")
                return 0
        logger.info("Filled nutrition for %d/%d ingredients", updated, len(missing))
        return updated
