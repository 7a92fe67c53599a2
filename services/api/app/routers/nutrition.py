from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session, selectinload

from ..deps import get_db
from ..models import Recipe, RecipeIngredient
from ..schemas import WeeklyNutritionOut
from ..services.nutrition_service import estimate_recipe_macros, weekly_nutrition
from ..services.shopping import entries_between, week_start_for

router = APIRouter()


@router.get("/nutrition/week", response_model=WeeklyNutritionOut)
def get_week_nutrition(
    start: Optional[date] = Query(None, description="Any date in the week; defaults to today"),
    db: Session = Depends(get_db),
):
    """Per-day macro estimates for the planned dinners of one week."""
    week_start = week_start_for(start or date.today())
    entries = entries_between(db, week_start, week_start + timedelta(days=6))

    recipe_ids = {e.recipe_id for e in entries if e.recipe_id}
    macros_by_recipe = {}
    if recipe_ids:
        recipes = (
            db.query(Recipe)
            .options(selectinload(Recipe.ingredient_links).selectinload(RecipeIngredient.ingredient))
            .filter(Recipe.id.in_(recipe_ids))
            .all()
        )
        macros_by_recipe = {
            r.id: estimate_recipe_macros(r.ingredient_links, r.servings) for r in recipes
        }

    summary = weekly_nutrition(week_start, entries, macros_by_recipe)
    return WeeklyNutritionOut(week_start=week_start, **summary)
