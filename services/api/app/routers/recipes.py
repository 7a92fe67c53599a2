"""Recipes API router.

Endpoints:
- POST /api/recipes/parse - Extract a recipe preview from a URL (not saved)
- GET /api/recipes - List recipes
- POST /api/recipes - Save recipe with ingredient links
- GET /api/recipes/{id} - Get recipe with ingredients
- GET /api/recipes/{id}/nutrition - Per-serving macro estimate
- DELETE /api/recipes/{id} - Delete recipe
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..core.errors import InvalidInput
from ..deps import get_db, get_extractor, get_nutrition_client
from ..models import Recipe, RecipeIngredient
from ..schemas import (
    MacroSet, ParseRecipeResponse, RecipeCreate, RecipeIngredientOut, RecipeListOut, RecipeOut,
)
from ..services.ingestion import IngestionService
from ..services.nutrition_service import NutritionClient, estimate_recipe_macros
from ..services.recipe_import import RecipeExtractor
from ..settings import settings

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)
logger = logging.getLogger("pantryplan.recipes")


def _recipe_to_out(recipe: Recipe) -> RecipeOut:
    ingredients = [
        RecipeIngredientOut(
            ingredient_id=link.ingredient_id,
            name=link.ingredient.name,
            quantity=link.quantity,
            unit=link.unit,
            notes=link.notes,
            store_section=link.ingredient.store_section,
        )
        for link in sorted(recipe.ingredient_links, key=lambda l: l.ingredient.name.lower())
    ]
    return RecipeOut(
        id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        cuisine_type=recipe.cuisine_type,
        difficulty=recipe.difficulty,
        prep_time_minutes=recipe.prep_time_minutes,
        cook_time_minutes=recipe.cook_time_minutes,
        servings=recipe.servings,
        instructions=recipe.instructions,
        source_url=recipe.source_url,
        created_at=recipe.created_at,
        ingredients=ingredients,
    )


def _get_recipe_or_404(db: Session, recipe_id: str) -> Recipe:
    recipe = (
        db.query(Recipe)
        .options(selectinload(Recipe.ingredient_links).selectinload(RecipeIngredient.ingredient))
        .filter(Recipe.id == recipe_id)
        .first()
    )
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.post("/recipes/parse", response_model=ParseRecipeResponse)
@limiter.limit(settings.parse_rate_limit)
async def parse_recipe(
    request: Request,
    extractor: RecipeExtractor = Depends(get_extractor),
):
    """Fetch a recipe page and return the structured preview.

    Errors come back as {"error": "..."} via the RecipeImportError handler.
    """
    try:
        body = await request.json()
    except ValueError:
        raise InvalidInput("Invalid JSON body")

    url = body.get("url") if isinstance(body, dict) else None
    recipe = await run_in_threadpool(extractor.extract, url)
    return ParseRecipeResponse(recipe=recipe)


# Registered ahead of /recipes/{recipe_id} so "parse" is never read as an id
@router.api_route("/recipes/parse", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def parse_recipe_wrong_method():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"}, headers={"Allow": "POST"})


@router.get("/recipes", response_model=list[RecipeListOut])
def list_recipes(
    db: Session = Depends(get_db),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    search: Optional[str] = Query(None),
):
    """List recipes alphabetically."""
    query = db.query(Recipe)
    if search:
        query = query.filter(Recipe.name.ilike(f"%{search}%"))
    return query.order_by(Recipe.name).offset(offset).limit(limit).all()


@router.post("/recipes", response_model=RecipeOut, status_code=201)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db),
    nutrition: Optional[NutritionClient] = Depends(get_nutrition_client),
):
    """Save a recipe (typed in or reviewed after /recipes/parse)."""
    if not payload.name.strip():
        raise HTTPException(status_code=400, detail="Recipe name is required.")

    service = IngestionService(db, nutrition=nutrition)
    try:
        recipe = service.save_recipe(payload)
    except IntegrityError:
        raise HTTPException(status_code=409, detail="Conflicting ingredient data, please retry.")

    return _recipe_to_out(_get_recipe_or_404(db, recipe.id))


@router.get("/recipes/{recipe_id}", response_model=RecipeOut)
def get_recipe(recipe_id: str, db: Session = Depends(get_db)):
    return _recipe_to_out(_get_recipe_or_404(db, recipe_id))


@router.get("/recipes/{recipe_id}/nutrition", response_model=MacroSet)
def get_recipe_nutrition(recipe_id: str, db: Session = Depends(get_db)):
    """Per-serving macros from the linked ingredients' per-100g data."""
    recipe = _get_recipe_or_404(db, recipe_id)
    return MacroSet(**estimate_recipe_macros(recipe.ingredient_links, recipe.servings))


@router.delete("/recipes/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: str, db: Session = Depends(get_db)):
    recipe = _get_recipe_or_404(db, recipe_id)
    db.delete(recipe)
    db.commit()
    logger.info("Deleted recipe %s", recipe_id)
