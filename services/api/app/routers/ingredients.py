from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_db

router = APIRouter()


@router.get("/", response_model=list[schemas.IngredientOut])
def list_ingredients(
    db: Session = Depends(get_db),
    q: Optional[str] = None,
    section: Optional[str] = None,
    missing_nutrition: bool = False,
):
    """Ingredient catalog, alphabetical."""
    query = db.query(models.Ingredient)
    if q:
        query = query.filter(func.lower(models.Ingredient.name).contains(q.lower()))
    if section:
        query = query.filter(models.Ingredient.store_section == section)
    if missing_nutrition:
        query = query.filter(models.Ingredient.calories_per_100g.is_(None))
    return query.order_by(models.Ingredient.name).all()


@router.patch("/{ingredient_id}", response_model=schemas.IngredientOut)
def update_ingredient(
    ingredient_id: str,
    patch: schemas.IngredientPatch,
    db: Session = Depends(get_db),
):
    """Adjust store section, purchase frequency or macros by hand."""
    ingredient = db.get(models.Ingredient, ingredient_id)
    if not ingredient:
        raise HTTPException(status_code=404, detail="Ingredient not found")

    for field, value in patch.model_dump(exclude_unset=True).items():
        setattr(ingredient, field, value)

    db.commit()
    db.refresh(ingredient)
    return ingredient
