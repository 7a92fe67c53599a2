from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session, joinedload

from .. import models, schemas
from ..deps import get_db
from ..services.ingestion import NEW_INGREDIENT_DEFAULTS

router = APIRouter()

LOW_STOCK_THRESHOLD = 2


def stock_level(quantity: float) -> str:
    if quantity <= 0:
        return "depleted"
    if quantity < LOW_STOCK_THRESHOLD:
        return "low"
    return "stocked"


def _item_out(item: models.InventoryItem) -> schemas.InventoryItemOut:
    return schemas.InventoryItemOut(
        id=item.id,
        ingredient_id=item.ingredient_id,
        ingredient_name=item.ingredient.name,
        category=item.ingredient.category,
        quantity=item.quantity,
        unit=item.unit,
        stock_level=stock_level(item.quantity),
        updated_at=item.updated_at,
    )


@router.get("/", response_model=list[schemas.InventoryItemOut])
def list_inventory(
    db: Session = Depends(get_db),
    level: Optional[str] = None,
):
    """Pantry stock, grouped by category then name."""
    items = (
        db.query(models.InventoryItem)
        .options(joinedload(models.InventoryItem.ingredient))
        .all()
    )
    out = [_item_out(i) for i in items]
    if level:
        out = [i for i in out if i.stock_level == level]
    return sorted(out, key=lambda i: ((i.category or "other"), i.ingredient_name.lower()))


@router.put("/", response_model=schemas.InventoryItemOut)
def upsert_inventory_item(payload: schemas.InventoryUpsert, db: Session = Depends(get_db)):
    """Set the stock for an ingredient, creating the catalog entry if needed."""
    ingredient = None
    if payload.ingredient_id:
        ingredient = db.get(models.Ingredient, payload.ingredient_id)
        if ingredient is None:
            raise HTTPException(status_code=404, detail="Ingredient not found")
    elif payload.ingredient_name and payload.ingredient_name.strip():
        name = payload.ingredient_name.strip()
        ingredient = db.query(models.Ingredient).filter(models.Ingredient.name == name).first()
        if ingredient is None:
            # Stock bought outside recipes defaults to a monthly staple
            ingredient = models.Ingredient(name=name, **{**NEW_INGREDIENT_DEFAULTS, "purchase_frequency": "monthly"})
            db.add(ingredient)
            db.flush()
    else:
        raise HTTPException(status_code=400, detail="ingredient_id or ingredient_name is required")

    item = db.query(models.InventoryItem).filter(models.InventoryItem.ingredient_id == ingredient.id).first()
    if item is None:
        item = models.InventoryItem(ingredient_id=ingredient.id)
        db.add(item)

    item.quantity = max(0.0, payload.quantity)
    item.unit = payload.unit.strip()
    db.commit()
    db.refresh(item)
    return _item_out(item)


@router.patch("/{item_id}", response_model=schemas.InventoryItemOut)
def update_inventory_quantity(item_id: str, patch: schemas.InventoryPatch, db: Session = Depends(get_db)):
    item = db.get(models.InventoryItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    item.quantity = max(0.0, patch.quantity)
    db.commit()
    db.refresh(item)
    return _item_out(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(item_id: str, db: Session = Depends(get_db)):
    item = db.get(models.InventoryItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Inventory item not found")
    db.delete(item)
    db.commit()
