"""Shopping lists.

The weekly and monthly lists are recomputed from the meal plan on every GET
(that GET is the client's refresh); only check marks are stored. Misc items
are a plain persisted list.
"""

from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import models, schemas
from ..deps import get_db
from ..services import list_checks
from ..services.shopping import ShoppingList, build_view, month_bounds, month_key, week_start_for
from ..settings import settings

router = APIRouter()


def _list_out(kind: str, key: str, start: date, end: date, result: ShoppingList) -> schemas.ShoppingListOut:
    checks = list_checks.get_checks(kind, key)
    return schemas.ShoppingListOut(
        kind=kind,
        key=key,
        start=start,
        end=end,
        sections=[
            schemas.ShoppingSectionOut(
                section=section,
                items=[
                    schemas.ShoppingItemOut(
                        name=item.name,
                        quantity=item.quantity,
                        unit=item.unit,
                        section=item.section,
                        notes=item.notes,
                        purchase_frequency=item.purchase_frequency,
                        recipes=sorted(item.recipes),
                        checked=checks.get(item.key, False),
                    )
                    for item in items
                ],
            )
            for section, items in result.sections.items()
        ],
        recipe_names=result.recipe_names,
    )


def _require_kind(kind: str) -> None:
    if kind not in list_checks.LIST_KINDS:
        raise HTTPException(status_code=404, detail=f"Unknown list kind '{kind}'")


@router.get("/weekly", response_model=schemas.ShoppingListOut)
def get_weekly_list(
    start: Optional[date] = Query(None, description="Any date in the week; defaults to today"),
    db: Session = Depends(get_db),
):
    """Fresh items (purchase_frequency=weekly) for the Sunday-Saturday week."""
    week_start = week_start_for(start or date.today())
    week_end = week_start + timedelta(days=6)
    result = build_view(db, "weekly", week_start, week_end, sum_quantities=settings.shopping_sum_quantities)
    return _list_out("weekly", week_start.isoformat(), week_start, week_end, result)


@router.get("/monthly", response_model=schemas.ShoppingListOut)
def get_monthly_list(
    month: Optional[str] = Query(None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$"),
    db: Session = Depends(get_db),
):
    """Stock-up staples (monthly and freezer items) for a calendar month."""
    key = month or month_key(date.today())
    first, last = month_bounds(key)
    result = build_view(db, "monthly", first, last, sum_quantities=settings.shopping_sum_quantities)
    return _list_out("monthly", key, first, last, result)


# --- Check state ---

@router.get("/checks/{kind}/{key}", response_model=schemas.ChecksOut)
def get_checks(kind: str, key: str):
    _require_kind(kind)
    return schemas.ChecksOut(kind=kind, key=key, checks=list_checks.get_checks(kind, key))


@router.put("/checks/{kind}/{key}", response_model=schemas.ChecksOut)
def set_check(kind: str, key: str, update: schemas.CheckUpdate):
    _require_kind(kind)
    checks = list_checks.set_check(kind, key, update.name, update.checked)
    return schemas.ChecksOut(kind=kind, key=key, checks=checks)


@router.delete("/checks/{kind}/{key}", status_code=status.HTTP_204_NO_CONTENT)
def clear_checks(kind: str, key: str):
    _require_kind(kind)
    list_checks.clear_checks(kind, key)


# --- Misc items ---

@router.get("/misc", response_model=list[schemas.MiscItemOut])
def list_misc_items(db: Session = Depends(get_db)):
    return db.query(models.MiscShoppingItem).order_by(models.MiscShoppingItem.created_at.asc()).all()


@router.post("/misc", response_model=schemas.MiscItemOut, status_code=status.HTTP_201_CREATED)
def add_misc_item(item_in: schemas.MiscItemCreate, db: Session = Depends(get_db)):
    name = item_in.item_name.strip()
    if not name:
        raise HTTPException(status_code=400, detail="Item name is required")
    item = models.MiscShoppingItem(item_name=name, checked=False)
    db.add(item)
    db.commit()
    db.refresh(item)
    return item


@router.patch("/misc/{item_id}", response_model=schemas.MiscItemOut)
def update_misc_item(item_id: str, update: schemas.MiscItemUpdate, db: Session = Depends(get_db)):
    item = db.get(models.MiscShoppingItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    if update.checked is not None:
        item.checked = update.checked
    if update.item_name is not None:
        item.item_name = update.item_name.strip()
    db.commit()
    db.refresh(item)
    return item


@router.delete("/misc/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_misc_item(item_id: str, db: Session = Depends(get_db)):
    item = db.get(models.MiscShoppingItem, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Item not found")
    db.delete(item)
    db.commit()
