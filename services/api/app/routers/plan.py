import logging
from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload

from ..deps import get_db
from ..models import MealPlanEntry, Recipe
from ..realtime.plan_bus import publish_plan_updated_sync
from ..schemas import PlanEntryOut, PlanEntryUpsert
from ..services.shopping import week_start_for

router = APIRouter()
logger = logging.getLogger("pantryplan.plan")


@router.get("/plan", response_model=list[PlanEntryOut])
def get_plan(
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    db: Session = Depends(get_db),
):
    """Planned dinners between start and end (defaults to the current Sunday-Saturday week)."""
    if start is None:
        start = week_start_for(date.today())
    if end is None:
        end = start + timedelta(days=6)
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")

    return (
        db.query(MealPlanEntry)
        .options(joinedload(MealPlanEntry.recipe))
        .filter(MealPlanEntry.date >= start, MealPlanEntry.date <= end)
        .order_by(MealPlanEntry.date)
        .all()
    )


@router.put("/plan/{day}", response_model=PlanEntryOut)
def set_plan_entry(
    day: date,
    payload: PlanEntryUpsert,
    db: Session = Depends(get_db),
):
    """Set (or clear, with recipe_id null) the dinner for one date."""
    if payload.recipe_id is not None and db.get(Recipe, payload.recipe_id) is None:
        raise HTTPException(status_code=404, detail="Recipe not found")

    entry = db.query(MealPlanEntry).filter(MealPlanEntry.date == day).first()
    if entry is None:
        entry = MealPlanEntry(date=day, day_of_week=day.strftime("%A"))
        db.add(entry)

    entry.recipe_id = payload.recipe_id
    entry.notes = payload.notes
    db.commit()
    db.refresh(entry)

    publish_plan_updated_sync(day.isoformat(), entry.recipe_id)
    return entry


@router.delete("/plan/{day}", status_code=204)
def delete_plan_entry(day: date, db: Session = Depends(get_db)):
    entry = db.query(MealPlanEntry).filter(MealPlanEntry.date == day).first()
    if entry is None:
        raise HTTPException(status_code=404, detail="No meal planned for that date")
    db.delete(entry)
    db.commit()
    publish_plan_updated_sync(day.isoformat(), None)
