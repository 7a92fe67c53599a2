"""Shopping list aggregation from the meal plan.

The aggregator is a pure function over meal-plan entries and a link loader:
it never reads or writes check state, so recomputing a list leaves any
recorded checks alone.
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import models
from ..models import STORE_SECTIONS

logger = logging.getLogger("pantryplan.shopping")

SECTION_RANK = {section: i for i, section in enumerate(STORE_SECTIONS)}

# Which purchase frequencies each list view shows
VIEW_FREQUENCIES = {
    "weekly": frozenset({"weekly"}),
    "monthly": frozenset({"monthly", "freezer_months"}),
}


@dataclass
class IngredientLinkRow:
    """A recipe-ingredient link joined with its ingredient and recipe names."""
    recipe_id: str
    recipe_name: str
    ingredient_name: str
    quantity: float
    unit: str = ""
    notes: str = ""
    store_section: Optional[str] = None
    purchase_frequency: Optional[str] = None


@dataclass
class AggregatedShoppingItem:
    name: str
    quantity: float
    unit: str
    section: str
    notes: str
    purchase_frequency: Optional[str] = None
    recipes: set[str] = field(default_factory=set)

    @property
    def key(self) -> str:
        return self.name.lower()


@dataclass
class ShoppingList:
    sections: dict[str, list[AggregatedShoppingItem]] = field(default_factory=dict)
    recipe_names: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.sections


LinkLoader = Callable[[list[str]], Iterable[IngredientLinkRow]]


def _section_for(value: Optional[str]) -> str:
    return value if value in SECTION_RANK else "other"


def aggregate(
    entries: Iterable,
    load_links: LinkLoader,
    frequency_filter: Optional[Iterable[str]] = None,
    sum_quantities: bool = False,
) -> ShoppingList:
    """
    Build a section-grouped shopping list for the given meal-plan entries.

    Ingredients are deduplicated by lowercase name. The first link seen fixes
    the item's name, quantity, unit, notes and section; later links only add
    their recipe name. With `sum_quantities` the quantities of later links are
    added when their unit matches the first one.
    """
    # 1. Distinct recipes, first-seen order
    recipe_ids = list(dict.fromkeys(e.recipe_id for e in entries if getattr(e, "recipe_id", None)))
    if not recipe_ids:
        return ShoppingList()

    # 2. Links (collaborator errors propagate)
    links = list(load_links(recipe_ids))

    if frequency_filter is not None:
        allowed = set(frequency_filter)
        links = [link for link in links if link.purchase_frequency in allowed]

    # 3. Dedup
    items: dict[str, AggregatedShoppingItem] = {}
    for link in links:
        key = link.ingredient_name.lower()
        item = items.get(key)
        if item is None:
            items[key] = AggregatedShoppingItem(
                name=link.ingredient_name,
                quantity=link.quantity or 0,
                unit=link.unit or "",
                section=_section_for(link.store_section),
                notes=link.notes or "",
                purchase_frequency=link.purchase_frequency,
                recipes={link.recipe_name},
            )
            continue

        item.recipes.add(link.recipe_name)
        if sum_quantities and (link.unit or "").lower() == item.unit.lower():
            item.quantity += link.quantity or 0

    # 4. Group and order
    sections: dict[str, list[AggregatedShoppingItem]] = {}
    for item in sorted(items.values(), key=lambda i: (SECTION_RANK[i.section], i.name.lower(), i.name)):
        sections.setdefault(item.section, []).append(item)

    recipe_names = sorted({name for item in items.values() for name in item.recipes})
    logger.debug("Aggregated %d links into %d items", len(links), len(items))
    return ShoppingList(sections=sections, recipe_names=recipe_names)


def sql_link_loader(db: Session) -> LinkLoader:
    """Link loader backed by one batched join over recipe_ingredients."""

    def load(recipe_ids: list[str]) -> list[IngredientLinkRow]:
        stmt = (
            select(
                models.RecipeIngredient.recipe_id,
                models.Recipe.name,
                models.Ingredient.name,
                models.RecipeIngredient.quantity,
                models.RecipeIngredient.unit,
                models.RecipeIngredient.notes,
                models.Ingredient.store_section,
                models.Ingredient.purchase_frequency,
            )
            .join(models.Recipe, models.Recipe.id == models.RecipeIngredient.recipe_id)
            .join(models.Ingredient, models.Ingredient.id == models.RecipeIngredient.ingredient_id)
            .where(models.RecipeIngredient.recipe_id.in_(recipe_ids))
        )
        rows = db.execute(stmt).all()
        # Keep the plan's recipe order so "first seen" follows the calendar
        order = {rid: i for i, rid in enumerate(recipe_ids)}
        rows.sort(key=lambda r: order[r[0]])
        return [IngredientLinkRow(*row) for row in rows]

    return load


# --- List windows ---

def week_start_for(day: date) -> date:
    """Sunday that starts the week containing `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def week_key(day: date) -> str:
    return week_start_for(day).isoformat()


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def month_bounds(key: str) -> tuple[date, date]:
    year, month = (int(p) for p in key.split("-"))
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def entries_between(db: Session, start: date, end: date) -> list[models.MealPlanEntry]:
    return (
        db.query(models.MealPlanEntry)
        .filter(models.MealPlanEntry.date >= start, models.MealPlanEntry.date <= end)
        .order_by(models.MealPlanEntry.date)
        .all()
    )


def build_view(
    db: Session,
    view: str,
    start: date,
    end: date,
    sum_quantities: bool = False,
) -> ShoppingList:
    """Aggregate the plan between start and end for a named view (weekly/monthly)."""
    entries = entries_between(db, start, end)
    return aggregate(
        entries,
        sql_link_loader(db),
        frequency_filter=VIEW_FREQUENCIES.get(view),
        sum_quantities=sum_quantities,
    )
