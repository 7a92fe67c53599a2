import logging
from datetime import date, timedelta
from typing import Iterable, Optional

import requests

from ..settings import settings

logger = logging.getLogger("pantryplan.nutrition")

# USDA FoodData Central nutrient ids for per-100g values
USDA_NUTRIENT_IDS = {
    "calories_per_100g": 1008,
    "protein_per_100g": 1003,
    "carbs_per_100g": 1005,
    "fat_per_100g": 1004,
    "fiber_per_100g": 1079,
}

MACRO_KEYS = ("calories", "protein", "carbs", "fat", "fiber")

DEFAULT_SERVINGS = 3


class NutritionClient:
    """Food name in, per-100g macros (or None) out."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or settings.usda_api_key or "DEMO_KEY"
        self.base_url = (base_url or settings.usda_base_url).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else settings.nutrition_timeout_sec

    def lookup(self, name: str) -> Optional[dict]:
        if not name or not name.strip():
            return None
        try:
            resp = self.session.get(
                f"{self.base_url}/foods/search",
                params={
                    "query": name.strip(),
                    "api_key": self.api_key,
                    "dataType": "Foundation,SR Legacy,Survey (FNDDS)",
                    "pageSize": 1,
                },
                timeout=self.timeout,
            )
            if resp.status_code != 200:
                logger.warning("Nutrition lookup for %r returned HTTP %s", name, resp.status_code)
                return None
            foods = resp.json().get("foods") or []
        except (requests.RequestException, ValueError) as e:
            logger.warning("Nutrition lookup for %r failed: %s", name, e)
            return None

        if not foods:
            return None

        nutrients = {n.get("nutrientId"): n.get("value") for n in foods[0].get("foodNutrients", [])}
        return {field: nutrients.get(nid) for field, nid in USDA_NUTRIENT_IDS.items()}


def estimate_recipe_macros(links: Iterable, servings: Optional[int]) -> dict:
    """
    Per-serving macros for a recipe.

    Each link exposes `quantity` (treated as grams) and `ingredient` with the
    per-100g columns. Missing values count as 0; servings default to 3.
    """
    totals = dict.fromkeys(MACRO_KEYS, 0.0)
    for link in links:
        ing = link.ingredient
        if ing is None:
            continue
        multiplier = (link.quantity or 0) / 100
        for key in MACRO_KEYS:
            totals[key] += (getattr(ing, f"{key}_per_100g") or 0) * multiplier

    divisor = servings or DEFAULT_SERVINGS
    return {key: round(value / divisor) for key, value in totals.items()}


def weekly_nutrition(week_start: date, entries: Iterable, macros_by_recipe: dict) -> dict:
    """
    Daily rows for the 7 days from week_start plus totals and averages.

    Averages are over days that have a planned recipe with macros.
    """
    by_date = {e.date: e for e in entries}
    daily = []
    totals = dict.fromkeys(MACRO_KEYS, 0)
    days_with_meals = 0

    for offset in range(7):
        day = week_start + timedelta(days=offset)
        entry = by_date.get(day)
        macros = macros_by_recipe.get(entry.recipe_id) if entry and entry.recipe_id else None
        if macros:
            daily.append({"date": day, "day_name": day.strftime("%A"), **macros, "has_data": True})
            for key in MACRO_KEYS:
                totals[key] += macros[key]
            days_with_meals += 1
        else:
            daily.append({
                "date": day,
                "day_name": day.strftime("%A"),
                **dict.fromkeys(MACRO_KEYS, 0),
                "has_data": False,
            })

    average = {
        key: round(totals[key] / days_with_meals) if days_with_meals else 0
        for key in MACRO_KEYS
    }
    return {"daily": daily, "total": totals, "average": average, "days_with_meals": days_with_meals}
