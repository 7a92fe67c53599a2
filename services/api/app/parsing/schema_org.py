"""schema.org Recipe -> ParsedRecipe mapping.

JSON-LD fields arrive in several shapes (string, list, object, number). Each
field gets its own normalizer so the shape handling stays in one place.
"""

import re
from typing import Any, Optional

from ..core.errors import NoStructuredData
from ..core.text import as_text, strip_tags
from .ingredient_parser import parse_ingredient_line
from .jsonld import find_recipe_jsonld
from .parser import ParsedIngredient, ParsedRecipe, RecipeParser

_HOURS_RE = re.compile(r"(\d+)H")
_MINUTES_RE = re.compile(r"(\d+)M")
_DIGITS_RE = re.compile(r"\d+")


def parse_duration(value: Any) -> int:
    """ISO-8601 duration ("PT1H30M") to whole minutes. Missing parts count as 0."""
    if not value or not isinstance(value, str):
        return 0
    # Only look at the time part so a month designator ("P1M") is not read as minutes
    time_part = value.split("T", 1)[1] if "T" in value else value
    hours = _HOURS_RE.search(time_part)
    minutes = _MINUTES_RE.search(time_part)
    return (int(hours.group(1)) if hours else 0) * 60 + (int(minutes.group(1)) if minutes else 0)


def parse_servings(value: Any) -> Optional[int]:
    """First integer in a recipeYield ("4 servings", ["Serves 6-8"], 4)."""
    if value is None or value == "" or value == []:
        return None
    text = str(value[0]) if isinstance(value, list) else str(value)
    match = _DIGITS_RE.search(text)
    if not match:
        return None
    # servings are positive; a bare "0" counts as missing
    return int(match.group(0)) or None


def _step_text(step: Any) -> str:
    if isinstance(step, str):
        return strip_tags(step)
    if isinstance(step, dict):
        return strip_tags(step.get("text") or step.get("name") or "")
    if step is None:
        return ""
    return str(step)


def parse_instructions(value: Any) -> str:
    """
    recipeInstructions as a string, a list of strings or a list of HowToStep
    objects. Steps are joined with a blank line; other shapes give "".
    """
    if not value:
        return ""
    if isinstance(value, str):
        return strip_tags(value)
    if isinstance(value, list):
        steps = [_step_text(step) for step in value]
        return "\n\n".join(s for s in steps if s)
    return ""


def parse_cuisine(value: Any) -> str:
    if isinstance(value, list):
        return as_text(value[0]) if value else ""
    return as_text(value)


def parse_ingredients(value: Any) -> list[ParsedIngredient]:
    if not value:
        return []
    lines = [value] if isinstance(value, str) else value
    if not isinstance(lines, list):
        return []
    return [
        ParsedIngredient(**parse_ingredient_line(as_text(line)))
        for line in lines
        if as_text(line).strip()
    ]


def map_schema_recipe(data: dict) -> ParsedRecipe:
    """Map one schema.org Recipe object onto the canonical record."""
    return ParsedRecipe(
        name=as_text(data.get("name")),
        description=strip_tags(data.get("description")),
        cuisine_type=parse_cuisine(data.get("recipeCuisine")),
        difficulty="Easy",  # never inferred; a person can change it before saving
        prep_time_minutes=parse_duration(data.get("prepTime")),
        cook_time_minutes=parse_duration(data.get("cookTime")),
        servings=parse_servings(data.get("recipeYield")),
        instructions=parse_instructions(data.get("recipeInstructions")),
        ingredients=parse_ingredients(data.get("recipeIngredient")),
    )


class JsonLdRecipeParser(RecipeParser):
    def parse(self, html: str) -> ParsedRecipe:
        data = find_recipe_jsonld(html)
        if data is None:
            raise NoStructuredData()
        return map_schema_recipe(data)
