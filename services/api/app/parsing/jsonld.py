import json
import logging
from typing import Any, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger("pantryplan.parsing.jsonld")


def is_recipe(obj: Any) -> bool:
    """True for a JSON-LD object whose @type is "Recipe" or a list containing it."""
    if not isinstance(obj, dict):
        return False
    kind = obj.get("@type")
    if isinstance(kind, str):
        return kind == "Recipe"
    if isinstance(kind, list):
        return "Recipe" in kind
    return False


def _recipe_in_block(data: Any) -> Optional[dict]:
    if is_recipe(data):
        return data
    if isinstance(data, list):
        return next((item for item in data if is_recipe(item)), None)
    if isinstance(data, dict) and isinstance(data.get("@graph"), list):
        return next((item for item in data["@graph"] if is_recipe(item)), None)
    return None


def _is_ld_json(value) -> bool:
    return bool(value) and value.split(";")[0].strip().lower() == "application/ld+json"


def iter_jsonld_blocks(html: str):
    """Yield decoded JSON-LD payloads in document order, skipping malformed ones."""
    soup = BeautifulSoup(html or "", "html.parser")
    for index, tag in enumerate(soup.find_all("script", attrs={"type": _is_ld_json})):
        raw = tag.get_text()
        if not raw.strip():
            continue
        try:
            yield json.loads(raw)
        except ValueError as e:
            logger.debug("Skipping malformed JSON-LD block #%d: %s", index, e)


def find_recipe_jsonld(html: str) -> Optional[dict]:
    """
    Return the first schema.org Recipe object embedded in the page.

    A block qualifies when it is a Recipe, an array holding one, or an object
    whose @graph holds one. Returns None when no block qualifies.
    """
    for data in iter_jsonld_blocks(html):
        recipe = _recipe_in_block(data)
        if recipe is not None:
            return recipe
    return None
