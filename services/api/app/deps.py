"""FastAPI dependencies for PantryPlan API.

Provides:
- Database session dependency
- Outbound collaborators (recipe extractor, nutrition client), overridable in tests
"""

from typing import Optional

from .db import get_db
from .services.nutrition_service import NutritionClient
from .services.recipe_import import RecipeExtractor
from .settings import settings

__all__ = ["get_db", "get_extractor", "get_nutrition_client"]

_extractor: Optional[RecipeExtractor] = None
_nutrition: Optional[NutritionClient] = None


def get_extractor() -> RecipeExtractor:
    global _extractor
    if _extractor is None:
        _extractor = RecipeExtractor()
    return _extractor


def get_nutrition_client() -> Optional[NutritionClient]:
    """Shared USDA client, or None when lookups are switched off."""
    global _nutrition
    if not settings.nutrition_lookup_enabled:
        return None
    if _nutrition is None:
        _nutrition = NutritionClient()
    return _nutrition
