from .parser import RecipeParser, ParsedRecipe, ParsedIngredient
from .ingredient_parser import parse_ingredient_line, parse_quantity
from .jsonld import find_recipe_jsonld, is_recipe
from .schema_org import (
    JsonLdRecipeParser,
    map_schema_recipe,
    parse_cuisine,
    parse_duration,
    parse_instructions,
    parse_servings,
)

__all__ = [
    "RecipeParser",
    "ParsedRecipe",
    "ParsedIngredient",
    "JsonLdRecipeParser",
    "find_recipe_jsonld",
    "is_recipe",
    "map_schema_recipe",
    "parse_cuisine",
    "parse_duration",
    "parse_instructions",
    "parse_servings",
    "parse_ingredient_line",
    "parse_quantity",
]
