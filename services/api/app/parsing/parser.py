from abc import ABC, abstractmethod
from typing import Literal, Optional, List
from pydantic import BaseModel


class ParsedIngredient(BaseModel):
    """One free-text ingredient line split into its parts, all kept as text."""
    quantity: str = ""
    unit: str = ""
    name: str
    notes: str = ""


class ParsedRecipe(BaseModel):
    name: str = ""
    description: str = ""
    cuisine_type: str = ""
    difficulty: Literal["Easy", "Medium", "Hard"] = "Easy"
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    servings: Optional[int] = None
    instructions: str = ""
    ingredients: List[ParsedIngredient] = []


class RecipeParser(ABC):
    @abstractmethod
    def parse(self, html: str) -> ParsedRecipe:
        """Parse a fetched page into a canonical recipe record."""
        pass
