"""Pydantic schemas for PantryPlan API.

Request/response models for:
- Recipes (import preview, create, read)
- Ingredients catalog
- Meal plan
- Shopping lists and check state
- Inventory
- Nutrition
"""

from datetime import datetime, date
from typing import Optional, Literal

from pydantic import BaseModel, Field

from .parsing import ParsedRecipe

Difficulty = Literal["Easy", "Medium", "Hard"]
StoreSection = Literal[
    "meat", "seafood", "produce", "dairy", "frozen", "grains", "pasta", "canned",
    "condiments", "oils", "asian", "mexican", "bakery", "spices", "other",
]
PurchaseFrequency = Literal["weekly", "monthly", "freezer_months"]


# --- Recipe import ---

class ParseRecipeResponse(BaseModel):
    recipe: ParsedRecipe


# --- Recipe ---

class IngredientLineIn(BaseModel):
    name: str = Field("", max_length=200)
    quantity: str = ""  # free text, coerced on save
    unit: str = Field("", max_length=30)
    notes: str = ""


class RecipeCreate(BaseModel):
    name: str = Field(..., max_length=200)
    description: str = ""
    cuisine_type: str = Field("", max_length=80)
    difficulty: Difficulty = "Easy"
    prep_time_minutes: int = Field(0, ge=0)
    cook_time_minutes: int = Field(0, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    instructions: str = ""
    source_url: Optional[str] = None
    ingredients: list[IngredientLineIn] = []


class RecipeIngredientOut(BaseModel):
    ingredient_id: str
    name: str
    quantity: float
    unit: str
    notes: str
    store_section: Optional[str] = None


class RecipeListOut(BaseModel):
    id: str
    name: str
    cuisine_type: Optional[str]
    difficulty: str
    prep_time_minutes: int
    cook_time_minutes: int
    servings: Optional[int]
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RecipeOut(RecipeListOut):
    description: Optional[str]
    instructions: Optional[str]
    source_url: Optional[str]
    ingredients: list[RecipeIngredientOut] = []


# --- Ingredients ---

class IngredientOut(BaseModel):
    id: str
    name: str
    category: Optional[str]
    storage_location: Optional[str]
    purchase_frequency: str
    store_section: Optional[str]
    calories_per_100g: Optional[float]
    protein_per_100g: Optional[float]
    carbs_per_100g: Optional[float]
    fat_per_100g: Optional[float]
    fiber_per_100g: Optional[float]

    class Config:
        from_attributes = True


class IngredientPatch(BaseModel):
    category: Optional[str] = None
    storage_location: Optional[str] = None
    purchase_frequency: Optional[PurchaseFrequency] = None
    store_section: Optional[StoreSection] = None
    calories_per_100g: Optional[float] = Field(None, ge=0)
    protein_per_100g: Optional[float] = Field(None, ge=0)
    carbs_per_100g: Optional[float] = Field(None, ge=0)
    fat_per_100g: Optional[float] = Field(None, ge=0)
    fiber_per_100g: Optional[float] = Field(None, ge=0)


# --- Meal plan ---

class PlanEntryUpsert(BaseModel):
    recipe_id: Optional[str] = None
    notes: Optional[str] = None


class PlanRecipeOut(BaseModel):
    id: str
    name: str
    cuisine_type: Optional[str]

    class Config:
        from_attributes = True


class PlanEntryOut(BaseModel):
    id: str
    date: date
    day_of_week: str
    recipe_id: Optional[str]
    notes: Optional[str]
    recipe: Optional[PlanRecipeOut] = None

    class Config:
        from_attributes = True


# --- Shopping ---

class ShoppingItemOut(BaseModel):
    name: str
    quantity: float
    unit: str
    section: str
    notes: str
    purchase_frequency: Optional[str] = None
    recipes: list[str]
    checked: bool = False


class ShoppingSectionOut(BaseModel):
    section: str
    items: list[ShoppingItemOut]


class ShoppingListOut(BaseModel):
    kind: str  # weekly | monthly
    key: str  # week start (YYYY-MM-DD) or month (YYYY-MM)
    start: date
    end: date
    sections: list[ShoppingSectionOut] = []
    recipe_names: list[str] = []


class CheckUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    checked: bool


class ChecksOut(BaseModel):
    kind: str
    key: str
    checks: dict[str, bool]


class MiscItemCreate(BaseModel):
    item_name: str = Field(..., min_length=1, max_length=200)


class MiscItemUpdate(BaseModel):
    checked: Optional[bool] = None
    item_name: Optional[str] = Field(None, min_length=1, max_length=200)


class MiscItemOut(BaseModel):
    id: str
    item_name: str
    checked: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- Inventory ---

class InventoryUpsert(BaseModel):
    ingredient_id: Optional[str] = None
    # Creates a catalog entry when no ingredient_id is given
    ingredient_name: Optional[str] = Field(None, max_length=200)
    quantity: float
    unit: str = ""


class InventoryPatch(BaseModel):
    quantity: float


class InventoryItemOut(BaseModel):
    id: str
    ingredient_id: str
    ingredient_name: str
    category: Optional[str]
    quantity: float
    unit: str
    stock_level: str  # depleted | low | stocked
    updated_at: Optional[datetime] = None


# --- Nutrition ---

class MacroSet(BaseModel):
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0


class DailyNutritionOut(MacroSet):
    date: date
    day_name: str
    has_data: bool


class WeeklyNutritionOut(BaseModel):
    week_start: date
    daily: list[DailyNutritionOut]
    total: MacroSet
    average: MacroSet
    days_with_meals: int
