"""Catalog, recipe and costing shapes.

Field names serialize in camelCase: that is the persisted JSON layout of the
ingredient and recipe collections, so renaming a field is a storage break.
"""

import math
import uuid
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel


class Unit(str, Enum):
    GRAM = "g"
    KILOGRAM = "kg"
    MILLILITER = "ml"
    LITER = "l"
    PIECE = "pc"
    OUNCE = "oz"
    POUND = "lb"


INGREDIENT_CATEGORIES = (
    "Meat",
    "Seafood",
    "Flours",
    "Dairy",
    "Bakery",
    "Condiments",
    "Vegetables",
    "Pasta",
    "Fruits",
    "Alcohol",
    "Others",
)
DEFAULT_CATEGORY = "Others"


def _new_id() -> str:
    return str(uuid.uuid4())


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Ingredient(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str
    category: str = DEFAULT_CATEGORY
    purchase_unit: Unit = Unit.KILOGRAM
    purchase_cost: float
    purchase_quantity: float = 1.0
    cost_per_base_unit: float = 0.0  # derived; the catalog recomputes it on every write


class RecipeIngredient(CamelModel):
    ingredient_id: str
    quantity: float = Field(default=0.0, ge=0)  # always in the ingredient's base unit
    unit: str = Unit.GRAM.value  # display label only


class Recipe(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str = "New Recipe"
    description: str = ""
    servings: int = 4
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    labor_cost: float = 0.0
    overhead_percentage: float = 10.0
    target_food_cost_percentage: float = 30.0
    instructions: Optional[str] = None
    image_url: Optional[str] = None


class DerivedModel(CamelModel):
    """Computed projection; non-finite numbers serialize as null (unavailable)."""

    @field_serializer("*")
    def _unavailable_as_null(self, value):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value


class CostBreakdown(DerivedModel):
    total_ingredient_cost: float
    labor_cost: float
    overhead_cost: float
    total_cost: float
    cost_per_serving: float
    ingredient_cost_per_serving: float
    suggested_price: float
    actual_price: Optional[float] = None
    current_margin: Optional[float] = None
    food_cost_percentage: Optional[float] = None


class LineCost(DerivedModel):
    ingredient_id: str
    name: str
    category: str
    quantity: float
    unit: str
    cost: float


def normalize_category(raw: object) -> str:
    """Canonical spelling for a known category (case-insensitive), else the raw text."""
    text = str(raw or "").strip()
    if not text:
        return DEFAULT_CATEGORY
    for category in INGREDIENT_CATEGORIES:
        if category.lower() == text.lower():
            return category
    return text
