from typing import Any, Optional

from pydantic import BaseModel

from foodcost.schemas.costing import CamelModel, CostBreakdown, DerivedModel, LineCost, Recipe, Unit


class IngredientIn(CamelModel):
    name: str
    category: Optional[str] = None
    purchase_unit: Unit = Unit.KILOGRAM
    purchase_cost: Optional[float] = None
    purchase_quantity: Optional[float] = 1.0


class BulkImportRequest(BaseModel):
    rows: list[dict[str, Any]]


class BulkImportResponse(BaseModel):
    admitted: int
    rejected: int


class RecipeLineIn(CamelModel):
    ingredient_id: str
    quantity: float
    unit: str = "g"


class RecipeCostResponse(CamelModel):
    recipe_id: str
    breakdown: CostBreakdown
    lines: list[LineCost]


class DraftRequest(CamelModel):
    recipe: Recipe


class DraftResponse(CamelModel):
    recipe: Recipe
    status: str  # "ok" | "failed"
    matched: list[str] = []
    unmatched: list[str] = []
    reason: Optional[str] = None


class AnalysisRequest(CamelModel):
    price: Optional[float] = None


class AnalysisResponse(DerivedModel):
    recipe_id: str
    cost_per_serving: Optional[float]
    price: Optional[float]
    analysis: str
