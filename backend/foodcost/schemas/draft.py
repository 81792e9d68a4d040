from typing import Optional

from pydantic import Field

from foodcost.schemas.costing import CamelModel


class DraftIngredientSuggestion(CamelModel):
    name: str = Field(min_length=1)
    quantity: float = Field(allow_inf_nan=False)
    unit: str = ""
    estimated_cost: float = Field(default=0.0, allow_inf_nan=False)


class RecipeDraft(CamelModel):
    """Structured recipe suggestion returned by the generative service."""

    description: str = ""
    servings: Optional[float] = None
    instructions: str = ""
    ingredients: list[DraftIngredientSuggestion] = Field(default_factory=list)
