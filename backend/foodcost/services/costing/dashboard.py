"""Menu-level food-cost summary across all recipes."""

import math
from typing import Mapping, Optional

from pydantic import BaseModel

from foodcost.config import settings
from foodcost.schemas.costing import DEFAULT_CATEGORY, Recipe
from foodcost.services.costing.calculator import IngredientLookup, compute_cost_breakdown


class CategoryCost(BaseModel):
    name: str
    value: float


class MenuSummary(BaseModel):
    total_recipes: int
    avg_food_cost_percent: float
    warnings: int
    profitable_count: int
    category_costs: list[CategoryCost]


def summarize_menu(
    recipes: list[Recipe],
    catalog: IngredientLookup,
    actual_prices: Optional[Mapping[str, float]] = None,
    profitable_margin: Optional[float] = None,
) -> MenuSummary:
    """
    Food-cost percentage is ingredient cost per serving over the actual price,
    or over the suggested price when none is known. Recipes where that ratio is
    not finite are left out of the average.
    """
    prices = actual_prices or {}
    threshold = settings.profitable_margin_threshold if profitable_margin is None else profitable_margin
    fc_values: list[float] = []
    warnings = 0
    profitable = 0
    categories: dict[str, float] = {}

    for recipe in recipes:
        costs = compute_cost_breakdown(recipe, catalog, actual_price=prices.get(recipe.id))
        price = costs.actual_price or costs.suggested_price
        fc_pct = costs.ingredient_cost_per_serving / price * 100 if price else math.nan
        if math.isfinite(fc_pct):
            fc_values.append(fc_pct)
            if fc_pct > recipe.target_food_cost_percentage:
                warnings += 1
        if costs.current_margin is not None and costs.current_margin > threshold:
            profitable += 1

        for item in recipe.ingredients:
            ingredient = catalog.get(item.ingredient_id)
            if ingredient:
                cat = ingredient.category or DEFAULT_CATEGORY
                categories[cat] = categories.get(cat, 0.0) + item.quantity * ingredient.cost_per_base_unit

    avg = sum(fc_values) / len(fc_values) if fc_values else 0.0
    category_costs = sorted(
        (CategoryCost(name=k, value=v) for k, v in categories.items()),
        key=lambda c: c.value,
        reverse=True,
    )
    return MenuSummary(
        total_recipes=len(recipes),
        avg_food_cost_percent=round(avg, 1),
        warnings=warnings,
        profitable_count=profitable,
        category_costs=category_costs,
    )
