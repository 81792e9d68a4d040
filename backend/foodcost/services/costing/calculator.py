"""
Recipe cost aggregation and food-cost-percentage pricing.

Pure functions over a Recipe and any catalog exposing `get(id)`; nothing here
is cached. Degenerate inputs (zero servings, zero target) yield 0, and NaN
flows through rather than raising.
"""

from typing import Optional, Protocol

from foodcost.schemas.costing import DEFAULT_CATEGORY, CostBreakdown, Ingredient, LineCost, Recipe


class IngredientLookup(Protocol):
    def get(self, ingredient_id: str) -> Optional[Ingredient]:
        ...


def line_costs(recipe: Recipe, catalog: IngredientLookup) -> list[LineCost]:
    """Cost of each recipe line; lines whose ingredient is gone cost 0."""
    lines: list[LineCost] = []
    for item in recipe.ingredients:
        ingredient = catalog.get(item.ingredient_id)
        lines.append(
            LineCost(
                ingredient_id=item.ingredient_id,
                name=ingredient.name if ingredient else "Unknown",
                category=(ingredient.category or DEFAULT_CATEGORY) if ingredient else DEFAULT_CATEGORY,
                quantity=item.quantity,
                unit=item.unit,
                cost=item.quantity * ingredient.cost_per_base_unit if ingredient else 0.0,
            )
        )
    return lines


def total_ingredient_cost(recipe: Recipe, catalog: IngredientLookup) -> float:
    total = 0.0
    for item in recipe.ingredients:
        ingredient = catalog.get(item.ingredient_id)
        if ingredient:
            total += item.quantity * ingredient.cost_per_base_unit
    return total


def compute_cost_breakdown(
    recipe: Recipe, catalog: IngredientLookup, actual_price: Optional[float] = None
) -> CostBreakdown:
    ingredient_cost = total_ingredient_cost(recipe, catalog)
    overhead_cost = ingredient_cost * (recipe.overhead_percentage / 100)
    total_cost = ingredient_cost + recipe.labor_cost + overhead_cost

    servings = recipe.servings
    cost_per_serving = total_cost / servings if servings > 0 else 0.0
    ingredient_cost_per_serving = ingredient_cost / servings if servings > 0 else 0.0

    # Price at which ingredient cost is exactly the target share of the price
    target = recipe.target_food_cost_percentage / 100
    suggested_price = ingredient_cost_per_serving / target if target > 0 else 0.0

    margin = None
    food_cost_pct = None
    if actual_price:
        margin = (actual_price - total_cost) / actual_price * 100
        food_cost_pct = ingredient_cost_per_serving / actual_price * 100

    return CostBreakdown(
        total_ingredient_cost=ingredient_cost,
        labor_cost=recipe.labor_cost,
        overhead_cost=overhead_cost,
        total_cost=total_cost,
        cost_per_serving=cost_per_serving,
        ingredient_cost_per_serving=ingredient_cost_per_serving,
        suggested_price=suggested_price,
        actual_price=actual_price if actual_price else None,
        current_margin=margin,
        food_cost_percentage=food_cost_pct,
    )
