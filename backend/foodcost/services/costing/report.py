"""Plain-text costing submission for a single recipe."""

import math

from foodcost.config import settings
from foodcost.schemas.costing import CostBreakdown, Recipe
from foodcost.services.costing.calculator import IngredientLookup
from foodcost.services.costing.units import display_quantity


def _money(value: float) -> str:
    if not math.isfinite(value):
        return "n/a"
    return f"{settings.currency_label} {value:,.0f}"


def _qty(value: float) -> str:
    return f"{value:g}"


def format_costing_report(recipe: Recipe, catalog: IngredientLookup, breakdown: CostBreakdown) -> str:
    lines = []
    for item in recipe.ingredients:
        ingredient = catalog.get(item.ingredient_id)
        name = ingredient.name if ingredient else "Unknown"
        lines.append(f"- {name}: {_qty(display_quantity(item.quantity, item.unit))} {item.unit}")
    ingredient_list = "\n".join(lines) or "- none"

    return "\n".join(
        [
            f"RECIPE SUBMISSION: {recipe.name.upper()}",
            "-" * 40,
            f"Description: {recipe.description or 'N/A'}",
            f"Servings: {recipe.servings}",
            "",
            "INGREDIENTS:",
            ingredient_list,
            "",
            "INSTRUCTIONS:",
            recipe.instructions or "No instructions provided.",
            "",
            "-" * 40,
            f"COSTING BREAKDOWN ({settings.currency_label}):",
            f"Total Ingredient Cost: {_money(breakdown.total_ingredient_cost)}",
            f"Labor Cost: {_money(breakdown.labor_cost)}",
            f"Overhead ({_qty(recipe.overhead_percentage)}%): {_money(breakdown.overhead_cost)}",
            "",
            f"TOTAL RECIPE COST: {_money(breakdown.total_cost)}",
            f"COST PER SERVING: {_money(breakdown.cost_per_serving)}",
            "",
            f"SUGGESTED SELLING PRICE: {_money(breakdown.suggested_price)}",
            f"(Based on {_qty(recipe.target_food_cost_percentage)}% Food Cost Target)",
        ]
    )
