"""
Merge a generated recipe draft into the ingredient catalog's vocabulary.

Suggestions are matched to catalog ingredients by exact, case-insensitive
name. Matched quantities are rebased into the ingredient's base unit
(0.5 kg -> 500 g). Unmatched suggestions are dropped and only logged:
reconciliation never creates catalog entries.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from foodcost.logging import get_logger
from foodcost.schemas.costing import Ingredient, Recipe, RecipeIngredient
from foodcost.schemas.draft import RecipeDraft
from foodcost.services.costing.units import rebase_quantity

logger = get_logger(__name__)


@dataclass
class Reconciliation:
    recipe_fields: dict[str, Any] = field(default_factory=dict)
    ingredient_lines: list[RecipeIngredient] = field(default_factory=list)
    matched: list[str] = field(default_factory=list)
    unmatched: list[str] = field(default_factory=list)


def _draft_servings(value: Optional[float]) -> Optional[int]:
    if not value or value != value or value <= 0:
        return None
    return max(1, int(round(value)))


def reconcile(draft: Optional[RecipeDraft], catalog: Iterable[Ingredient]) -> Reconciliation:
    """Match draft suggestions against the catalog. A missing draft reconciles to nothing."""
    result = Reconciliation()
    if draft is None:
        logger.info("reconcile.empty_draft")
        return result

    by_name = {}
    for ingredient in catalog:
        by_name.setdefault(ingredient.name.lower(), ingredient)

    for suggestion in draft.ingredients:
        match = by_name.get(suggestion.name.lower())
        if match is None:
            logger.info("reconcile.unmatched name=%s", suggestion.name)
            result.unmatched.append(suggestion.name)
            continue
        qty = rebase_quantity(suggestion.quantity, suggestion.unit)
        result.ingredient_lines.append(
            RecipeIngredient(ingredient_id=match.id, quantity=max(qty, 0.0), unit=suggestion.unit)
        )
        result.matched.append(match.name)

    if draft.description:
        result.recipe_fields["description"] = draft.description
    if draft.instructions:
        result.recipe_fields["instructions"] = draft.instructions
    servings = _draft_servings(draft.servings)
    if servings:
        result.recipe_fields["servings"] = servings

    logger.info(
        "reconcile.done matched=%s unmatched=%s fields=%s",
        len(result.matched),
        len(result.unmatched),
        sorted(result.recipe_fields),
    )
    return result


def apply_reconciliation(recipe: Recipe, result: Reconciliation) -> Recipe:
    """
    Return a copy of `recipe` with the reconciled fields applied.
    The ingredient list is only replaced when at least one line matched, so an
    all-unmatched (or failed) draft never blanks a recipe.
    """
    update: dict[str, Any] = dict(result.recipe_fields)
    if result.ingredient_lines:
        update["ingredients"] = list(result.ingredient_lines)
    return recipe.model_copy(update=update)
