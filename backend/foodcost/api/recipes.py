from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from foodcost.api.errors import http_error
from foodcost.config import settings
from foodcost.errors import FoodCostError, NotFoundError, ValidationError
from foodcost.logging import get_logger
from foodcost.schemas.api import (
    AnalysisRequest,
    AnalysisResponse,
    DraftRequest,
    DraftResponse,
    RecipeCostResponse,
    RecipeLineIn,
)
from foodcost.schemas.costing import Recipe, RecipeIngredient
from foodcost.services.costing.calculator import compute_cost_breakdown, line_costs
from foodcost.services.costing.reconciler import apply_reconciliation, reconcile
from foodcost.services.costing.report import format_costing_report
from foodcost.services.costing.units import rebase_quantity
from foodcost.services.llm.profitability import analyze_profitability
from foodcost.services.llm.recipe_draft import Err, generate_recipe_draft
from foodcost.storage.repositories import Workspace, get_workspace
from foodcost.utils.timing import time_span

router = APIRouter()
logger = get_logger(__name__)


def _get_recipe(ws: Workspace, recipe_id: str) -> Recipe:
    recipe = ws.recipes.get(recipe_id)
    if recipe is None:
        raise http_error(NotFoundError("recipe", recipe_id))
    return recipe


def _check_recipe(recipe: Recipe, ws: Workspace) -> None:
    if not recipe.name.strip():
        raise ValidationError("Recipe name is required")
    if recipe.servings < 1:
        raise ValidationError("Servings must be a positive integer")
    if recipe.labor_cost < 0 or recipe.overhead_percentage < 0:
        raise ValidationError("Labor cost and overhead must not be negative")
    missing = [line.ingredient_id for line in recipe.ingredients if ws.catalog.get(line.ingredient_id) is None]
    if missing:
        raise ValidationError(f"Unknown ingredient ids: {', '.join(missing)}")


def _cost_response(recipe: Recipe, ws: Workspace, actual_price: float | None = None) -> RecipeCostResponse:
    return RecipeCostResponse(
        recipe_id=recipe.id,
        breakdown=compute_cost_breakdown(recipe, ws.catalog, actual_price=actual_price),
        lines=line_costs(recipe, ws.catalog),
    )


@router.get("/recipes", response_model=list[Recipe])
def list_recipes(ws: Workspace = Depends(get_workspace)):
    return ws.recipes.list()


@router.post("/recipes/new", response_model=Recipe)
def new_recipe():
    """Empty recipe with configured defaults; not saved until PUT /recipes."""
    return Recipe(
        servings=settings.default_servings,
        overhead_percentage=settings.default_overhead_percentage,
        target_food_cost_percentage=settings.default_target_food_cost_percentage,
    )


@router.put("/recipes", response_model=Recipe)
def save_recipe(recipe: Recipe, ws: Workspace = Depends(get_workspace)):
    # ingredient ids must still exist when the save lands
    with ws.lock:
        try:
            _check_recipe(recipe, ws)
        except FoodCostError as e:
            raise http_error(e)
        return ws.recipes.save(recipe)


@router.get("/recipes/{recipe_id}", response_model=Recipe)
def get_recipe(recipe_id: str, ws: Workspace = Depends(get_workspace)):
    return _get_recipe(ws, recipe_id)


@router.delete("/recipes/{recipe_id}")
def delete_recipe(recipe_id: str, ws: Workspace = Depends(get_workspace)) -> dict:
    try:
        ws.recipes.delete(recipe_id)
    except FoodCostError as e:
        raise http_error(e)
    return {"ok": True, "deleted": recipe_id}


@router.post("/recipes/{recipe_id}/lines", response_model=Recipe)
def add_recipe_line(recipe_id: str, body: RecipeLineIn, ws: Workspace = Depends(get_workspace)):
    """Append a line entered in any unit; the stored quantity is in the ingredient's base unit."""
    if body.quantity < 0:
        raise HTTPException(status_code=400, detail="Quantity must not be negative")
    with ws.lock:
        recipe = _get_recipe(ws, recipe_id)
        if ws.catalog.get(body.ingredient_id) is None:
            raise http_error(NotFoundError("ingredient", body.ingredient_id))
        line = RecipeIngredient(
            ingredient_id=body.ingredient_id,
            quantity=rebase_quantity(body.quantity, body.unit),
            unit=body.unit,
        )
        updated = recipe.model_copy(update={"ingredients": [*recipe.ingredients, line]})
        return ws.recipes.save(updated)


@router.get("/recipes/{recipe_id}/cost", response_model=RecipeCostResponse)
def recipe_cost(recipe_id: str, actual_price: float | None = None, ws: Workspace = Depends(get_workspace)):
    return _cost_response(_get_recipe(ws, recipe_id), ws, actual_price)


@router.post("/recipes/cost", response_model=RecipeCostResponse)
def preview_cost(recipe: Recipe, actual_price: float | None = None, ws: Workspace = Depends(get_workspace)):
    """Breakdown for unsaved editor state."""
    return _cost_response(recipe, ws, actual_price)


@router.post("/recipes/draft", response_model=DraftResponse)
def draft_recipe(body: DraftRequest, ws: Workspace = Depends(get_workspace)):
    """
    Auto-fill the editor recipe from a generated draft. The result is not saved.
    A failed generation reconciles as an empty draft and returns the recipe unchanged.
    """
    recipe = body.recipe
    if not recipe.name.strip():
        raise HTTPException(status_code=400, detail="Recipe name is required")
    catalog = ws.catalog.list()
    with time_span("recipes.draft", recipe=recipe.name, catalog=len(catalog)):
        result = generate_recipe_draft(recipe.name, [i.name for i in catalog])
        draft = None if isinstance(result, Err) else result.draft
        reconciliation = reconcile(draft, catalog)
        merged = apply_reconciliation(recipe, reconciliation)
    return DraftResponse(
        recipe=merged,
        status="failed" if isinstance(result, Err) else "ok",
        matched=reconciliation.matched,
        unmatched=reconciliation.unmatched,
        reason=result.reason if isinstance(result, Err) else None,
    )


@router.post("/recipes/{recipe_id}/analysis", response_model=AnalysisResponse)
def analyze_recipe(recipe_id: str, body: AnalysisRequest | None = None, ws: Workspace = Depends(get_workspace)):
    recipe = _get_recipe(ws, recipe_id)
    costs = compute_cost_breakdown(recipe, ws.catalog)
    price = body.price if body and body.price else costs.suggested_price
    analysis = analyze_profitability(recipe.name, costs.cost_per_serving, price)
    return AnalysisResponse(
        recipe_id=recipe.id,
        cost_per_serving=costs.cost_per_serving,
        price=price,
        analysis=analysis,
    )


@router.get("/recipes/{recipe_id}/report", response_class=PlainTextResponse)
def recipe_report(recipe_id: str, ws: Workspace = Depends(get_workspace)):
    recipe = _get_recipe(ws, recipe_id)
    breakdown = compute_cost_breakdown(recipe, ws.catalog)
    logger.info("recipe.report id=%s", recipe.id)
    return PlainTextResponse(format_costing_report(recipe, ws.catalog, breakdown))
