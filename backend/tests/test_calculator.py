import math

import pytest

from foodcost.schemas.costing import Ingredient, Recipe, RecipeIngredient, Unit
from foodcost.services.costing.calculator import compute_cost_breakdown, line_costs


class Catalog(dict):
    """Minimal lookup: anything with get(id) works as a catalog."""


def _flour() -> Ingredient:
    return Ingredient(
        id="flour",
        name="All-Purpose Flour",
        category="Flours",
        purchase_unit=Unit.KILOGRAM,
        purchase_cost=18000,
        purchase_quantity=1,
        cost_per_base_unit=18,
    )


def _recipe(**overrides) -> Recipe:
    fields = dict(
        name="Flatbread",
        servings=1,
        ingredients=[RecipeIngredient(ingredient_id="flour", quantity=250, unit="g")],
        labor_cost=0,
        overhead_percentage=0,
        target_food_cost_percentage=30,
    )
    fields.update(overrides)
    return Recipe(**fields)


@pytest.fixture(name="catalog")
def catalog_fixture():
    return Catalog(flour=_flour())


def test_single_ingredient_scenario(catalog):
    costs = compute_cost_breakdown(_recipe(), catalog)
    assert costs.total_ingredient_cost == 4500
    assert costs.total_cost == 4500
    assert costs.cost_per_serving == 4500
    assert costs.suggested_price == pytest.approx(15000)
    assert costs.current_margin is None
    assert costs.actual_price is None


def test_labor_and_overhead(catalog):
    costs = compute_cost_breakdown(_recipe(labor_cost=1000, overhead_percentage=10, servings=2), catalog)
    assert costs.overhead_cost == pytest.approx(450)
    assert costs.total_cost == pytest.approx(5950)
    assert costs.cost_per_serving == pytest.approx(2975)
    assert costs.ingredient_cost_per_serving == pytest.approx(2250)
    assert costs.suggested_price == pytest.approx(7500)
    assert costs.labor_cost == 1000


def test_missing_ingredient_contributes_zero(catalog):
    recipe = _recipe(
        ingredients=[
            RecipeIngredient(ingredient_id="flour", quantity=100),
            RecipeIngredient(ingredient_id="deleted", quantity=900),
        ]
    )
    assert compute_cost_breakdown(recipe, catalog).total_ingredient_cost == 1800


def test_overhead_is_monotonic(catalog):
    previous = compute_cost_breakdown(_recipe(overhead_percentage=0), catalog)
    for pct in (5, 10, 25, 100):
        current = compute_cost_breakdown(_recipe(overhead_percentage=pct), catalog)
        assert current.overhead_cost > previous.overhead_cost
        assert current.total_cost > previous.total_cost
        previous = current


def test_suggested_price_decreases_with_target(catalog):
    prices = [
        compute_cost_breakdown(_recipe(target_food_cost_percentage=t), catalog).suggested_price
        for t in (10, 25, 30, 50, 100)
    ]
    assert prices == sorted(prices, reverse=True)
    assert len(set(prices)) == len(prices)


@pytest.mark.parametrize("servings", [0, -3])
def test_non_positive_servings_yield_zero(catalog, servings):
    costs = compute_cost_breakdown(_recipe(servings=servings), catalog)
    assert costs.total_cost == 4500
    assert costs.cost_per_serving == 0
    assert costs.suggested_price == 0


@pytest.mark.parametrize("target", [0, -10])
def test_non_positive_target_yields_zero_price(catalog, target):
    assert compute_cost_breakdown(_recipe(target_food_cost_percentage=target), catalog).suggested_price == 0


def test_nan_propagates_without_raising(catalog):
    costs = compute_cost_breakdown(_recipe(overhead_percentage=float("nan")), catalog)
    assert math.isnan(costs.overhead_cost)
    assert math.isnan(costs.total_cost)
    assert costs.total_ingredient_cost == 4500
    dumped = costs.model_dump(by_alias=True)
    assert dumped["overheadCost"] is None
    assert dumped["totalIngredientCost"] == 4500


def test_actual_price_margin(catalog):
    costs = compute_cost_breakdown(_recipe(), catalog, actual_price=9000)
    assert costs.actual_price == 9000
    assert costs.current_margin == pytest.approx(50)
    assert costs.food_cost_percentage == pytest.approx(50)


def test_zero_actual_price_leaves_margin_undefined(catalog):
    costs = compute_cost_breakdown(_recipe(), catalog, actual_price=0)
    assert costs.current_margin is None


def test_empty_recipe(catalog):
    costs = compute_cost_breakdown(_recipe(ingredients=[], labor_cost=2000, servings=4), catalog)
    assert costs.total_ingredient_cost == 0
    assert costs.total_cost == 2000
    assert costs.cost_per_serving == 500
    assert costs.suggested_price == 0


def test_line_costs(catalog):
    recipe = _recipe(
        ingredients=[
            RecipeIngredient(ingredient_id="flour", quantity=100),
            RecipeIngredient(ingredient_id="deleted", quantity=900, unit="pc"),
        ]
    )
    lines = line_costs(recipe, catalog)
    assert [(l.name, l.cost) for l in lines] == [("All-Purpose Flour", 1800), ("Unknown", 0)]
    assert lines[0].category == "Flours"
    assert lines[1].category == "Others"


def test_breakdown_is_not_cached(catalog):
    recipe = _recipe()
    before = compute_cost_breakdown(recipe, catalog)
    catalog["flour"] = _flour().model_copy(update={"cost_per_base_unit": 20})
    after = compute_cost_breakdown(recipe, catalog)
    assert before.total_ingredient_cost == 4500
    assert after.total_ingredient_cost == 5000
