import pytest

from foodcost.schemas.costing import Unit
from foodcost.services.costing.units import (
    base_unit,
    classify_unit,
    cost_per_base_unit,
    display_quantity,
    rebase_quantity,
)


@pytest.mark.parametrize(
    "unit,factor",
    [(Unit.GRAM, 1), (Unit.KILOGRAM, 1000), (Unit.MILLILITER, 1), (Unit.LITER, 1000)],
)
def test_cost_per_base_unit_metric_families(unit, factor):
    for cost, qty in [(18000, 1), (65000, 30), (0, 5), (12.5, 0.25)]:
        assert cost_per_base_unit(unit, cost, qty) == cost / (qty * factor)


def test_kilogram_scenario():
    assert cost_per_base_unit(Unit.KILOGRAM, 18000, 1) == 18


@pytest.mark.parametrize("unit", list(Unit))
def test_zero_quantity_is_zero(unit):
    assert cost_per_base_unit(unit, 5000, 0) == 0


def test_imperial_and_piece_are_their_own_base():
    assert base_unit(Unit.OUNCE) == Unit.OUNCE
    assert base_unit(Unit.POUND) == Unit.POUND
    assert base_unit(Unit.PIECE) == Unit.PIECE
    assert cost_per_base_unit(Unit.POUND, 10, 2) == 5
    assert cost_per_base_unit(Unit.PIECE, 65000, 30) == pytest.approx(2166.6667, rel=1e-6)


def test_base_unit_families():
    assert base_unit(Unit.KILOGRAM) == Unit.GRAM
    assert base_unit(Unit.LITER) == Unit.MILLILITER


def test_cost_per_base_unit_is_deterministic():
    results = {cost_per_base_unit(Unit.LITER, 125000, 1.5) for _ in range(5)}
    assert len(results) == 1


@pytest.mark.parametrize(
    "token,expected",
    [
        ("kg", Unit.KILOGRAM),
        ("KGS", Unit.KILOGRAM),
        ("Kilogram", Unit.KILOGRAM),
        ("g", Unit.GRAM),
        ("grams", Unit.GRAM),
        ("gms", Unit.GRAM),
        ("l", Unit.LITER),
        ("Litre", Unit.LITER),
        ("liters", Unit.LITER),
        ("ml", Unit.MILLILITER),
        ("milliliter", Unit.MILLILITER),
        ("oz", Unit.OUNCE),
        ("ounces", Unit.OUNCE),
        ("lbs", Unit.POUND),
        ("pound", Unit.POUND),
        ("pcs", Unit.PIECE),
        (" kg ", Unit.KILOGRAM),
    ],
)
def test_classify_unit(token, expected):
    assert classify_unit(token) == expected


@pytest.mark.parametrize("token", ["bunch", "", None, "cup", "tray"])
def test_classify_unit_defaults_to_piece(token):
    assert classify_unit(token) == Unit.PIECE


def test_rebase_quantity():
    assert rebase_quantity(0.5, "kg") == 500
    assert rebase_quantity(1.5, "l") == 1500
    assert rebase_quantity(250, "g") == 250
    assert rebase_quantity(3, "pc") == 3
    assert rebase_quantity(2, "cup") == 2


def test_display_quantity_inverts_rebase():
    assert display_quantity(500, "kg") == 0.5
    assert display_quantity(250, "g") == 250
