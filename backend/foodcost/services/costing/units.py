"""
Purchase-unit normalization.

Each purchase unit belongs to a family with a fixed base unit:
kg/g -> g, l/ml -> ml. Piece, ounce and pound are their own base unit;
there is no cross-family conversion (no oz -> g, no volume <-> mass).
"""

from foodcost.schemas.costing import Unit

# purchase unit -> (base unit, factor)
BASE_UNITS: dict[Unit, tuple[Unit, float]] = {
    Unit.GRAM: (Unit.GRAM, 1.0),
    Unit.KILOGRAM: (Unit.GRAM, 1000.0),
    Unit.MILLILITER: (Unit.MILLILITER, 1.0),
    Unit.LITER: (Unit.MILLILITER, 1000.0),
    Unit.PIECE: (Unit.PIECE, 1.0),
    Unit.OUNCE: (Unit.OUNCE, 1.0),
    Unit.POUND: (Unit.POUND, 1.0),
}

# Free-text unit token (lowercase) -> Unit
UNIT_ALIASES: dict[str, Unit] = {
    "g": Unit.GRAM, "gr": Unit.GRAM, "gm": Unit.GRAM, "gms": Unit.GRAM,
    "gram": Unit.GRAM, "grams": Unit.GRAM, "gramme": Unit.GRAM, "grammes": Unit.GRAM,
    "kg": Unit.KILOGRAM, "kgs": Unit.KILOGRAM, "kilo": Unit.KILOGRAM, "kilos": Unit.KILOGRAM,
    "kilogram": Unit.KILOGRAM, "kilograms": Unit.KILOGRAM,
    "ml": Unit.MILLILITER, "mls": Unit.MILLILITER,
    "milliliter": Unit.MILLILITER, "milliliters": Unit.MILLILITER,
    "millilitre": Unit.MILLILITER, "millilitres": Unit.MILLILITER,
    "l": Unit.LITER, "lt": Unit.LITER, "ltr": Unit.LITER, "ltrs": Unit.LITER,
    "liter": Unit.LITER, "liters": Unit.LITER, "litre": Unit.LITER, "litres": Unit.LITER,
    "oz": Unit.OUNCE, "ozs": Unit.OUNCE, "ounce": Unit.OUNCE, "ounces": Unit.OUNCE,
    "lb": Unit.POUND, "lbs": Unit.POUND, "pound": Unit.POUND, "pounds": Unit.POUND,
    "pc": Unit.PIECE, "pcs": Unit.PIECE, "piece": Unit.PIECE, "pieces": Unit.PIECE,
    "ea": Unit.PIECE, "each": Unit.PIECE, "unit": Unit.PIECE, "units": Unit.PIECE,
}


def classify_unit(token: str | None) -> Unit:
    """Map a free-text unit token to the closed Unit set. Unknown tokens are a piece."""
    t = (token or "").strip().lower().rstrip(".")
    return UNIT_ALIASES.get(t, Unit.PIECE)


def base_unit(unit: Unit) -> Unit:
    return BASE_UNITS[unit][0]


def unit_factor(unit: Unit) -> float:
    return BASE_UNITS[unit][1]


def cost_per_base_unit(unit: Unit, cost: float, quantity: float) -> float:
    """
    Cost of one base unit: cost / (quantity * factor).
    A zero base quantity yields 0 so half-entered ingredients stay usable.
    """
    total_base_units = quantity * unit_factor(unit)
    if total_base_units == 0:
        return 0.0
    return cost / total_base_units


def rebase_quantity(quantity: float, unit_token: str | None) -> float:
    """Express a quantity given in `unit_token` in its family's base unit (0.5 kg -> 500)."""
    return quantity * unit_factor(classify_unit(unit_token))


def display_quantity(quantity: float, unit_token: str | None) -> float:
    """Inverse of rebase_quantity: a stored base-unit quantity shown in its label unit."""
    factor = unit_factor(classify_unit(unit_token))
    return quantity / factor if factor else quantity
