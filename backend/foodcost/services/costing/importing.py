"""
Bulk import row contract.

A spreadsheet collaborator hands over rows as dicts with loosely named columns;
each row resolves to {name, category, cost, quantity, unit} through the
aliases below (case-insensitive). Rows without a name or with a non-positive
cost resolve to None and never reach the catalog.
"""

import csv
import io
from typing import Any, Iterable, Optional

from foodcost.schemas.costing import DEFAULT_CATEGORY, Ingredient, normalize_category
from foodcost.services.costing.units import classify_unit

COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "name": ("name", "ingredient", "item"),
    "category": ("category",),
    "cost": ("cost", "price"),
    "quantity": ("quantity", "qty"),
    "unit": ("unit", "uom"),
}
DEFAULT_IMPORT_UNIT = "kg"


def _column(row: dict[str, Any], field: str) -> Any:
    lowered = {str(k).strip().lower(): v for k, v in row.items() if k is not None}
    for alias in COLUMN_ALIASES[field]:
        value = lowered.get(alias)
        if value not in (None, ""):
            return value
    return None


def _to_float(value: Any, default: Optional[float]) -> Optional[float]:
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def resolve_import_row(row: dict[str, Any]) -> Optional[Ingredient]:
    name = str(_column(row, "name") or "").strip()
    cost = _to_float(_column(row, "cost"), 0.0)
    if not name or cost is None or not cost > 0:
        return None
    quantity = _to_float(_column(row, "quantity"), 1.0)
    unit = classify_unit(str(_column(row, "unit") or DEFAULT_IMPORT_UNIT))
    return Ingredient(
        name=name,
        category=normalize_category(_column(row, "category") or DEFAULT_CATEGORY),
        purchase_unit=unit,
        purchase_cost=cost,
        purchase_quantity=quantity if quantity is not None else float("nan"),
    )


def resolve_import_rows(rows: Iterable[dict[str, Any]]) -> tuple[list[Ingredient], int]:
    """Resolved ingredients plus the number of rows that did not resolve."""
    resolved: list[Ingredient] = []
    rejected = 0
    for row in rows:
        ingredient = resolve_import_row(row)
        if ingredient is None:
            rejected += 1
        else:
            resolved.append(ingredient)
    return resolved, rejected


def parse_csv_rows(content: bytes) -> list[dict[str, Any]]:
    text = content.decode("utf-8-sig")
    return list(csv.DictReader(io.StringIO(text)))
