"""Costing core: unit normalization, cost aggregation, draft reconciliation."""

from foodcost.services.costing.calculator import compute_cost_breakdown, line_costs
from foodcost.services.costing.reconciler import Reconciliation, apply_reconciliation, reconcile
from foodcost.services.costing.units import classify_unit, cost_per_base_unit, rebase_quantity

__all__ = [
    "apply_reconciliation",
    "classify_unit",
    "compute_cost_breakdown",
    "cost_per_base_unit",
    "line_costs",
    "rebase_quantity",
    "reconcile",
    "Reconciliation",
]
