"""Short LLM assessment of a dish's margin with three suggestions."""

import dspy

from foodcost.config import settings
from foodcost.logging import get_logger
from foodcost.services.llm.dspy_client import run_with_logging
from foodcost.services.llm.prompts import PROFITABILITY_PROMPT_VERSION, PROFITABILITY_TEMPLATE

logger = get_logger(__name__)

ANALYSIS_FALLBACK = "Could not generate analysis at this time."


class ProfitabilitySignature(dspy.Signature):
    """Assess menu pricing and suggest improvements."""

    recipe_name: str = dspy.InputField()
    cost_per_serving: str = dspy.InputField()
    selling_price: str = dspy.InputField()
    prompt_template: str = dspy.InputField()
    analysis: str = dspy.OutputField(desc="one-line verdict then 3 short bullet suggestions")


def analyze_profitability(recipe_name: str, cost_per_serving: float, price: float) -> str:
    def _money(value: float) -> str:
        return f"{settings.currency_label} {value:,.0f}"

    try:
        predictor = dspy.Predict(ProfitabilitySignature)
        prediction = run_with_logging(
            prompt_name="profitability",
            prompt_version=PROFITABILITY_PROMPT_VERSION,
            fn=predictor,
            recipe_name=recipe_name,
            cost_per_serving=_money(cost_per_serving),
            selling_price=_money(price),
            prompt_template=PROFITABILITY_TEMPLATE,
        )
        out = (getattr(prediction, "analysis", "") or "").strip()
        return out or ANALYSIS_FALLBACK
    except Exception as e:  # noqa: BLE001
        logger.warning("profitability.llm_failed name=%s error=%s", recipe_name, e)
        return ANALYSIS_FALLBACK
