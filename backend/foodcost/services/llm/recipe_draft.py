"""
Generate a recipe draft with the LLM and validate it into a RecipeDraft.

The caller gets a tagged result: Ok(draft) or Err(reason). Service errors and
malformed JSON both become Err; reconciliation treats Err as an empty draft.
"""

import json
import re
from dataclasses import dataclass
from typing import Union

import dspy
from pydantic import ValidationError as SchemaError

from foodcost.errors import ExternalServiceError
from foodcost.logging import get_logger
from foodcost.schemas.draft import RecipeDraft
from foodcost.services.llm.dspy_client import run_with_logging
from foodcost.services.llm.prompts import RECIPE_DRAFT_PROMPT_VERSION, RECIPE_DRAFT_TEMPLATE

logger = get_logger(__name__)


@dataclass(frozen=True)
class Ok:
    draft: RecipeDraft


@dataclass(frozen=True)
class Err:
    reason: str


DraftResult = Union[Ok, Err]


class RecipeDraftSignature(dspy.Signature):
    """Draft a costed restaurant recipe as JSON."""

    recipe_name: str = dspy.InputField()
    known_ingredients: str = dspy.InputField(desc="comma-separated inventory ingredient names")
    prompt_template: str = dspy.InputField()
    recipe_json: str = dspy.OutputField(
        desc="JSON object with description, servings, instructions, ingredients"
    )


class RecipeDrafter(dspy.Module):
    def __init__(self) -> None:
        super().__init__()
        self.predict = dspy.Predict(RecipeDraftSignature)

    def forward(self, recipe_name: str, known_ingredients: list[str]) -> dspy.Prediction:
        return self.predict(
            recipe_name=recipe_name,
            known_ingredients=", ".join(known_ingredients),
            prompt_template=RECIPE_DRAFT_TEMPLATE,
        )


_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def parse_draft(raw: object) -> DraftResult:
    """Strictly validate LLM output into a RecipeDraft."""
    if isinstance(raw, dict):
        payload: object = raw
    else:
        text = _FENCE.sub("", str(raw or "").strip())
        if not text:
            return Err("empty response")
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(f"invalid JSON: {e.msg}")
    if not isinstance(payload, dict):
        return Err("response is not a JSON object")
    try:
        return Ok(RecipeDraft.model_validate(payload))
    except SchemaError as e:
        return Err(f"schema mismatch: {e.error_count()} error(s)")


def generate_recipe_draft(recipe_name: str, known_ingredients: list[str]) -> DraftResult:
    if not (recipe_name or "").strip():
        return Err("recipe name is required")
    try:
        drafter = RecipeDrafter()
        prediction = run_with_logging(
            prompt_name="recipe_draft",
            prompt_version=RECIPE_DRAFT_PROMPT_VERSION,
            fn=drafter.forward,
            recipe_name=recipe_name,
            known_ingredients=known_ingredients,
        )
        raw = getattr(prediction, "recipe_json", None)
        if raw is None:
            raise ExternalServiceError("prediction has no recipe_json field")
    except Exception as e:  # noqa: BLE001 - any service failure becomes an empty draft
        logger.warning("recipe_draft.llm_failed name=%s error=%s", recipe_name, e)
        return Err(f"generation failed: {e}")
    result = parse_draft(raw)
    if isinstance(result, Err):
        logger.warning("recipe_draft.invalid name=%s reason=%s", recipe_name, result.reason)
    else:
        logger.info("recipe_draft.ok name=%s suggestions=%s", recipe_name, len(result.draft.ingredients))
    return result
