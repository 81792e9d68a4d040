import time
from typing import Any

import dspy

from foodcost.config import settings
from foodcost.logging import get_logger
from foodcost.storage.db import get_session
from foodcost.storage.repositories import log_llm_call
from foodcost.utils.timing import format_duration

logger = get_logger(__name__)


def _make_lm(model: str) -> dspy.LM:
    return dspy.LM(
        f"{settings.llm_provider}/{model}",
        api_key=settings.llm_api_key or None,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout_s,
    )


def configure_dspy() -> None:
    dspy.settings.configure(lm=_make_lm(settings.llm_model), trace=[])
    logger.info("llm.configure provider=%s model=%s", settings.llm_provider, settings.llm_model)


def run_with_logging(prompt_name: str, prompt_version: str, fn: Any, **kwargs: Any) -> Any:
    """Call `fn(**kwargs)` and record the call in LLMCallLog. Errors from `fn` propagate."""
    start = time.time()
    logger.info("[TIMING] llm.call.start name=%s version=%s model=%s", prompt_name, prompt_version, settings.llm_model)
    result = fn(**kwargs)
    latency_ms = int((time.time() - start) * 1000)
    try:
        with get_session() as session:
            log_llm_call(
                session=session,
                prompt_name=prompt_name,
                prompt_version=prompt_version,
                model=settings.llm_model,
                input_payload=str(kwargs),
                output_payload=str(result),
                latency_ms=latency_ms,
            )
    except Exception as exc:  # noqa: BLE001 - call log is best effort
        logger.warning("llm.call.log_failed name=%s error=%s", prompt_name, exc)
    logger.info(
        "[TIMING] llm.call.end name=%s latency_ms=%s (%s)",
        prompt_name,
        latency_ms,
        format_duration(latency_ms),
    )
    return result
