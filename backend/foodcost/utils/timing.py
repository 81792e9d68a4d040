"""Elapsed-time logging for catalog imports, reconciliation and LLM calls."""

import time
from contextlib import contextmanager

from foodcost.logging import get_logger

logger = get_logger(__name__)

# Prefix for all timing logs so they are easy to grep
_TIMING_PREFIX = "[TIMING]"


def format_duration(ms: int) -> str:
    """Return human-readable duration: e.g. 12500 -> '12.5s', 750 -> '750ms'."""
    if ms >= 1000:
        return f"{ms / 1000:.1f}s"
    return f"{ms}ms"


def elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


@contextmanager
def time_span(name: str, **extra: object):
    """Log the elapsed time of a block together with extra key=value fields."""
    start = time.perf_counter()
    try:
        yield
    finally:
        ms = elapsed_ms(start)
        fields = " ".join(f"{k}={v}" for k, v in extra.items())
        logger.info("%s %s elapsed_ms=%s (%s) %s", _TIMING_PREFIX, name, ms, format_duration(ms), fields)
