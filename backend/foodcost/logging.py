import logging
import sys
from typing import Optional

from foodcost.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-request loggers of DSPy's provider transport, capped at WARNING
_NOISY_LOGGERS = ("LiteLLM", "httpx", "httpcore")


def configure_logging(level: Optional[str] = None) -> None:
    """Attach one stdout handler to the root logger. Safe to call more than once."""
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel((level or settings.log_level).upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or settings.app_name)
