import logging
import sys
from typing import Optional


_LOGGING_CONFIGURED = False

# Loggers that echo full request URLs at INFO. SerpAPI carries its key in the query string.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure process logging once.
    Safe to call multiple times; later calls are ignored.
    """
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a named logger.
    If name is None, returns the service root logger.
    """
    return logging.getLogger(name or "travel_planner")
