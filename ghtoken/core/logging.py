"""
Logging utilities for the relay server and the authorization page.

Provides a consistent logging format and configuration.
"""

import logging
import sys

# httpx logs full request URLs at INFO; keep it quiet unless debugging.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    resolved = logging.getLevelName(level.upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))


def uvicorn_log_level(level: str) -> str:
    """Map an application log level onto one uvicorn accepts."""
    lowered = level.lower()
    if lowered in ("critical", "error", "warning", "info", "debug", "trace"):
        return lowered
    return "info"


__all__ = ["configure_logging", "uvicorn_log_level"]
