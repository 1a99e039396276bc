"""Logging setup driven by Settings."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from testarossa.config import Settings

LOGGER_NAME = "testarossa"

_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def _owned(handler: logging.Handler) -> bool:
    return getattr(handler, "_testarossa", False)


def reset_logging() -> None:
    """Close and detach every handler added by configure_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in [h for h in logger.handlers if _owned(h)]:
        logger.removeHandler(handler)
        handler.close()


def configure_logging(settings: Settings) -> logging.Logger | None:
    """
    Route the library's log records according to *settings*.

    Failure reports and engine decisions are logged under "testarossa.*".
    Records go to ``settings.debug_log`` (appended, parent directories
    created) and, when ``settings.log_stderr`` is set, also to stderr.
    Handlers from an earlier call are replaced; handlers added by others are
    left alone.

    Args:
        settings: Active settings; ``log_level`` sets the threshold.

    Returns:
        The configured logger, or None when no destination is configured.
    """
    reset_logging()
    if not settings.debug_log and not settings.log_stderr:
        return None

    logger = logging.getLogger(LOGGER_NAME)
    logger.disabled = False
    logger.setLevel(settings.log_level)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    handlers: list[logging.Handler] = []
    if settings.debug_log:
        debug_file = Path(settings.debug_log)
        debug_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(debug_file, mode="a"))
    if settings.log_stderr:
        handlers.append(logging.StreamHandler(sys.stderr))

    for handler in handlers:
        handler.setLevel(settings.log_level)
        handler.setFormatter(formatter)
        handler._testarossa = True
        logger.addHandler(handler)

    return logger
