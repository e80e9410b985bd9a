"""Logging helpers."""

from __future__ import annotations

import logging
import sys

_configured = False


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def setup_logging(level: str | None = None) -> None:
    """Attach a stderr handler to the ``confmap`` logger.

    The level defaults to ``Settings.log_level``. Repeated calls are no-ops.
    """
    global _configured
    if _configured:
        return

    if level is None:
        from .config import Settings
        level = Settings().log_level.value

    logger = logging.getLogger("confmap")
    logger.setLevel(getattr(logging, level.upper()))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    _configured = True
