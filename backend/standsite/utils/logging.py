"""Application logging setup.

Flask's ``app.logger`` is the logger used throughout the code base
(``current_app.logger``). This only sets its level from ``LOG_LEVEL`` and
makes sure exactly one stream handler with our format is attached.
"""
from __future__ import annotations

import logging

from flask.logging import default_handler

LOG_FORMAT = "[standsite] %(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(app) -> logging.Logger:
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    logger = app.logger
    logger.setLevel(level)
    logger.removeHandler(default_handler)
    if not any(getattr(h, "_standsite", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._standsite = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["configure_logging", "LOG_FORMAT"]
