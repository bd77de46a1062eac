# === FILE: js_scout/logger.py ===
"""Logging for **JsScout**.

stdout carries the discovered URLs, so log records go to stderr and,
optionally, to a rotating file::

    from js_scout.logger import logger
    logger.debug("Fetching %s", url)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

__all__ = ["logger", "init_logging"]


def init_logging(
    level: int | str = "WARNING", log_file: str | Path | None = None
) -> logging.Logger:
    """Reset the ``JsScout`` logger to stderr plus an optional *log_file*."""
    formatter = logging.Formatter(_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        )

    lg = logging.getLogger("JsScout")
    lg.setLevel(level)
    lg.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)
    lg.propagate = False
    return lg


logger: logging.Logger = init_logging()
