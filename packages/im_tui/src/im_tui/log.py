"""Logging setup for im_tui.

The terminal belongs to the UI while the frame loop runs, so records go to
a file when one is configured and are dropped otherwise.
"""

from __future__ import annotations

import logging
from pathlib import Path

from im_tui.config import ImTuiOptions

LOGGER_NAME = "im_tui"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_installed: list[logging.Handler] = []


def configure_logging(options: ImTuiOptions) -> logging.Logger:
    """Configure the ``im_tui`` logger; calling it again replaces the handlers."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in _installed:
        logger.removeHandler(handler)
        handler.close()
    _installed.clear()

    level = getattr(logging, options.log_level.upper(), logging.WARNING)
    logger.setLevel(level)

    handler: logging.Handler
    if options.log_file:
        path = Path(options.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8", delay=True)
        handler.setFormatter(logging.Formatter(_FORMAT))
    else:
        handler = logging.NullHandler()

    logger.addHandler(handler)
    _installed.append(handler)
    return logger
