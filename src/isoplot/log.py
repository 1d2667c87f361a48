from __future__ import annotations

import logging
import os

_LOGGER_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get("ISOPLOT_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(level: int | None = None) -> None:
    """Install a console handler on the ``isoplot`` logger.

    Calling it again is a no-op. Without an explicit ``level`` the
    ``ISOPLOT_LOG_LEVEL`` environment variable is used (default INFO).
    """
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    if level is None:
        level = _level_from_env()

    logger = logging.getLogger("isoplot")
    logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    _LOGGER_CONFIGURED = True
