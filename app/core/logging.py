"""
Logging setup.

The root handler's level and format come from ``Settings`` (LOG_LEVEL,
LOG_FORMAT, LOG_DATE_FORMAT) and are applied once by the lifespan handler.
Modules only ask for a named logger:

    from app.core.logging import get_logger

    logger = get_logger(__name__)
"""

import logging
import sys
from typing import Optional

# Chatty at INFO; kept at WARNING unless the app runs at DEBUG.
QUIET_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "aiosqlite")


def setup_logging(
    level: str,
    log_format: str,
    date_format: Optional[str] = None,
) -> None:
    """
    Replace the root handlers with one stdout handler.

    Args:
        level: Level name; unknown names fall back to INFO.
        log_format: ``logging.Formatter`` format string.
        date_format: ``datefmt`` for ``%(asctime)s``.
    """
    root_level = logging.getLevelName(level.upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO

    logging.basicConfig(
        level=root_level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    quiet_level = logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)
