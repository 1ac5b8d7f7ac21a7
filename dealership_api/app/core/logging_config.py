"""
Logging for the dealership API.

Handlers are attached to the ``dealership_api`` package logger rather
than the root logger, so uvicorn keeps its own access and error output
and every module logger (``logging.getLogger(__name__)``) inherits the
package setup.  Records still propagate to the root logger.

``setup_logging`` may be called again, e.g. once per ``create_app``; it
replaces the handlers it installed before instead of stacking them.
"""

import logging
from pathlib import Path
from typing import List, Optional

PACKAGE_LOGGER = "dealership_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: str) -> int:
    """Translate a level name such as ``"debug"`` to its numeric value.

    Unknown names fall back to ``INFO``.
    """
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else logging.INFO


def _build_handlers(logfile: Optional[str]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level : str
        Level name from ``LOG_LEVEL``, case insensitive.
    logfile : Optional[str]
        Optional ``LOG_FILE`` path; records are written there in
        addition to the console.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(resolve_level(level))
    for handler in _build_handlers(logfile):
        logger.addHandler(handler)
    return logger
