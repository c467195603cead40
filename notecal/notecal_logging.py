"""
Console logging for notecal.

Installs one colorized stderr handler on the root logger and applies a single
level to the root and every ``notecal.*`` logger. Verbosity can be changed
without code changes:

- ``NOTECAL_DEBUG`` ("1", "true", "yes", "on") forces DEBUG
- ``NOTECAL_LOG_LEVEL`` (DEBUG, INFO, WARNING, ERROR, CRITICAL) pins the level
"""

import logging
import os
import sys
from typing import Optional

from colorlog import ColoredFormatter

NOTECAL_MODULES = [
    "notecal",
    "notecal.config_loader",
    "notecal.date_utils",
    "notecal.event_cache",
    "notecal.event_extractor",
    "notecal.note_store",
    "notecal.query_engine",
    "notecal.recurrence_expander",
    "notecal.range_expander",
    "notecal.settings",
]

LOG_FORMAT = "%(asctime)s %(log_color)s%(levelname)-7s%(reset)s %(name)s: %(message)s"

LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUTHY = ("1", "true", "yes", "on")


def resolve_level(level_name: Optional[str] = None, force_debug: Optional[bool] = None) -> int:
    """Work out the effective log level.

    Precedence, highest first: ``force_debug``, ``NOTECAL_DEBUG``,
    ``NOTECAL_LOG_LEVEL``, then ``level_name``. ``force_debug=False`` turns
    off the ``NOTECAL_DEBUG`` override. Unknown names resolve to INFO.

    Args:
        level_name: Requested level name, case-insensitive (e.g. from ``--log-level``)
        force_debug: Override debug detection (None to use env var detection)

    Returns:
        A ``logging`` level constant
    """
    if force_debug:
        return logging.DEBUG
    if force_debug is None and os.getenv("NOTECAL_DEBUG", "").strip().lower() in _TRUTHY:
        return logging.DEBUG

    env_level = os.getenv("NOTECAL_LOG_LEVEL", "").strip().upper()
    name = env_level if env_level in _LEVEL_NAMES else (level_name or "").strip().upper()
    if name in _LEVEL_NAMES:
        return getattr(logging, name)
    return logging.INFO


def _console_handlers(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if isinstance(h.formatter, ColoredFormatter)]


def configure_logging(level_name: Optional[str] = None, force_debug: Optional[bool] = None) -> int:
    """Install the console handler (once) and apply the resolved level.

    Args:
        level_name: Requested level name; see :func:`resolve_level`
        force_debug: Override debug detection

    Returns:
        The level that was applied
    """
    level = resolve_level(level_name, force_debug)

    root = logging.getLogger()
    if not _console_handlers(root):
        handler = logging.StreamHandler(stream=sys.stderr)
        handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt="%H:%M:%S", log_colors=LOG_COLORS))
        root.addHandler(handler)
    root.setLevel(level)

    for module in NOTECAL_MODULES:
        logging.getLogger(module).setLevel(level)

    logging.getLogger(__name__).debug("Logging configured at %s", logging.getLevelName(level))
    return level


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in NOTECAL_MODULES:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
