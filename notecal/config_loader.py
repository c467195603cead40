"""notecal.config_loader

Loads a :class:`~notecal.settings.CalendarSettings` snapshot from a YAML file.

- Keys may be snake_case or the camelCase names used by the note app's
  settings file (``tagFilter``, ``weekStartsOn``, ...).
- Environment variables (``NOTECAL_*``) fill any field the file leaves out.
- A missing file yields defaults; a malformed one raises
  :class:`~notecal.exceptions.SettingsValidationError`.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import SettingsValidationError
from .settings import CalendarSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.cwd() / "notecal.yaml"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map camelCase keys onto settings field names, dropping unknown keys."""
    known = set(CalendarSettings.model_fields)
    normalized: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _to_snake_case(str(raw_key))
        if key not in known:
            logger.debug("Ignoring unknown settings key %r", raw_key)
            continue
        normalized[key] = value
    return normalized


def settings_from_dict(data: dict[str, Any]) -> CalendarSettings:
    """Build a validated snapshot from a plain mapping.

    Raises:
        SettingsValidationError: If any value fails validation
    """
    try:
        return CalendarSettings(**_normalize_keys(data))
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        first = exc.errors()[0] if exc.errors() else {}
        raise SettingsValidationError(
            "Invalid settings",
            field_name=".".join(str(part) for part in first.get("loc", ())) or None,
            field_value=first.get("input"),
            validation_errors=problems,
        ) from exc


def load_settings(path: str | Path | None = None) -> CalendarSettings:
    """Load settings from a YAML file and return a frozen snapshot.

    Args:
        path: Optional path to the config file. Defaults to ``./notecal.yaml``.

    Returns:
        CalendarSettings with values from the file, env, or defaults

    Raises:
        SettingsValidationError: If the top level is not a mapping or a value is invalid
    """
    p = Path(path) if path else DEFAULT_CONFIG_PATH
    logger.debug("Attempting to load settings from %s", p)
    if not p.exists():
        logger.info("Settings file %s not found; using defaults", p)
        return CalendarSettings()

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise SettingsValidationError(
            "Settings file is not valid YAML", details={"path": str(p)}
        ) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        logger.warning("Settings file %s parsed but top-level is not a mapping: %r", p, raw)
        raise SettingsValidationError(
            "Settings file must contain a mapping at top level", details={"path": str(p)}
        )

    settings = settings_from_dict(raw)
    logger.info("Loaded settings from %s", p)
    logger.debug("Settings values: %s", settings)
    return settings
