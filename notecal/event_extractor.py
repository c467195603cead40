"""Event draft extraction from note frontmatter.

Frontmatter values arrive in loose shapes (a date or a list of dates, weekday
lists as numbers, names or a comma separated string, dates as strings or as
date objects). They are normalized here, at the boundary, so everything
downstream sees one canonical :class:`~notecal.models.EventDraft`.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Optional

from .date_utils import normalize_date_string, to_date_string
from .exceptions import ExtractionError
from .models import Document, EventDraft, RecurrencePattern
from .settings import CalendarSettings
from .tag_filter import TagFilter

logger = logging.getLogger(__name__)

EVENT_COLORS: dict[str, str] = {
    "red": "#e03131",
    "orange": "#f76707",
    "yellow": "#f59f00",
    "green": "#2f9e44",
    "teal": "#0c8599",
    "blue": "#1971c2",
    "purple": "#7048e8",
    "pink": "#d6336c",
    "gray": "#868e96",
}

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

_WEEKDAYS = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

# Full names plus three- and two-letter abbreviations.
_WEEKDAY_NAMES: dict[str, int] = {
    alias: index for index, name in enumerate(_WEEKDAYS) for alias in (name, name[:3], name[:2])
}

_LIST_SEPARATOR_RE = re.compile(r"[,\s]+")


def _as_list(value: Any) -> list[Any]:
    """Collapse a scalar-or-list frontmatter value into a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    if isinstance(value, (dict, set)):
        raise ExtractionError("Expected a scalar or a list", {"type": type(value).__name__})
    return [value]


def _first(value: Any) -> Any:
    items = _as_list(value)
    return items[0] if items else None


def normalize_date_value(value: Any) -> Optional[str]:
    """Normalize a frontmatter date (string or date object) to ``YYYY-MM-DD``."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return to_date_string(value)
    return normalize_date_string(str(value))


def is_valid_hex_color(value: str) -> bool:
    """True for ``#RGB`` or ``#RRGGBB``."""
    return bool(_HEX_COLOR_RE.match(value or ""))


def resolve_color(value: Any) -> Optional[str]:
    """Resolve a color name or hex value; ``None`` when neither applies."""
    if value is None:
        return None
    text = str(value).strip()
    named = EVENT_COLORS.get(text.lower())
    if named:
        return named
    return text if is_valid_hex_color(text) else None


def parse_recurrence(value: Any) -> Optional[RecurrencePattern]:
    """Validate a recurrence value against the closed pattern set."""
    if value is None:
        return None
    try:
        return RecurrencePattern(str(value).strip().lower())
    except ValueError:
        logger.debug("Ignoring unknown recurrence pattern %r", value)
        return None


def _weekday_from(item: Any) -> Optional[int]:
    if isinstance(item, bool):
        return None
    if isinstance(item, int):
        return item if 0 <= item <= 6 else None
    text = str(item).strip().lower()
    if text.isdigit():
        number = int(text)
        return number if 0 <= number <= 6 else None
    return _WEEKDAY_NAMES.get(text)


def parse_weekdays(value: Any) -> Optional[frozenset[int]]:
    """Parse a weekday restriction into ``{0..6}`` (0=Sunday).

    Accepts a list of numbers, a list of weekday names, or a comma/space
    separated string of names. Unrecognized entries are dropped.
    """
    if value is None:
        return None
    if isinstance(value, str):
        items: list[Any] = [part for part in _LIST_SEPARATOR_RE.split(value) if part]
    else:
        items = _as_list(value)
    days = frozenset(day for day in (_weekday_from(item) for item in items) if day is not None)
    return days or None


class EventExtractor:
    """Converts one document into zero or more event drafts.

    Args:
        settings: Settings snapshot naming the frontmatter properties and tag filter
    """

    def __init__(self, settings: CalendarSettings):
        self.update_settings(settings)

    def update_settings(self, settings: CalendarSettings) -> None:
        self._settings = settings
        self._tag_filter = TagFilter(settings.tag_filter, settings.tag_filter_mode)

    @property
    def settings(self) -> CalendarSettings:
        return self._settings

    def extract(self, document: Document) -> list[EventDraft]:
        """Extract drafts from ``document``.

        A list-valued date property yields one draft per element, all sharing
        the remaining properties. Elements that do not parse as dates are
        skipped.

        Raises:
            ExtractionError: If the frontmatter has an unexpected shape
        """
        if not self._tag_filter.matches_document(document):
            return []

        settings = self._settings
        frontmatter = document.frontmatter
        raw_dates = frontmatter.get(settings.date_property)
        if not raw_dates:
            return []

        shared = {
            "source_document_id": document.id,
            "title": document.title,
            "end_date_str": self._optional_date(frontmatter, settings.end_date_property),
            "time": self._optional_text(frontmatter, settings.time_property),
            "color": resolve_color(_first(frontmatter.get(settings.color_property)))
            if settings.color_property
            else None,
            "recurrence": parse_recurrence(_first(frontmatter.get(settings.recurrence_property)))
            if settings.recurrence_property
            else None,
            "recurrence_days": parse_weekdays(frontmatter.get(settings.recurrence_days_property))
            if settings.recurrence_days_property
            else None,
        }

        drafts = []
        for candidate in _as_list(raw_dates):
            date_str = normalize_date_value(candidate)
            if date_str is None:
                logger.debug("Skipping unparseable date %r in %s", candidate, document.id)
                continue
            drafts.append(EventDraft(date_str=date_str, **shared))
        return drafts

    @staticmethod
    def _optional_date(frontmatter: dict[str, Any], key: str) -> Optional[str]:
        if not key:
            return None
        return normalize_date_value(_first(frontmatter.get(key)))

    @staticmethod
    def _optional_text(frontmatter: dict[str, Any], key: str) -> Optional[str]:
        if not key:
            return None
        value = _first(frontmatter.get(key))
        if value is None:
            return None
        text = str(value).strip()
        return text or None


def extract_drafts(document: Document, settings: CalendarSettings) -> list[EventDraft]:
    """Convenience wrapper around :meth:`EventExtractor.extract`."""
    return EventExtractor(settings).extract(document)
