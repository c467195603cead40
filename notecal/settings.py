"""Settings snapshot for notecal using pydantic-settings.

The core never holds a live, mutable settings object. A frozen
:class:`CalendarSettings` is handed to it at construction and replaced
wholesale through explicit update calls.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .date_utils import FORMAT_TOKENS
from .locales import AVAILABLE_LOCALES
from .models import CalendarViewMode, TagFilterMode

logger = logging.getLogger(__name__)

_PROPERTY_FIELDS = (
    "date_property",
    "end_date_property",
    "time_property",
    "color_property",
    "recurrence_property",
    "recurrence_days_property",
)


class CalendarSettings(BaseSettings):
    """Immutable configuration consumed by the extraction and query layers.

    Every field can be overridden by an environment variable with the
    ``NOTECAL_`` prefix, e.g. ``NOTECAL_TAG_FILTER="calendar, meeting"``.

    Example:
        >>> settings = CalendarSettings(tag_filter="work", week_starts_on=0)
        >>> settings.tag_filter_mode
        <TagFilterMode.ANY: 'any'>
    """

    tag_filter: str = Field(default="calendar", description="Required tags, comma/space separated")
    tag_filter_mode: TagFilterMode = Field(default=TagFilterMode.ANY, description="any (OR) / all (AND)")
    date_property: str = Field(default="date", description="Frontmatter key holding the date(s)")
    end_date_property: str = Field(default="endDate", description="Frontmatter key for range end")
    time_property: str = Field(default="time", description="Frontmatter key for time of day")
    color_property: str = Field(default="color", description="Frontmatter key for event color")
    recurrence_property: str = Field(default="recurrence", description="Frontmatter key for pattern")
    recurrence_days_property: str = Field(
        default="recurrenceDays", description="Frontmatter key for daily weekday restriction"
    )
    week_starts_on: int = Field(default=1, ge=0, le=1, description="0=Sunday, 1=Monday")
    locale: str = Field(default="en", description="Locale code for month/day names")
    date_format: str = Field(default="YYYY-MM-DD", description="Token template for titles")
    default_view: CalendarViewMode = Field(default=CalendarViewMode.MONTH, description="Initial view")

    model_config = SettingsConfigDict(env_prefix="NOTECAL_", frozen=True, extra="ignore")

    @field_validator(*_PROPERTY_FIELDS, "locale", "date_format")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        return v.strip()

    def with_updates(self, **changes: object) -> "CalendarSettings":
        """Return a new validated snapshot with ``changes`` applied."""
        return CalendarSettings(**{**self.model_dump(), **changes})


def validate_settings(settings: CalendarSettings) -> list[str]:
    """Check a snapshot for values that load fine but will not behave well.

    Returns:
        Human-readable problems; an empty list means the settings look sane
    """
    errors: list[str] = []

    if not settings.date_property:
        errors.append("Date property must not be empty")

    if settings.locale.split("-", 1)[0].lower() not in AVAILABLE_LOCALES:
        errors.append(f"Unsupported locale '{settings.locale}'")

    if not any(token in settings.date_format for token in FORMAT_TOKENS):
        errors.append("Date format must contain at least one date token")

    configured = [getattr(settings, name) for name in _PROPERTY_FIELDS if getattr(settings, name)]
    duplicates = sorted({name for name in configured if configured.count(name) > 1})
    if duplicates:
        errors.append(f"Property names used more than once: {', '.join(duplicates)}")

    for error in errors:
        logger.debug("Settings validation: %s", error)
    return errors
