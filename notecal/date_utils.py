"""Date math for notecal.

Every date string in the system is produced by :func:`to_date_string`, which
builds ``YYYY-MM-DD`` from the calendar components of a naive ``date``. Dates
never pass through a UTC conversion, so a string survives
``to_date_string(from_date_string(s)) == s`` on any host timezone.

Weekday numbers follow the note-app convention used in frontmatter and
settings: 0=Sunday .. 6=Saturday (see :func:`weekday_index`).
"""

import logging
import math
import re
from datetime import date, timedelta
from typing import Literal, Optional

from .exceptions import DateParseError
from .locales import DEFAULT_LOCALE, get_locale_names

logger = logging.getLogger(__name__)

NameStyle = Literal["long", "short", "narrow"]

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Longest token first at every position; substituted text is never rescanned.
_FORMAT_TOKEN_RE = re.compile(r"YYYY|YY|MMMM|MMM|MM|M|dddd|ddd|DD|D")

FORMAT_TOKENS: tuple[str, ...] = ("YYYY", "YY", "MMMM", "MMM", "MM", "M", "dddd", "ddd", "DD", "D")

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp][Mm])?$")

# A known Sunday, used to enumerate weekday names.
_REFERENCE_SUNDAY = date(2024, 1, 7)


def to_date_string(value: date) -> str:
    """Format a date as local ``YYYY-MM-DD``.

    Args:
        value: Date (or datetime; only its calendar components are used)

    Returns:
        Zero-padded ``YYYY-MM-DD`` string
    """
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def parse_date_strict(value: str) -> date:
    """Parse ``YYYY-MM-DD`` into a local calendar day.

    Raises:
        DateParseError: If the string is malformed or names an impossible day
    """
    match = _DATE_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise DateParseError("Malformed date string", {"value": value})
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise DateParseError("Date out of range", {"value": value}) from exc


def from_date_string(value: str) -> Optional[date]:
    """Parse a date string, returning ``None`` when it is not a valid day.

    Callers must check for ``None`` before using the result.
    """
    try:
        return parse_date_strict(value)
    except DateParseError:
        logger.debug("Unparseable date string: %r", value)
        return None


def normalize_date_string(value: str) -> Optional[str]:
    """Round-trip a date string through parse and format, or ``None``."""
    parsed = from_date_string(value)
    return to_date_string(parsed) if parsed is not None else None


def weekday_index(value: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6."""
    return (value.weekday() + 1) % 7


def format_date(value: date, format_string: str, locale: str = DEFAULT_LOCALE) -> str:
    """Render ``value`` using the token grammar.

    Tokens: ``YYYY YY MMMM MMM MM M dddd ddd DD D``. Overlapping tokens are
    resolved longest first (``MMMM`` before ``MMM`` before ``MM`` before
    ``M``), and all other characters are copied through.

    Example:
        >>> format_date(date(2025, 3, 7), "dddd, MMMM D YYYY")
        'Friday, March 7 2025'
    """
    names = get_locale_names(locale)
    weekday = weekday_index(value)
    replacements = {
        "YYYY": str(value.year),
        "YY": f"{value.year % 100:02d}",
        "MMMM": names.months_long[value.month - 1],
        "MMM": names.months_short[value.month - 1],
        "MM": f"{value.month:02d}",
        "M": str(value.month),
        "dddd": names.weekdays_long[weekday],
        "ddd": names.weekdays_short[weekday],
        "DD": f"{value.day:02d}",
        "D": str(value.day),
    }
    return _FORMAT_TOKEN_RE.sub(lambda match: replacements[match.group(0)], format_string)


def get_week_number(value: date, week_starts_on: int = 1) -> int:
    """Week number of ``value``.

    ``week_starts_on == 1`` uses ISO-8601 numbering (Monday start, the week
    containing the year's first Thursday is week 1). Any other value uses the
    Sunday-start count: ``ceil((day_of_year + weekday_of_jan_1) / 7)``.
    """
    if week_starts_on == 1:
        return value.isocalendar()[1]
    jan_first = date(value.year, 1, 1)
    day_of_year = (value - jan_first).days + 1
    return math.ceil((day_of_year + weekday_index(jan_first)) / 7)


def get_dates_between(start: date, end: date) -> list[date]:
    """All days from ``start`` to ``end`` inclusive; empty when ``end < start``."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def parse_time(value: str) -> Optional[int]:
    """Parse ``H:MM``, ``H:MM:SS`` with optional ``AM``/``PM`` into minutes since midnight.

    Returns:
        Minutes since midnight, or ``None`` if the string is not a valid time
    """
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) else 0
    meridiem = (match.group(4) or "").lower()
    if minutes > 59 or seconds > 59:
        return None
    if meridiem:
        if not 1 <= hours <= 12:
            return None
        hours = hours % 12 + (12 if meridiem == "pm" else 0)
    elif hours > 23:
        return None
    return hours * 60 + minutes


def is_today(value: date, today: Optional[date] = None) -> bool:
    return is_same_day(value, today or date.today())


def is_weekend(value: date) -> bool:
    return weekday_index(value) in (0, 6)


def is_same_day(first: date, second: date) -> bool:
    return to_date_string(first) == to_date_string(second)


def add_days(value: date, days: int) -> date:
    return value + timedelta(days=days)


def add_months(value: date, months: int) -> date:
    """Add calendar months, letting an out-of-range day roll forward.

    The day of month is kept and any overflow spills into the following
    month, so ``add_months(date(2025, 1, 31), 1) == date(2025, 3, 3)``.
    """
    month_index = value.month - 1 + months
    year, month = value.year + month_index // 12, month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=value.day - 1)


def first_day_of_month(value: date) -> date:
    return value.replace(day=1)


def last_day_of_month(value: date) -> date:
    return add_months(first_day_of_month(value), 1) - timedelta(days=1)


def get_month_name(value: date, style: NameStyle = "long", locale: str = DEFAULT_LOCALE) -> str:
    names = get_locale_names(locale)
    table = names.months_long if style == "long" else names.months_short
    return table[value.month - 1]


def get_weekday_names(
    week_starts_on: int, style: NameStyle = "narrow", locale: str = DEFAULT_LOCALE
) -> list[str]:
    """Header labels for one week, rotated to start on ``week_starts_on``.

    Names are derived from a fixed reference Sunday, so the result does not
    depend on the current date.
    """
    names = get_locale_names(locale)
    table = {
        "long": names.weekdays_long,
        "short": names.weekdays_short,
        "narrow": names.weekdays_narrow,
    }[style]
    labels = []
    for offset in range(7):
        day = add_days(_REFERENCE_SUNDAY, (week_starts_on + offset) % 7)
        labels.append(table[weekday_index(day)])
    return labels


def format_selected_date(date_str: str, locale: str = DEFAULT_LOCALE) -> str:
    """Heading for a selected day, e.g. ``"Monday, Jan 15"``; empty if unparseable."""
    value = from_date_string(date_str)
    if value is None:
        return ""
    return format_date(value, "dddd, MMM D", locale)


def format_date_range(start: date, end: date, locale: str = DEFAULT_LOCALE) -> str:
    """Compact label for a span of days, sharing month and year where possible."""
    start_month = get_month_name(start, "short", locale)
    end_month = get_month_name(end, "short", locale)

    if start.year != end.year:
        return f"{start_month} {start.day}, {start.year} - {end_month} {end.day}, {end.year}"
    if start.month != end.month:
        return f"{start_month} {start.day} - {end_month} {end.day}, {start.year}"
    return f"{start_month} {start.day} - {end.day}, {start.year}"
