"""Grid and list views over an :data:`~notecal.models.EventIndex`.

Every view is built fresh per call and never cached. Day cells carry the
occurrences found at their date string; the index itself is never mutated.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable, Optional

from .date_utils import (
    first_day_of_month,
    format_date,
    get_week_number,
    is_same_day,
    is_weekend,
    parse_time,
    to_date_string,
    weekday_index,
)
from .models import CalendarDay, CalendarWeek, EventIndex, Occurrence
from .settings import CalendarSettings

logger = logging.getLogger(__name__)

MONTH_GRID_DAYS = 42
WEEK_DAYS = 7


def start_of_week(value: date, week_starts_on: int) -> date:
    """Most recent ``week_starts_on`` weekday on or before ``value``."""
    offset = (weekday_index(value) - week_starts_on) % 7
    return value - timedelta(days=offset)


class QueryEngine:
    """Builds month grids, week grids and day lists.

    Args:
        settings: Settings snapshot (week start, locale, title format)
        today: Callable returning the current local date
    """

    def __init__(self, settings: CalendarSettings, today: Callable[[], date] = date.today):
        self._settings = settings
        self._today = today

    @property
    def settings(self) -> CalendarSettings:
        return self._settings

    def update_settings(self, settings: CalendarSettings) -> None:
        self._settings = settings

    def _week_start(self, week_starts_on: Optional[int]) -> int:
        return self._settings.week_starts_on if week_starts_on is None else week_starts_on

    def _build_days(
        self,
        first: date,
        count: int,
        index: EventIndex,
        week_starts_on: int,
        reference_month: date,
    ) -> list[CalendarDay]:
        today = self._today()
        days = []
        for offset in range(count):
            current = first + timedelta(days=offset)
            date_str = to_date_string(current)
            in_month = (current.year, current.month) == (reference_month.year, reference_month.month)
            days.append(
                CalendarDay(
                    date=current,
                    date_str=date_str,
                    is_current_month=in_month,
                    is_today=is_same_day(current, today),
                    is_weekend=is_weekend(current),
                    week_number=get_week_number(current, week_starts_on),
                    occurrences=list(index.get(date_str, [])),
                )
            )
        return days

    def month_grid(
        self, reference_month: date, index: EventIndex, week_starts_on: Optional[int] = None
    ) -> list[CalendarDay]:
        """Six full weeks covering ``reference_month``.

        Starts at the configured week-start weekday on or before the first of
        the month and always returns 42 days, so every month renders with the
        same row count.
        """
        week_starts_on = self._week_start(week_starts_on)
        first = start_of_week(first_day_of_month(reference_month), week_starts_on)
        return self._build_days(first, MONTH_GRID_DAYS, index, week_starts_on, reference_month)

    def weeks_for_month(
        self, reference_month: date, index: EventIndex, week_starts_on: Optional[int] = None
    ) -> list[CalendarWeek]:
        """The month grid as six :class:`CalendarWeek` rows."""
        days = self.month_grid(reference_month, index, week_starts_on)
        return [
            CalendarWeek(week_number=days[row].week_number, days=days[row : row + WEEK_DAYS])
            for row in range(0, MONTH_GRID_DAYS, WEEK_DAYS)
        ]

    def week_grid(
        self, reference_date: date, index: EventIndex, week_starts_on: Optional[int] = None
    ) -> list[CalendarDay]:
        """The seven days of the week containing ``reference_date``.

        Days outside the month of ``reference_date`` are flagged as not in the
        current month, as in the month grid.
        """
        week_starts_on = self._week_start(week_starts_on)
        first = start_of_week(reference_date, week_starts_on)
        return self._build_days(first, WEEK_DAYS, index, week_starts_on, reference_date)

    def day_occurrences(self, value: date | str, index: EventIndex) -> list[Occurrence]:
        """Occurrences on one day ordered by time of day.

        Timed occurrences come first, ascending. Occurrences without a
        parseable time follow, and ties keep their index order.
        """
        date_str = value if isinstance(value, str) else to_date_string(value)
        occurrences = index.get(date_str, [])

        def sort_key(occurrence: Occurrence) -> tuple[int, int]:
            minutes = parse_time(occurrence.time) if occurrence.time else None
            return (1, 0) if minutes is None else (0, minutes)

        return sorted(occurrences, key=sort_key)

    def filter_by_text(self, index: EventIndex, query: Optional[str]) -> EventIndex:
        """Occurrences whose title contains ``query``, case-insensitively.

        Dates left with no match are dropped. A blank query returns ``index``
        unchanged.
        """
        if not query or not query.strip():
            return index
        needle = query.strip().casefold()
        filtered: EventIndex = {}
        for date_str, occurrences in index.items():
            matching = [o for o in occurrences if needle in o.title.casefold()]
            if matching:
                filtered[date_str] = matching
        logger.debug("Text filter %r matched %d dates", query, len(filtered))
        return filtered

    def format_date_for_title(self, value: date) -> str:
        """Render ``value`` with the configured date format and locale."""
        return format_date(value, self._settings.date_format, self._settings.locale)
