"""Recurrence expansion for notecal event drafts."""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

from .date_utils import add_months, from_date_string, to_date_string, weekday_index
from .models import EventDraft, Occurrence, RecurrencePattern

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 730

_STEPS: dict[RecurrencePattern, Callable[[date], date]] = {
    RecurrencePattern.DAILY: lambda current: current + timedelta(days=1),
    RecurrencePattern.WEEKLY: lambda current: current + timedelta(days=7),
    RecurrencePattern.MONTHLY: lambda current: add_months(current, 1),
    RecurrencePattern.YEARLY: lambda current: add_months(current, 12),
}


@dataclass(frozen=True)
class RecurrenceExpanderConfig:
    """Bounds for recurrence expansion.

    ``max_iterations`` caps the loop regardless of window size, so expansion
    always terminates. The default window runs from ``months_before`` months
    before today to ``months_after`` months after it.
    """

    max_iterations: int = MAX_ITERATIONS
    months_before: int = 1
    months_after: int = 12


class RecurrenceExpander:
    """Expands a recurring draft into concrete occurrences inside a window.

    Args:
        config: Expansion bounds (defaults to :class:`RecurrenceExpanderConfig`)
        today: Callable returning the current local date, for the default window
    """

    def __init__(
        self,
        config: Optional[RecurrenceExpanderConfig] = None,
        today: Callable[[], date] = date.today,
    ):
        self.config = config or RecurrenceExpanderConfig()
        self._today = today

    def default_window(self) -> tuple[date, date]:
        today = self._today()
        return (
            add_months(today, -self.config.months_before),
            add_months(today, self.config.months_after),
        )

    def expand(
        self,
        draft: EventDraft,
        window_start: Optional[date] = None,
        window_end: Optional[date] = None,
    ) -> list[Occurrence]:
        """Generate occurrences of ``draft`` between ``window_start`` and ``window_end``.

        Steps from the anchor date by the draft's pattern (daily +1 day,
        weekly +7 days, monthly +1 calendar month, yearly +12 calendar
        months). For ``daily`` drafts with a weekday restriction only the
        listed weekdays are emitted. Pattern ``none`` (or no pattern) checks
        the anchor alone.

        Returns:
            Occurrences in chronological order; expansion stops early, without
            error, once the iteration cap is reached
        """
        anchor = from_date_string(draft.date_str)
        if anchor is None:
            return []

        default_start, default_end = self.default_window()
        window_start = window_start or default_start
        window_end = window_end or default_end

        pattern = draft.recurrence or RecurrencePattern.NONE
        step = _STEPS.get(pattern)
        allowed_days = draft.recurrence_days if pattern == RecurrencePattern.DAILY else None

        occurrences: list[Occurrence] = []
        current = anchor
        iterations = 0
        while current <= window_end and iterations < self.config.max_iterations:
            if current >= window_start and (not allowed_days or weekday_index(current) in allowed_days):
                occurrences.append(
                    Occurrence.from_draft(draft, to_date_string(current), is_recurring=True)
                )
            if step is None:
                break
            current = step(current)
            iterations += 1

        if iterations >= self.config.max_iterations:
            logger.debug(
                "Recurrence cap reached for %s (%s from %s): %d occurrences",
                draft.source_document_id,
                pattern.value,
                draft.date_str,
                len(occurrences),
            )
        return occurrences
