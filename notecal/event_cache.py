"""Time-boxed cache of the date-indexed occurrence map.

The cache is either :class:`EmptyCache` or :class:`PopulatedCache`. A
populated entry is served while ``now - timestamp < ttl``; after that, or
after :meth:`EventCache.invalidate`, the next :meth:`EventCache.get` rebuilds
the index from the whole note corpus before answering.

Example:
    cache = EventCache(store, settings)

    # Full index (live object, treat as read-only)
    index = cache.get()

    # Copy restricted to January
    january = cache.get("2025-01-01", "2025-01-31")

    # On settings change
    cache.update_settings(new_settings)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional, Union

from .date_utils import to_date_string
from .event_extractor import EventExtractor
from .models import EventDraft, EventIndex, Occurrence
from .note_store import NoteStore
from .range_expander import RangeExpander
from .recurrence_expander import RecurrenceExpander
from .settings import CalendarSettings

logger = logging.getLogger(__name__)

CACHE_TTL_MS = 5000


@dataclass(frozen=True)
class EmptyCache:
    """No index has been built, or it was invalidated."""


@dataclass(frozen=True)
class PopulatedCache:
    """A complete index and the clock reading (seconds) when it was built."""

    index: EventIndex
    timestamp: float


CacheState = Union[EmptyCache, PopulatedCache]

DateBound = Union[str, date, None]


def _bound_to_str(value: DateBound) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return to_date_string(value)


def filter_index(index: EventIndex, window_start: DateBound, window_end: DateBound) -> EventIndex:
    """Copy of ``index`` holding only dates within ``[window_start, window_end]``.

    Normalized date strings are fixed width, so lexical comparison orders
    them chronologically. A missing bound leaves that side open.
    """
    start = _bound_to_str(window_start)
    end = _bound_to_str(window_end)
    return {
        date_str: list(occurrences)
        for date_str, occurrences in index.items()
        if (start is None or date_str >= start) and (end is None or date_str <= end)
    }


class EventCache:
    """Owns the authoritative occurrence index built from the note store.

    Args:
        store: Note store to read the corpus from
        settings: Settings snapshot used for extraction
        ttl_ms: Validity of a built index in milliseconds
        clock: Monotonic clock returning seconds
        recurrence_expander: Expander for recurring drafts
        range_expander: Expander for drafts with an end date
    """

    def __init__(
        self,
        store: NoteStore,
        settings: CalendarSettings,
        *,
        ttl_ms: int = CACHE_TTL_MS,
        clock: Callable[[], float] = time.monotonic,
        recurrence_expander: Optional[RecurrenceExpander] = None,
        range_expander: Optional[RangeExpander] = None,
    ):
        self._store = store
        self._extractor = EventExtractor(settings)
        self._recurrence = recurrence_expander or RecurrenceExpander()
        self._range = range_expander or RangeExpander()
        self._ttl_seconds = ttl_ms / 1000.0
        self._clock = clock
        self._state: CacheState = EmptyCache()
        self.stats: dict[str, Any] = {
            "hits": 0,
            "rebuilds": 0,
            "invalidations": 0,
            "failed_documents": 0,
            "last_build_ms": 0.0,
            "last_document_count": 0,
            "last_occurrence_count": 0,
        }

    @property
    def settings(self) -> CalendarSettings:
        return self._extractor.settings

    @property
    def state(self) -> CacheState:
        return self._state

    def is_stale(self) -> bool:
        state = self._state
        if isinstance(state, EmptyCache):
            return True
        return self._clock() - state.timestamp >= self._ttl_seconds

    def get(self, window_start: DateBound = None, window_end: DateBound = None) -> EventIndex:
        """Return the occurrence index, rebuilding it first if stale.

        Args:
            window_start: Optional first date (``YYYY-MM-DD`` or date) to include
            window_end: Optional last date to include

        Returns:
            The live full index when no window is given, otherwise a freshly
            built copy restricted to the window
        """
        if self.is_stale():
            self._rebuild()
        else:
            self.stats["hits"] += 1

        state = self._state
        assert isinstance(state, PopulatedCache)
        if window_start is None and window_end is None:
            return state.index
        return filter_index(state.index, window_start, window_end)

    def invalidate(self) -> None:
        """Drop the current index; the next :meth:`get` rebuilds."""
        self._state = EmptyCache()
        self.stats["invalidations"] += 1
        logger.debug("Event cache invalidated")

    def update_settings(self, settings: CalendarSettings) -> None:
        """Swap in a new settings snapshot and invalidate."""
        self._extractor.update_settings(settings)
        self.invalidate()

    def get_stats(self) -> dict[str, Any]:
        return {**self.stats, "populated": isinstance(self._state, PopulatedCache)}

    def _rebuild(self) -> None:
        started = self._clock()
        previous = self._state

        try:
            documents = self._store.list_documents()
        except Exception:
            logger.exception("Failed to list documents from note store")
            if isinstance(previous, PopulatedCache):
                logger.info("Keeping previous index of %d dates", len(previous.index))
                self._state = PopulatedCache(previous.index, self._clock())
            else:
                self._state = PopulatedCache({}, self._clock())
            return

        index: EventIndex = {}
        occurrence_count = 0
        for document in documents:
            try:
                occurrences = self._expand_document(document)
            except Exception as exc:
                self.stats["failed_documents"] += 1
                logger.warning("Skipping document %s: %s", getattr(document, "id", document), exc)
                logger.debug("Extraction failure detail", exc_info=True)
                continue
            for occurrence in occurrences:
                index.setdefault(occurrence.date_str, []).append(occurrence)
            occurrence_count += len(occurrences)

        finished = self._clock()
        self._state = PopulatedCache(index, finished)

        self.stats["rebuilds"] += 1
        self.stats["last_build_ms"] = round((finished - started) * 1000, 2)
        self.stats["last_document_count"] = len(documents)
        self.stats["last_occurrence_count"] = occurrence_count
        logger.info(
            "Rebuilt event index: %d documents, %d occurrences on %d dates in %.1fms",
            len(documents),
            occurrence_count,
            len(index),
            (finished - started) * 1000,
        )

    def _expand_document(self, document: Any) -> list[Occurrence]:
        occurrences: list[Occurrence] = []
        for draft in self._extractor.extract(document):
            occurrences.extend(self._expand_draft(draft))
        return occurrences

    def _expand_draft(self, draft: EventDraft) -> list[Occurrence]:
        if draft.is_recurring:
            return self._recurrence.expand(draft)
        if draft.end_date_str:
            return self._range.expand(draft)
        return [Occurrence.from_draft(draft, draft.date_str)]
