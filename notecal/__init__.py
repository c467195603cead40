"""notecal - calendar of events aggregated from tagged notes.

Turns a corpus of notes carrying date metadata into a date-indexed set of
occurrences (single dates, date lists, ranges and simple recurrence rules)
and builds month, week and day views over it.
"""

__version__ = "0.1.0"

from .date_utils import format_date, from_date_string, get_week_number, parse_time, to_date_string
from .event_cache import EventCache
from .event_extractor import EventExtractor
from .models import (
    CalendarDay,
    CalendarWeek,
    Document,
    EventDraft,
    EventIndex,
    Occurrence,
    RecurrencePattern,
    TagFilterMode,
)
from .note_store import InMemoryNoteStore, MarkdownNoteStore, NoteStore
from .query_engine import QueryEngine
from .settings import CalendarSettings

__all__ = [
    "CalendarDay",
    "CalendarSettings",
    "CalendarWeek",
    "Document",
    "EventCache",
    "EventDraft",
    "EventExtractor",
    "EventIndex",
    "InMemoryNoteStore",
    "MarkdownNoteStore",
    "NoteStore",
    "Occurrence",
    "QueryEngine",
    "RecurrencePattern",
    "TagFilterMode",
    "format_date",
    "from_date_string",
    "get_week_number",
    "parse_time",
    "to_date_string",
]

