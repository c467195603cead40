"""Data models for notecal - documents, drafts, occurrences and grid cells."""

import datetime
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecurrencePattern(str, Enum):
    """Closed set of recurrence patterns accepted in frontmatter."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class TagFilterMode(str, Enum):
    """How multiple required tags are combined."""

    ANY = "any"
    ALL = "all"


class CalendarViewMode(str, Enum):
    """Views the rendering layer can ask for."""

    MONTH = "month"
    WEEK = "week"
    DAY = "day"


class Document(BaseModel):
    """Immutable snapshot of one note as read from the note store."""

    id: str = Field(..., description="Document identifier, usually a vault-relative path")
    frontmatter: dict[str, Any] = Field(default_factory=dict, description="Frontmatter mapping")
    tags: list[str] = Field(default_factory=list, description="Inline tags, with or without '#'")

    model_config = ConfigDict(frozen=True)

    @property
    def title(self) -> str:
        """Basename of the document without its extension."""
        path = PurePosixPath(self.id.replace("\\", "/"))
        return path.stem or self.id


class EventDraft(BaseModel):
    """Unexpanded event extracted from one document for one anchor date."""

    source_document_id: str
    title: str
    date_str: str = Field(..., description="Normalized anchor date (YYYY-MM-DD)")
    end_date_str: Optional[str] = Field(default=None, description="Normalized end date")
    time: Optional[str] = None
    color: Optional[str] = None
    recurrence: Optional[RecurrencePattern] = None
    recurrence_days: Optional[frozenset[int]] = Field(
        default=None, description="Allowed weekdays (0=Sunday..6=Saturday), daily only"
    )

    model_config = ConfigDict(frozen=True)

    @property
    def is_recurring(self) -> bool:
        return self.recurrence is not None and self.recurrence != RecurrencePattern.NONE


class Occurrence(BaseModel):
    """One concrete, calendar-dated materialization of a draft."""

    source_document_id: str
    title: str
    date_str: str = Field(..., description="Local calendar day (YYYY-MM-DD)")
    is_recurring: bool = False
    original_date_str: str = Field(..., description="Anchor date of the parent draft")
    time: Optional[str] = None
    color: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_draft(cls, draft: EventDraft, date_str: str, *, is_recurring: bool = False) -> "Occurrence":
        """Build an occurrence carrying the draft's shared fields."""
        return cls(
            source_document_id=draft.source_document_id,
            title=draft.title,
            date_str=date_str,
            is_recurring=is_recurring,
            original_date_str=draft.date_str,
            time=draft.time,
            color=draft.color,
        )


# Normalized date string -> occurrences in corpus order.
EventIndex = dict[str, list[Occurrence]]


class CalendarDay(BaseModel):
    """A single cell of a month or week grid."""

    date: datetime.date
    date_str: str
    is_current_month: bool
    is_today: bool
    is_weekend: bool
    week_number: int
    occurrences: list[Occurrence] = Field(default_factory=list)


class CalendarWeek(BaseModel):
    """A row of seven days."""

    week_number: int
    days: list[CalendarDay] = Field(..., min_length=7, max_length=7)
