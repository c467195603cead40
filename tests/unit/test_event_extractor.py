"""Unit tests for notecal.event_extractor."""

from datetime import date

import pytest

from notecal.event_extractor import (
    EVENT_COLORS,
    EventExtractor,
    extract_drafts,
    is_valid_hex_color,
    parse_recurrence,
    parse_weekdays,
    resolve_color,
)
from notecal.exceptions import ExtractionError
from notecal.models import Document, RecurrencePattern, TagFilterMode
from notecal.settings import CalendarSettings

pytestmark = pytest.mark.unit


class TestValueParsers:
    def test_resolve_color_when_named_then_hex(self) -> None:
        assert resolve_color("Blue") == EVENT_COLORS["blue"]

    def test_resolve_color_when_valid_hex_then_kept(self) -> None:
        assert resolve_color("#abc") == "#abc"
        assert resolve_color("#A1B2C3") == "#A1B2C3"

    def test_resolve_color_when_invalid_then_none(self) -> None:
        assert resolve_color("chartreuse-ish") is None
        assert resolve_color("#12345") is None

    def test_is_valid_hex_color_when_missing_hash_then_false(self) -> None:
        assert not is_valid_hex_color("ffffff")

    def test_parse_recurrence_when_known_then_enum(self) -> None:
        assert parse_recurrence(" Weekly ") is RecurrencePattern.WEEKLY
        assert parse_recurrence("none") is RecurrencePattern.NONE

    def test_parse_recurrence_when_unknown_then_none(self) -> None:
        assert parse_recurrence("fortnightly") is None

    def test_parse_weekdays_when_numbers_then_set(self) -> None:
        assert parse_weekdays([1, 3, 5]) == frozenset({1, 3, 5})
        assert parse_weekdays(["1", "3"]) == frozenset({1, 3})

    def test_parse_weekdays_when_names_then_indices(self) -> None:
        assert parse_weekdays(["Monday", "wed", "Fr"]) == frozenset({1, 3, 5})

    def test_parse_weekdays_when_csv_string_then_indices(self) -> None:
        assert parse_weekdays("mon, wed fri") == frozenset({1, 3, 5})

    def test_parse_weekdays_when_unrecognized_entries_then_dropped(self) -> None:
        assert parse_weekdays(["mon", "funday", 9, True]) == frozenset({1})
        assert parse_weekdays("someday") is None


class TestEventExtractor:
    def setup_method(self) -> None:
        self.extractor = EventExtractor(CalendarSettings())

    def test_extract_when_single_date_then_one_draft(self) -> None:
        doc = Document(id="notes/Dentist.md", frontmatter={"date": "2025-01-15", "time": "14:30"}, tags=["calendar"])

        drafts = self.extractor.extract(doc)

        assert len(drafts) == 1
        draft = drafts[0]
        assert draft.title == "Dentist"
        assert draft.source_document_id == "notes/Dentist.md"
        assert draft.date_str == "2025-01-15"
        assert draft.time == "14:30"
        assert draft.recurrence is None
        assert not draft.is_recurring

    def test_extract_when_date_list_then_one_draft_per_element_sharing_fields(self) -> None:
        doc = Document(
            id="Reviews.md",
            frontmatter={"date": ["2025-01-15", "2025-01-29"], "color": "red"},
            tags=["calendar"],
        )

        drafts = self.extractor.extract(doc)

        assert [d.date_str for d in drafts] == ["2025-01-15", "2025-01-29"]
        assert {d.color for d in drafts} == {EVENT_COLORS["red"]}

    def test_extract_when_some_dates_unparseable_then_skipped(self) -> None:
        doc = Document(
            id="Mixed.md",
            frontmatter={"date": ["2025-02-30", "tomorrow", "2025-03-01"]},
            tags=["calendar"],
        )

        assert [d.date_str for d in self.extractor.extract(doc)] == ["2025-03-01"]

    def test_extract_when_date_object_then_normalized(self) -> None:
        doc = Document(id="Obj.md", frontmatter={"date": date(2025, 4, 1)}, tags=["calendar"])

        assert self.extractor.extract(doc)[0].date_str == "2025-04-01"

    def test_extract_when_tag_filter_rejects_then_empty(self) -> None:
        doc = Document(id="Shopping.md", frontmatter={"date": "2025-01-15"}, tags=["errands"])

        assert self.extractor.extract(doc) == []

    def test_extract_when_no_date_property_then_empty(self) -> None:
        doc = Document(id="Idea.md", frontmatter={"title": "x"}, tags=["calendar"])

        assert self.extractor.extract(doc) == []

    def test_extract_when_range_and_recurrence_then_attached(self) -> None:
        doc = Document(
            id="Gym.md",
            frontmatter={
                "date": "2025-01-06",
                "endDate": "2025-01-08",
                "recurrence": "daily",
                "recurrenceDays": "mon,wed,fri",
                "color": "#00ff00",
            },
            tags=["calendar"],
        )

        draft = self.extractor.extract(doc)[0]

        assert draft.end_date_str == "2025-01-08"
        assert draft.recurrence is RecurrencePattern.DAILY
        assert draft.recurrence_days == frozenset({1, 3, 5})
        assert draft.color == "#00ff00"
        assert draft.is_recurring

    def test_extract_when_custom_property_names_then_used(self) -> None:
        extractor = EventExtractor(CalendarSettings(date_property="when", time_property="at"))
        doc = Document(id="Call.md", frontmatter={"when": "2025-01-10", "at": "10:00"}, tags=["calendar"])

        draft = extractor.extract(doc)[0]

        assert (draft.date_str, draft.time) == ("2025-01-10", "10:00")

    def test_extract_when_date_is_mapping_then_raises(self) -> None:
        doc = Document(id="Bad.md", frontmatter={"date": {"start": "2025-01-01"}}, tags=["calendar"])

        with pytest.raises(ExtractionError):
            self.extractor.extract(doc)

    def test_update_settings_when_tag_filter_changes_then_applied(self) -> None:
        doc = Document(id="Shopping.md", frontmatter={"date": "2025-01-15"}, tags=["errands"])

        self.extractor.update_settings(CalendarSettings(tag_filter="calendar errands"))

        assert len(self.extractor.extract(doc)) == 1

    def test_extract_drafts_when_all_mode_then_requires_every_tag(self) -> None:
        doc = Document(id="Sync.md", frontmatter={"date": "2025-01-15"}, tags=["calendar"])
        settings = CalendarSettings(tag_filter="calendar meeting", tag_filter_mode=TagFilterMode.ALL)

        assert extract_drafts(doc, settings) == []
