"""Unit tests for notecal.tag_filter."""

import pytest

from notecal.exceptions import ExtractionError
from notecal.models import Document, TagFilterMode
from notecal.tag_filter import TagFilter, collect_document_tags, matches, parse_required_tags

pytestmark = pytest.mark.unit


class TestParseRequiredTags:
    def test_parse_required_tags_when_mixed_separators_then_split(self) -> None:
        assert parse_required_tags("calendar, meeting  #work,,") == {"calendar", "meeting", "work"}

    def test_parse_required_tags_when_blank_then_empty(self) -> None:
        assert parse_required_tags("  ,  ") == frozenset()


class TestMatches:
    def test_matches_when_all_mode_and_one_missing_then_false(self) -> None:
        assert matches({"calendar"}, "calendar, meeting", TagFilterMode.ALL) is False

    def test_matches_when_any_mode_and_one_present_then_true(self) -> None:
        assert matches({"calendar"}, "calendar, meeting", TagFilterMode.ANY) is True

    def test_matches_when_all_mode_and_all_present_then_true(self) -> None:
        assert matches({"meeting", "calendar", "extra"}, "calendar meeting", "all") is True

    def test_matches_when_config_empty_then_always_true(self) -> None:
        assert matches(set(), "", TagFilterMode.ALL) is True
        assert matches(set(), "   ", TagFilterMode.ANY) is True

    def test_matches_when_prefix_only_then_false(self) -> None:
        assert matches({"calendar/work"}, "calendar", TagFilterMode.ANY) is False
        assert matches({"cal"}, "calendar", TagFilterMode.ANY) is False

    def test_matches_when_document_tags_have_hash_then_stripped(self) -> None:
        assert matches(["#calendar"], "calendar", TagFilterMode.ANY) is True


class TestCollectDocumentTags:
    def test_collect_document_tags_when_inline_and_list_then_union(self) -> None:
        doc = Document(id="a.md", frontmatter={"tags": ["meeting", "#work"]}, tags=["#calendar"])
        assert collect_document_tags(doc) == {"calendar", "meeting", "work"}

    def test_collect_document_tags_when_scalar_then_coerced(self) -> None:
        doc = Document(id="a.md", frontmatter={"tags": 2025})
        assert collect_document_tags(doc) == {"2025"}

    def test_collect_document_tags_when_mapping_then_raises(self) -> None:
        doc = Document(id="a.md", frontmatter={"tags": {"nested": True}})
        with pytest.raises(ExtractionError):
            collect_document_tags(doc)


class TestTagFilter:
    def test_matches_document_when_frontmatter_tag_satisfies_filter_then_true(self) -> None:
        tag_filter = TagFilter("calendar", TagFilterMode.ANY)
        doc = Document(id="a.md", frontmatter={"tags": "calendar"})
        assert tag_filter.matches_document(doc)

    def test_repr_when_created_then_lists_sorted_tags(self) -> None:
        assert repr(TagFilter("b a", "all")) == "TagFilter(required=['a', 'b'], mode='all')"

    def test_init_when_unknown_mode_then_value_error(self) -> None:
        with pytest.raises(ValueError):
            TagFilter("calendar", "some")
