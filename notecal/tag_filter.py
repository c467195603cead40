"""Tag filtering for notecal documents."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from .exceptions import ExtractionError
from .models import Document, TagFilterMode

_SEPARATOR_RE = re.compile(r"[,\s]+")


def _clean_tag(tag: Any) -> str:
    return str(tag).strip().lstrip("#")


def parse_required_tags(config: str) -> frozenset[str]:
    """Split a configured tag list on commas and whitespace."""
    return frozenset(tag for tag in (_clean_tag(part) for part in _SEPARATOR_RE.split(config or "")) if tag)


def collect_document_tags(document: Document) -> set[str]:
    """Union of inline tags and frontmatter ``tags`` (scalar or list).

    Raises:
        ExtractionError: If frontmatter ``tags`` is a mapping or other non-scalar
    """
    tags = {_clean_tag(tag) for tag in document.tags}

    raw = document.frontmatter.get("tags")
    if isinstance(raw, (list, tuple)):
        tags.update(_clean_tag(tag) for tag in raw if tag is not None)
    elif isinstance(raw, (str, int, float, bool)):
        tags.add(_clean_tag(raw))
    elif raw is not None:
        raise ExtractionError(
            "Frontmatter tags must be a scalar or a list",
            {"document": document.id, "type": type(raw).__name__},
        )

    tags.discard("")
    return tags


def matches(document_tags: Iterable[str], required_tags_config: str, mode: TagFilterMode | str) -> bool:
    """Check a document's tags against the configured tag list.

    Args:
        document_tags: Tags carried by the document (leading '#' optional)
        required_tags_config: Comma/space separated required tags
        mode: ``any`` (at least one present) or ``all`` (every one present)

    Returns:
        True if the document passes the filter; always True for an empty config
    """
    return TagFilter(required_tags_config, mode).matches(document_tags)


class TagFilter:
    """Boolean matcher over a document's tag set.

    Matching is exact per tag; there is no prefix or nested-tag matching.
    """

    def __init__(self, required_tags_config: str, mode: TagFilterMode | str = TagFilterMode.ANY):
        self.required = parse_required_tags(required_tags_config)
        self.mode = TagFilterMode(mode)

    def matches(self, document_tags: Iterable[str]) -> bool:
        if not self.required:
            return True
        present = {_clean_tag(tag) for tag in document_tags}
        if self.mode == TagFilterMode.ALL:
            return self.required <= present
        return not self.required.isdisjoint(present)

    def matches_document(self, document: Document) -> bool:
        return self.matches(collect_document_tags(document))

    def __repr__(self) -> str:
        return f"TagFilter(required={sorted(self.required)}, mode={self.mode.value!r})"
