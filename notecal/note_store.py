"""Note store interface and adapters.

The event cache only needs to list documents; reading full content exists for
hover previews, which live outside the core.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

import yaml

from .exceptions import NoteStoreError
from .models import Document

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_INLINE_TAG_RE = re.compile(r"(?:(?<=\s)|^)#([\w/-]+)", re.MULTILINE)


class NoteStore(Protocol):
    """Protocol for the corpus of notes the calendar is built from."""

    def list_documents(self) -> list[Document]:
        """Return a snapshot of every document.

        Raises:
            NoteStoreError: If the corpus cannot be listed
        """
        ...

    def read_content(self, document_id: str) -> str:
        """Return the full text of one document."""
        ...


class InMemoryNoteStore:
    """List-backed note store, for embedding and tests."""

    def __init__(self, documents: Iterable[Document] = (), contents: dict[str, str] | None = None):
        self._documents = list(documents)
        self._contents = dict(contents or {})

    def list_documents(self) -> list[Document]:
        return list(self._documents)

    def read_content(self, document_id: str) -> str:
        return self._contents.get(document_id, "")

    def add(self, document: Document, content: str = "") -> None:
        self._documents.append(document)
        self._contents[document.id] = content

    def remove(self, document_id: str) -> bool:
        before = len(self._documents)
        self._documents = [doc for doc in self._documents if doc.id != document_id]
        self._contents.pop(document_id, None)
        return len(self._documents) != before


def split_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a markdown document into its frontmatter mapping and body.

    Frontmatter is loaded with PyYAML's ``BaseLoader``: scalars stay strings,
    the way the note app hands them over. A block that fails to parse, or
    that is not a mapping, is treated as absent.
    """
    match = _FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    body = text[match.end():]
    try:
        loaded = yaml.load(match.group(1), Loader=yaml.BaseLoader)  # noqa: S506 - BaseLoader builds no objects
    except yaml.YAMLError as exc:
        logger.warning("Ignoring malformed frontmatter: %s", exc)
        return {}, body
    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        logger.warning("Ignoring frontmatter that is not a mapping: %r", type(loaded).__name__)
        return {}, body
    return loaded, body


def find_inline_tags(body: str) -> list[str]:
    """Collect ``#tags`` from a note body, in order of first appearance.

    A tag follows whitespace or the start of a line and is not purely numeric.
    """
    seen: dict[str, None] = {}
    for tag in _INLINE_TAG_RE.findall(body):
        if not tag.isdigit():
            seen.setdefault(tag, None)
    return list(seen)


class MarkdownNoteStore:
    """Note store over a directory of markdown files.

    Document ids are paths relative to ``root`` with forward slashes; files
    are listed in sorted path order so corpus order is stable.
    """

    def __init__(self, root: str | Path, pattern: str = "*.md"):
        self.root = Path(root)
        self.pattern = pattern

    def list_documents(self) -> list[Document]:
        if not self.root.is_dir():
            raise NoteStoreError("Note directory not found", {"root": str(self.root)})

        try:
            paths = sorted(self.root.rglob(self.pattern))
        except OSError as exc:
            raise NoteStoreError("Failed to list notes", {"root": str(self.root)}) from exc

        documents = []
        for path in paths:
            if not path.is_file():
                continue
            document_id = path.relative_to(self.root).as_posix()
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable note %s: %s", document_id, exc)
                continue
            frontmatter, body = split_frontmatter(text)
            documents.append(
                Document(id=document_id, frontmatter=frontmatter, tags=find_inline_tags(body))
            )

        logger.debug("Listed %d notes under %s", len(documents), self.root)
        return documents

    def read_content(self, document_id: str) -> str:
        path = self.root / document_id
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteStoreError("Failed to read note", {"document": document_id}) from exc
