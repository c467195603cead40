"""Shared fixtures for notecal tests."""

from datetime import date
from typing import Any, Callable

import pytest

from notecal.models import Document
from notecal.note_store import InMemoryNoteStore
from notecal.settings import CalendarSettings


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> CalendarSettings:
    """Default settings, isolated from any NOTECAL_* variables in the environment."""
    for name in list(CalendarSettings.model_fields):
        monkeypatch.delenv(f"NOTECAL_{name.upper()}", raising=False)
    return CalendarSettings()


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Build a calendar-tagged document; keyword arguments become frontmatter."""

    def _make(doc_id: str = "notes/Standup.md", tags: Any = ("calendar",), **frontmatter: Any) -> Document:
        return Document(id=doc_id, frontmatter=frontmatter, tags=list(tags))

    return _make


@pytest.fixture
def note_store(make_document: Callable[..., Document]) -> InMemoryNoteStore:
    """Small corpus covering single, multi-date, ranged and recurring notes."""
    return InMemoryNoteStore(
        [
            make_document("Dentist.md", date="2025-01-15", time="14:30"),
            make_document("Conference.md", date="2025-01-20", endDate="2025-01-22", color="blue"),
            make_document("Standup.md", date="2025-01-06", recurrence="weekly", time="9:00"),
            make_document("Reviews.md", date=["2025-01-15", "2025-01-29"]),
            make_document("Shopping.md", tags=["errands"], date="2025-01-15"),
        ]
    )


@pytest.fixture
def fixed_today() -> Callable[[], date]:
    return lambda: date(2025, 1, 15)


class FakeClock:
    """Monotonic clock advanced by hand, in seconds."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def pytest_configure(config: Any) -> None:
    """Register notecal test markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "smoke: Basic smoke tests")
