"""Exception hierarchy for notecal.

Parse failures are normally reported through ``None`` return values; these
exceptions cover the cases where a caller needs to know *why* something was
rejected (strict parsing, malformed frontmatter, invalid settings, an
unreadable note store).
"""

from typing import Any, Optional


class NoteCalError(Exception):
    """Base exception for all notecal errors.

    Args:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class DateParseError(NoteCalError):
    """A date string could not be parsed as a local calendar day."""


class ExtractionError(NoteCalError):
    """A document's metadata has a shape the extractor cannot read.

    Raised when:
    - A date, color or recurrence value is a mapping or a set
    - Frontmatter ``tags`` is neither a scalar nor a list

    The event cache catches this per document and moves on.
    """


class NoteStoreError(NoteCalError):
    """The note store could not list its documents."""


class SettingsValidationError(NoteCalError):
    """Settings failed validation.

    Args:
        message: Human-readable validation error description
        field_name: Name of the field that failed validation
        field_value: The invalid value that caused the error
        validation_errors: List of specific validation error messages
        details: Additional context about the validation failure
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        field_value: Any = None,
        validation_errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.validation_errors = validation_errors or []
        super().__init__(message, details)
