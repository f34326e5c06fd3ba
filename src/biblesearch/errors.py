"""
Exceptions raised by the biblesearch core.

Missing or unreadable files surface as the built-in ``OSError``; everything
else the core can reject derives from ``BibleSearchError`` so callers can
catch the whole family in one place.
"""

from __future__ import annotations


class BibleSearchError(Exception):
    """Base class for errors raised by biblesearch."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(BibleSearchError, ValueError):
    """
    A corpus or synonym file could not be parsed.

    Malformed individual lines are skipped by the loaders; this is only
    raised when a file is unusable as a whole (missing header, no passages).

    Attributes:
        message: Human-readable error description.
        line_number: 1-based line that triggered the error, if known.
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class ReferenceNotFoundError(BibleSearchError, LookupError):
    """A reference (verse, chapter or book) is not present in the corpus."""

    def __init__(self, reference: str) -> None:
        super().__init__(f"Reference not found: {reference}")
        self.reference = reference


class InvalidArgumentError(BibleSearchError, ValueError):
    """An argument is outside the range the core accepts."""
