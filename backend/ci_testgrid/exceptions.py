"""Custom exceptions for log parsing."""

from __future__ import annotations


class LogParserError(Exception):
    """Base exception for log parsing failures."""


class LogReadError(LogParserError):
    """Raised when the log stream cannot be read to the end."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class InvalidDurationError(LogParserError, ValueError):
    """Raised when a duration string is not a valid Go duration."""
