"""Exceptions raised by the quiz core."""

from __future__ import annotations


class QuizImportError(Exception):
    """Raised when a quiz definition cannot be parsed or has the wrong shape."""


class QuizStorageError(Exception):
    """Raised when the quiz library cannot be written to storage."""
