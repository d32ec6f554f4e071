"""Errors raised by the scanning pipeline.

Every error is terminal for the run; ``exit_code`` is what the CLI returns.
"""

from __future__ import annotations


class LogscanError(Exception):
    """Base error for this package."""

    exit_code: int = 1


class UsageError(LogscanError):
    """Bad or conflicting options, missing values, malformed arguments."""

    exit_code = 2

    def __init__(self, message: str, *, suggest_help: bool = False) -> None:
        super().__init__(message)
        self.suggest_help = suggest_help


class InputError(LogscanError):
    """An input file is missing, not a regular file, or unreadable."""

    exit_code = 2


class PatternError(LogscanError):
    """A regular expression could not be compiled."""

    exit_code = 2


class OutputError(LogscanError):
    """The output file could not be created or written."""


class InternalError(LogscanError):
    """Raised when mode dispatch falls through to an unknown value."""
