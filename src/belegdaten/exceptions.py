"""
belegdaten.exceptions
~~~~~~~~~~~~~~~~~~~~~
Exception hierarchy for the belegdaten library.
"""

from __future__ import annotations


class BelegdatenError(Exception):
    """
    Base exception for all belegdaten errors.

    Attributes:
        message: Human-readable description without the cause.
        cause:   The lower-level exception that triggered this one, if any.
                 It is also set as ``__cause__``, so tracebacks chain it
                 even when the error is raised without ``from``.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} ({type(self.cause).__name__}: {self.cause})"


class ParseError(BelegdatenError):
    """
    Raised when no known number convention can interpret a numeric string.

    Attributes:
        text: The string that could not be parsed.
    """

    def __init__(self, message: str, *, text: str, cause: BaseException | None = None) -> None:
        super().__init__(message, cause=cause)
        self.text = text


class ConfigurationError(BelegdatenError):
    """Raised when a configured regular expression cannot be compiled."""
