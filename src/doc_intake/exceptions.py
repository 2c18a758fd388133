"""Custom exceptions for the intake core."""

from __future__ import annotations

from typing import Sequence


class IntakeError(Exception):
    """Base class for intake controller errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFileTypeError(IntakeError):
    """Raised when a file extension is outside the tool's accepted set."""

    def __init__(self, extension: str, allowed: Sequence[str]):
        super().__init__(f"Unsupported file type. Allowed: {', '.join(allowed)}")
        self.extension = extension
        self.allowed = tuple(allowed)


class NoFileSelectedError(IntakeError):
    """Raised when submit is requested before a file has been accepted."""


class ScreenLifecycleError(IntakeError):
    """Raised when a screen is mounted twice or a guard is registered twice."""
