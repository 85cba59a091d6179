"""Exceptions raised by the identifier benchmark."""

from __future__ import annotations


class BenchmarkError(Exception):
    """Base class for known benchmark failures that are reported without retrying."""

    def __init__(self, message: str, error_type: str = "unknown") -> None:
        """Initialise BenchmarkError with message and error type.

        Args:
            message: The user-friendly error message.
            error_type: The type of error for categorisation.
        """
        super().__init__(message)
        self.error_type = error_type


class GenerationFailure(BenchmarkError):
    """The underlying identifier generator could not produce a value."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_type="generation")


class ConfigurationError(BenchmarkError, ValueError):
    """A pool capacity, trial count or refill policy was out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message, error_type="configuration")
