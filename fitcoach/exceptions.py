"""
Custom exception classes for fitcoach.

Every fatal decoding problem derives from FitParseError so callers can map
the whole family to a single "file could not be parsed" condition, while the
concrete subclass is kept for logging and diagnostics.
"""

from typing import Optional, Any, Dict


class FitCoachError(Exception):
    """
    Base exception for all fitcoach errors.

    All custom exceptions in this package should inherit from this class.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigurationError(FitCoachError):
    """
    Raised when there are configuration-related errors.

    Examples:
    - Invalid environment values
    - Unsupported log format
    """
    pass


class FitParseError(FitCoachError):
    """
    Raised when a FIT buffer cannot be turned into a workout.

    This is the caller-visible condition; subclasses only refine the cause.
    """
    pass


class MalformedHeaderError(FitParseError):
    """
    Raised when the file header is unusable.

    Examples:
    - Buffer shorter than the minimum header
    - Missing '.FIT' signature
    - Header size outside the protocol-allowed values
    - Declared data size reading past the end of the buffer
    """
    pass


class TruncatedRecordError(FitParseError):
    """Raised when a record runs past the end of the declared data section."""
    pass


class UndefinedLocalMessageError(FitParseError):
    """Raised when a data message refers to a local message type never defined."""
    pass


class CrcMismatchError(FitParseError):
    """Raised on a CRC mismatch, only when strict CRC checking is enabled."""
    pass


class MissingSessionError(FitParseError):
    """Raised when the file holds no session message to build a summary from."""
    pass


class FileTooLargeError(FitParseError):
    """Raised when the buffer exceeds the configured upload size limit."""
    pass


class InvalidFieldValueError(FitParseError):
    """
    Raised when decoded field values cannot populate the workout model.

    Examples:
    - A known field defined with a string base type where a number is expected
    - A negative speed or distance from a field defined as signed
    """
    pass


class UnknownMessageTypeError(FitCoachError):
    """
    Raised by the profile lookup for message numbers it does not describe.

    Recoverable: the decoder catches it, counts it and skips the message.
    """

    def __init__(self, global_message_number: int):
        super().__init__(
            f"Unknown FIT message type {global_message_number}",
            {'global_message_number': global_message_number},
        )
        self.global_message_number = global_message_number
