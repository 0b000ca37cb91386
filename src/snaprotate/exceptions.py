"""Exceptions used across snaprotate."""


class RotationError(Exception):
    """Base exception for all rotation errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        """Initialize the exception with message and optional original error."""
        super().__init__(message)
        self.original_error = original_error
        self.message = message


class ScheduleError(RotationError):
    """Raised when a schedule specification cannot be parsed."""


class MalformedTokenError(ScheduleError):
    """Raised when a schedule token is not of the form FREQ:RETENTION."""


class InvalidFrequencyError(ScheduleError):
    """Raised when the frequency part of a token is not <integer><unit>."""


class InvalidRetentionError(ScheduleError):
    """Raised when the retention part of a token is not an unsigned integer."""


class ConfigurationError(RotationError):
    """Raised when there are configuration-related issues."""


class InvalidDateFormatError(ConfigurationError):
    """Raised when the date format cannot name or parse snapshot directories."""


class InvalidArgumentsError(RotationError):
    """Raised when source and target refer to the same path."""


class PathNotFoundError(RotationError):
    """Raised when the source or target path does not exist."""


class TargetNotADirectoryError(RotationError):
    """Raised when the target path exists but is not a directory."""


class RotationIOError(RotationError):
    """Raised when creating, listing or copying into a bucket fails."""
