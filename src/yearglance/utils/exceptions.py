"""Custom exceptions for the yearglance layout core."""


class YearGlanceError(Exception):
    """Base exception for yearglance errors."""


class ConfigurationError(YearGlanceError):
    """Raised when configuration is invalid."""


class EventReadError(YearGlanceError):
    """Raised when reading events from a source fails."""


class LayoutError(YearGlanceError):
    """Raised when layout parameters are invalid (month, column count)."""


class InvalidDateError(YearGlanceError, ValueError):
    """Raised when a YYYY-MM-DD date key cannot be parsed."""
