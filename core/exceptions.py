"""
Centralized exception hierarchy for tracker analytics errors.

The engine is best-effort: per-point problems are raised close to where a
record is parsed and caught by the processor, which skips the record. Only
errors about the request itself (such as an impossible date range) escape
to the caller.
"""


class TrackerAnalyticsError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidTrackerPointError(TrackerAnalyticsError):
    """Exception raised when a raw tracker record cannot be coerced."""


class InvalidDateRangeError(TrackerAnalyticsError):
    """Exception raised when a requested date range is unusable."""


class ConfigurationError(TrackerAnalyticsError):
    """Exception raised when an environment override is malformed."""
