"""Exceptions raised across the calendar color analysis server."""


class CalendarColorError(Exception):
    """Base exception for calendar color analysis errors."""


class ConfigurationError(CalendarColorError):
    """Raised when required configuration is missing or invalid."""


class InvalidParameterError(CalendarColorError):
    """Raised when a tool argument (date range, color list) is invalid."""


class AuthenticationRequiredError(CalendarColorError):
    """Raised when no usable Google credential is available."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class AuthenticationFailedError(CalendarColorError):
    """Raised when an authorization code could not be exchanged for a token."""


class CalendarAccessError(CalendarColorError):
    """Raised when the Google Calendar API call fails for a non-auth reason."""


class TokenStoreError(CalendarColorError):
    """Raised when the token file cannot be written."""
