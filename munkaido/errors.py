"""Custom exceptions."""


class MunkaidoError(Exception):
    """Base exception for munkaido."""


class ConfigNotFoundError(MunkaidoError):
    """Raised when configuration is not found."""


class InvalidTimeError(MunkaidoError, ValueError):
    """Raised when a time of day is not a valid 24-hour HH:MM string."""


class EntryValidationError(MunkaidoError):
    """Raised when a work log entry form is incomplete or malformed."""


class AuthError(MunkaidoError):
    """Raised when sign-in or registration fails."""


class InvalidCredentialsError(AuthError):
    """Raised when the email/password pair is rejected."""


class GatewayError(MunkaidoError):
    """Raised when the backend cannot be reached or rejects a request."""


class NothingToExportError(MunkaidoError):
    """Raised when a CSV export is requested without any records."""
