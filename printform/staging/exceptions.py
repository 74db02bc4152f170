class StagingError(Exception):
    """Base exception for verification staging errors."""


class StagedEntryNotFoundError(StagingError):
    """Raised when a staged entry index or image id does not exist."""


class StagingSessionNotFoundError(StagingError):
    """Raised when a staging session is unknown or has expired."""


class UnknownFieldError(StagingError):
    """Raised when an edit names a field outside the form schema."""
