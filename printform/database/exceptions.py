class PersistenceError(Exception):
    """Base exception for persistence gateway errors."""


class ImageNotFoundError(PersistenceError):
    """Raised when an uploaded image row does not exist."""


class PrintingFormNotFoundError(PersistenceError):
    """Raised when a printing form row does not exist."""


class ExtractionAlreadyRecordedError(PersistenceError):
    """Raised when an image already owns an extraction record."""
