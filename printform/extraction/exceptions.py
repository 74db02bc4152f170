class ExtractionError(Exception):
    """Base exception for all extraction-related errors."""


class ProviderNotConfiguredError(ExtractionError):
    """Raised when a strategy is attempted without its credential."""


class ProviderError(ExtractionError):
    """Raised when an extraction provider call fails."""


class ProviderNetworkError(ProviderError):
    """Raised when the provider call fails due to network/infrastructure issues."""


class ProviderResponseError(ProviderError):
    """Raised when the provider answers with an unusable payload."""


class OcrError(ProviderError):
    """Raised when the OCR provider reports a processing failure."""
