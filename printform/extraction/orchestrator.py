"""Extraction orchestrator: vision providers first, OCR + parsing as fallback."""

from printform.extraction.base import ExtractionStrategy
from printform.extraction.models import (
    INVALID_FILE_TYPE_MESSAGE,
    ExtractionResult,
    ImageInput,
    is_image_media_type,
)
from printform.logging.logger import Log
from printform.parsing.sanitizer import FieldSanitizer


class ExtractionOrchestrator:
    """Runs an ordered list of strategies and stops at the first success.

    Every strategy failure is logged and swallowed; only when the whole list
    is exhausted does the caller see a failed result, carrying the message
    of the last error encountered.
    """

    def __init__(
        self,
        strategies: list[ExtractionStrategy],
        sanitizer: FieldSanitizer,
    ) -> None:
        self._strategies = strategies
        self._sanitizer = sanitizer

    @property
    def strategies(self) -> list[ExtractionStrategy]:
        return list(self._strategies)

    def extract(self, content: bytes, media_type: str) -> ExtractionResult:
        """Turn image bytes into a sanitized FieldSet or a failure result."""
        if not is_image_media_type(media_type):
            Log.warning(f"Rejected upload with media type {media_type!r}")
            return ExtractionResult.failed(INVALID_FILE_TYPE_MESSAGE)

        image = ImageInput(content=content, media_type=media_type)
        last_error: Exception | None = None

        for strategy in self._strategies:
            if not strategy.is_configured():
                Log.debug(f"Skipping {strategy.name}: not configured")
                continue
            try:
                output = strategy.attempt(image)
            except Exception as exc:
                Log.warning(f"{strategy.name} extraction failed: {exc}")
                last_error = exc
                continue

            field_set = self._sanitizer.sanitize(output.data)
            Log.info(f"Extracted form fields using {output.method} ({output.provider})")
            return ExtractionResult(
                status="success",
                field_set=field_set,
                raw_text=output.raw_text,
                method=output.method,
                provider=output.provider,
                confidence=output.confidence,
            )

        reason = str(last_error) if last_error else "No extraction strategy configured"
        Log.error(f"All extraction strategies failed: {reason}")
        return ExtractionResult.failed(reason)
