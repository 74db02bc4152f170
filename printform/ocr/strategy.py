from printform.extraction.base import ExtractionStrategy
from printform.extraction.exceptions import ProviderNotConfiguredError
from printform.extraction.models import METHOD_OCR_PARSING, ImageInput, StrategyOutput
from printform.ocr.ensemble import OcrEnsemble
from printform.parsing.field_parser import parse_form_text


class OcrParsingStrategy(ExtractionStrategy):
    """Fallback strategy: OCR the image, then parse the fields out of the text.

    Without an ensemble (no OCR credential) every attempt fails with a
    "not configured" error, which the orchestrator reports when nothing
    else succeeded.
    """

    def __init__(self, ensemble: OcrEnsemble | None) -> None:
        self._ensemble = ensemble

    @property
    def name(self) -> str:
        return "ocr_space"

    def attempt(self, image: ImageInput) -> StrategyOutput:
        if self._ensemble is None:
            raise ProviderNotConfiguredError(
                "OCR_API_KEY not configured. Set it in the environment or .env file."
            )
        result = self._ensemble.run(image)
        field_set = parse_form_text(result.text)
        return StrategyOutput(
            data=field_set.to_dict(),
            raw_text=result.text,
            method=METHOD_OCR_PARSING,
            provider=f"{self.name}:engine{result.engine}",
            confidence=min(result.confidence, 1.0),
        )
