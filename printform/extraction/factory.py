from printform.config.settings import Settings
from printform.extraction.base import ExtractionStrategy
from printform.extraction.orchestrator import ExtractionOrchestrator
from printform.ocr.ensemble import OcrEnsemble
from printform.ocr.ocr_space_client import OcrSpaceClient
from printform.ocr.strategy import OcrParsingStrategy
from printform.parsing.sanitizer import FieldSanitizer
from printform.vision.factory import VisionExtractorFactory


class OrchestratorFactory:
    """Wires vision providers and the OCR fallback into one orchestrator."""

    @classmethod
    def create(cls, settings: Settings) -> ExtractionOrchestrator:
        strategies: list[ExtractionStrategy] = [
            *VisionExtractorFactory.create_all(settings),
            cls._create_ocr_strategy(settings),
        ]
        return ExtractionOrchestrator(
            strategies=strategies,
            sanitizer=FieldSanitizer(settings.forbidden_characters),
        )

    @classmethod
    def _create_ocr_strategy(cls, settings: Settings) -> OcrParsingStrategy:
        if not settings.ocr_api_key.strip():
            return OcrParsingStrategy(ensemble=None)
        client = OcrSpaceClient(
            api_key=settings.ocr_api_key,
            api_url=settings.ocr_api_url,
            language=settings.ocr_language,
            timeout_seconds=settings.ocr_timeout_seconds,
        )
        return OcrParsingStrategy(ensemble=OcrEnsemble(client, settings.ocr_engines))
