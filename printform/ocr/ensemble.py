"""OCR engine ensemble: run every engine, score each text, keep the best."""

from collections.abc import Sequence
from dataclasses import dataclass

from printform.extraction.exceptions import ExtractionError, OcrError
from printform.extraction.models import ImageInput
from printform.logging.logger import Log
from printform.ocr.ocr_space_client import OcrSpaceClient

DOMAIN_KEYWORDS: tuple[str, ...] = (
    "date",
    "class",
    "teacher",
    "subject",
    "received",
    "submission",
    "collection",
)

NO_TEXT_GUIDANCE = (
    "No text detected in the image. Try:\n"
    "- Higher resolution scan (300+ DPI)\n"
    "- Better lighting\n"
    "- Straighten the image\n"
    "- Increase contrast"
)


@dataclass(frozen=True)
class OcrResult:
    """Winning engine output."""

    text: str
    confidence: float
    engine: str
    empty: bool = False


def score_confidence(text: str, keywords: Sequence[str] = DOMAIN_KEYWORDS) -> float:
    """Heuristic quality score: length share plus up to 0.5 for keyword coverage."""
    if not text.strip():
        return 0.0
    score = min(len(text) / 100, 1.0)
    lowered = text.lower()
    found = sum(1 for keyword in keywords if keyword in lowered)
    return score + (found / len(keywords)) * 0.5


class OcrEnsemble:
    """Calls each configured engine independently and keeps the best-scoring text.

    Ties keep the engine evaluated first. An engine that fails is logged and
    ignored; the ensemble only raises when no engine answered at all. Empty
    text from every engine is a successful result carrying guidance.
    """

    def __init__(self, client: OcrSpaceClient, engines: Sequence[str]) -> None:
        if not engines:
            raise ValueError("OCR ensemble needs at least one engine")
        self._client = client
        self._engines = list(engines)

    def run(self, image: ImageInput) -> OcrResult:
        best: OcrResult | None = None
        last_error: ExtractionError | None = None

        for engine in self._engines:
            try:
                text = self._client.recognize(image, engine)
            except ExtractionError as exc:
                Log.warning(f"OCR engine {engine} failed: {exc}")
                last_error = exc
                continue
            confidence = score_confidence(text)
            Log.debug(f"OCR engine {engine}: {len(text)} chars, confidence {confidence:.2f}")
            if best is None or confidence > best.confidence:
                best = OcrResult(text=text, confidence=confidence, engine=engine)

        if best is None:
            raise OcrError(f"OCR processing failed: {last_error}") from last_error

        if not best.text.strip():
            Log.warning("No text detected by any OCR engine")
            return OcrResult(text=NO_TEXT_GUIDANCE, confidence=0.0, engine=best.engine, empty=True)

        return OcrResult(text=best.text.strip(), confidence=best.confidence, engine=best.engine)
