"""Tests for ExtractionOrchestrator fallback behavior."""

from unittest.mock import MagicMock

from printform.extraction.base import ExtractionStrategy
from printform.extraction.exceptions import ProviderNetworkError, ProviderResponseError
from printform.extraction.models import (
    INVALID_FILE_TYPE_MESSAGE,
    METHOD_AI_VISION,
    ImageInput,
    StrategyOutput,
)
from printform.extraction.orchestrator import ExtractionOrchestrator
from printform.ocr.strategy import OcrParsingStrategy
from printform.parsing.sanitizer import FieldSanitizer


class _FakeStrategy(ExtractionStrategy):
    def __init__(
        self,
        name: str,
        output: StrategyOutput | None = None,
        error: Exception | None = None,
        configured: bool = True,
    ) -> None:
        self._name = name
        self._output = output
        self._error = error
        self._configured = configured
        self.calls: list[ImageInput] = []

    @property
    def name(self) -> str:
        return self._name

    def is_configured(self) -> bool:
        return self._configured

    def attempt(self, image: ImageInput) -> StrategyOutput:
        self.calls.append(image)
        if self._error is not None:
            raise self._error
        assert self._output is not None
        return self._output


def _output(provider: str, data: dict[str, object] | None = None) -> StrategyOutput:
    return StrategyOutput(
        data=data if data is not None else {"Class": "5A"},
        raw_text="{}",
        method=METHOD_AI_VISION,
        provider=provider,
        confidence=0.95,
    )


def _make_orchestrator(*strategies: ExtractionStrategy) -> ExtractionOrchestrator:
    return ExtractionOrchestrator(strategies=list(strategies), sanitizer=FieldSanitizer())


class TestMediaTypeCheck:
    def test_non_image_fails_without_calling_strategies(self) -> None:
        strategy = _FakeStrategy("a", output=_output("a"))
        result = _make_orchestrator(strategy).extract(b"%PDF", "application/pdf")
        assert result.ok is False
        assert result.reason == INVALID_FILE_TYPE_MESSAGE
        assert strategy.calls == []

    def test_image_subtype_is_accepted(self, png_bytes: bytes) -> None:
        result = _make_orchestrator(_FakeStrategy("a", output=_output("a"))).extract(
            png_bytes, "image/webp"
        )
        assert result.ok is True


class TestFallback:
    def test_first_success_wins(self, png_bytes: bytes) -> None:
        second = _FakeStrategy("b", output=_output("b"))
        result = _make_orchestrator(_FakeStrategy("a", output=_output("a")), second).extract(
            png_bytes, "image/png"
        )
        assert result.provider == "a"
        assert second.calls == []

    def test_failure_falls_through_to_next(self, png_bytes: bytes) -> None:
        first = _FakeStrategy("a", error=ProviderNetworkError("timeout"))
        result = _make_orchestrator(first, _FakeStrategy("b", output=_output("b"))).extract(
            png_bytes, "image/png"
        )
        assert result.ok is True
        assert result.provider == "b"
        assert len(first.calls) == 1

    def test_unexpected_exception_also_falls_through(self, png_bytes: bytes) -> None:
        first = _FakeStrategy("a", error=RuntimeError("boom"))
        result = _make_orchestrator(first, _FakeStrategy("b", output=_output("b"))).extract(
            png_bytes, "image/png"
        )
        assert result.provider == "b"

    def test_unconfigured_strategy_is_skipped(self, png_bytes: bytes) -> None:
        skipped = _FakeStrategy("a", output=_output("a"), configured=False)
        result = _make_orchestrator(skipped, _FakeStrategy("b", output=_output("b"))).extract(
            png_bytes, "image/png"
        )
        assert skipped.calls == []
        assert result.provider == "b"

    def test_all_failing_reports_last_error(self, png_bytes: bytes) -> None:
        result = _make_orchestrator(
            _FakeStrategy("a", error=ProviderNetworkError("first")),
            _FakeStrategy("b", error=ProviderResponseError("second")),
        ).extract(png_bytes, "image/png")
        assert result.ok is False
        assert result.reason == "second"
        assert result.field_set is None

    def test_missing_ocr_key_is_reported(self, png_bytes: bytes) -> None:
        result = _make_orchestrator(
            _FakeStrategy("a", error=ProviderNetworkError("down")),
            OcrParsingStrategy(ensemble=None),
        ).extract(png_bytes, "image/jpeg")
        assert result.ok is False
        assert "OCR_API_KEY not configured" in (result.reason or "")

    def test_no_strategies_reports_failure(self, png_bytes: bytes) -> None:
        result = _make_orchestrator().extract(png_bytes, "image/png")
        assert result.ok is False
        assert result.reason == "No extraction strategy configured"


class TestSanitizedOutput:
    def test_output_is_sanitized(self, png_bytes: bytes) -> None:
        data = {
            "Class": " #5A# ",
            "No_of_copies": "30",
            "Total_No_of_printed_pages": 0,
            "For_office_use_RICOH": "150",
        }
        result = _make_orchestrator(_FakeStrategy("a", output=_output("a", data))).extract(
            png_bytes, "image/png"
        )
        assert result.field_set is not None
        assert result.field_set.class_name == "5A"
        assert result.field_set.no_of_copies == 30
        assert result.field_set.total_no_of_printed_pages is None
        assert result.field_set.ricoh == "150"
        assert result.field_set.subject == ""

    def test_success_carries_method_and_confidence(self, png_bytes: bytes) -> None:
        result = _make_orchestrator(_FakeStrategy("a", output=_output("a"))).extract(
            png_bytes, "image/png"
        )
        assert result.method == METHOD_AI_VISION
        assert result.confidence == 0.95
        assert result.raw_text == "{}"

    def test_sanitizer_is_used(self, png_bytes: bytes) -> None:
        sanitizer = MagicMock(wraps=FieldSanitizer())
        orchestrator = ExtractionOrchestrator(
            strategies=[_FakeStrategy("a", output=_output("a"))], sanitizer=sanitizer
        )
        orchestrator.extract(png_bytes, "image/png")
        sanitizer.sanitize.assert_called_once_with({"Class": "5A"})
