"""Tests for OrchestratorFactory wiring."""

from unittest.mock import patch

from printform.config.settings import Settings
from printform.extraction.factory import OrchestratorFactory
from printform.ocr.strategy import OcrParsingStrategy
from printform.vision.extractor import VisionExtractor


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {"openai_api_key": "", "gemini_api_key": "", "ocr_api_key": ""}
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


class TestOrchestratorFactory:
    def test_ocr_fallback_is_always_last(self) -> None:
        with patch("printform.vision.factory.GeminiVisionClient"):
            orchestrator = OrchestratorFactory.create(_settings(gemini_api_key="g"))
        strategies = orchestrator.strategies
        assert isinstance(strategies[0], VisionExtractor)
        assert isinstance(strategies[-1], OcrParsingStrategy)
        assert len(strategies) == 2

    def test_without_credentials_only_ocr_remains(self) -> None:
        orchestrator = OrchestratorFactory.create(_settings())
        assert [s.name for s in orchestrator.strategies] == ["ocr_space"]

    def test_blank_ocr_key_builds_unconfigured_strategy(self) -> None:
        orchestrator = OrchestratorFactory.create(_settings())
        ocr = orchestrator.strategies[-1]
        assert isinstance(ocr, OcrParsingStrategy)
        assert ocr._ensemble is None  # noqa: SLF001

    def test_ocr_key_builds_ensemble_with_engines(self) -> None:
        settings = _settings(ocr_api_key="k", ocr_engines=["1"])
        with patch("printform.extraction.factory.OcrEnsemble") as mock_ensemble:
            OrchestratorFactory.create(settings)
        assert mock_ensemble.call_args.args[1] == ["1"]
