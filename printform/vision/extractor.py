"""Vision-model extraction strategy with a per-provider model fallback chain."""

import json

from printform.extraction.base import ExtractionStrategy
from printform.extraction.exceptions import ExtractionError
from printform.extraction.models import METHOD_AI_VISION, ImageInput, StrategyOutput
from printform.logging.logger import Log
from printform.vision.client_base import BaseVisionClient
from printform.vision.json_extractor import extract_json_object

AI_VISION_CONFIDENCE = 0.95


class VisionExtractor(ExtractionStrategy):
    """Asks one hosted vision-language provider for the form fields as JSON.

    Models are tried in order; a failing model falls through to the next
    one and the last error is raised once the list is exhausted.
    """

    def __init__(
        self,
        *,
        name: str,
        client: BaseVisionClient,
        models: list[str],
        prompt: str,
        temperature: float = 0.1,
    ) -> None:
        if not models:
            raise ValueError(f"Vision provider '{name}' needs at least one model")
        self._name = name
        self._client = client
        self._models = list(models)
        self._prompt = prompt
        self._temperature = max(0.0, min(0.2, temperature))

    @property
    def name(self) -> str:
        return self._name

    @property
    def models(self) -> list[str]:
        return list(self._models)

    def attempt(self, image: ImageInput) -> StrategyOutput:
        last_error: ExtractionError | None = None
        for model in self._models:
            try:
                data = self._extract_with_model(model, image)
            except ExtractionError as exc:
                Log.warning(f"{self._name} model {model} failed: {exc}")
                last_error = exc
                continue
            Log.info(f"Successfully extracted data using {self._name} model {model}")
            return StrategyOutput(
                data=data,
                raw_text=json.dumps(data, indent=2, ensure_ascii=False),
                method=METHOD_AI_VISION,
                provider=self._name,
                confidence=AI_VISION_CONFIDENCE,
            )
        if last_error is None:
            raise ExtractionError(f"No models configured for {self._name}")
        raise last_error

    def _extract_with_model(self, model: str, image: ImageInput) -> dict[str, object]:
        raw = self._client.generate(
            model=model,
            prompt=self._prompt,
            image=image,
            temperature=self._temperature,
        )
        Log.debug(f"{self._name} model {model} raw response:\n{raw}")
        return extract_json_object(raw)
