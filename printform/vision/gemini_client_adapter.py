from typing import Any

import httpx

from printform.extraction.exceptions import ProviderNetworkError, ProviderResponseError
from printform.extraction.models import ImageInput
from printform.vision.client_base import BaseVisionClient

_SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class GeminiVisionClient(BaseVisionClient):
    """Vision client for the Gemini generateContent REST endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout_seconds: float | None = None,
        max_output_tokens: int = 2048,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._max_output_tokens = max_output_tokens
        self._http = http_client or httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
        )

    def generate(
        self,
        *,
        model: str,
        prompt: str,
        image: ImageInput,
        temperature: float,
    ) -> str:
        try:
            response = self._http.post(
                f"/models/{model}:generateContent",
                params={"key": self._api_key},
                json=self._build_payload(prompt, image, temperature),
            )
        except httpx.HTTPError as exc:
            raise ProviderNetworkError(f"Gemini API ({model}) network error: {exc}") from exc

        if response.is_error:
            raise ProviderResponseError(
                f"Gemini API ({model}) failed: {response.status_code} - {response.text}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderResponseError(f"Gemini API ({model}) returned invalid JSON") from exc
        return self._first_text(data, model)

    def _build_payload(
        self, prompt: str, image: ImageInput, temperature: float
    ) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": prompt},
                        {
                            "inline_data": {
                                "mime_type": image.media_type,
                                "data": image.base64,
                            }
                        },
                    ]
                }
            ],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": self._max_output_tokens,
                "topP": 0.95,
                "topK": 40,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_ONLY_HIGH"}
                for category in _SAFETY_CATEGORIES
            ],
        }

    @staticmethod
    def _first_text(data: Any, model: str) -> str:
        try:
            text = data["candidates"][0]["content"]["parts"][0].get("text", "")
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise ProviderResponseError(f"Gemini API ({model}) returned no candidates") from exc
        if not isinstance(text, str):
            raise ProviderResponseError(f"Gemini API ({model}) returned non-text content")
        if not text:
            raise ProviderResponseError(f"Gemini API ({model}) returned empty response")
        return text
