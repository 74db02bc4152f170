from typing import Any

import httpx

from printform.extraction.exceptions import OcrError, ProviderNetworkError
from printform.extraction.models import ImageInput


class OcrSpaceClient:
    """Client for the OCR.space parse/image endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        api_url: str,
        language: str = "eng",
        timeout_seconds: float | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._api_url = api_url
        self._language = language
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def recognize(self, image: ImageInput, engine: str) -> str:
        """Run one OCR engine over the image and return its parsed text.

        Raises:
            ProviderNetworkError: on transport failures.
            OcrError: on non-2xx answers or a processing-error flag.
        """
        try:
            response = self._http.post(
                self._api_url,
                headers={"apikey": self._api_key},
                data=self._build_form(image, engine),
            )
        except httpx.HTTPError as exc:
            raise ProviderNetworkError(f"OCR API network error: {exc}") from exc

        if response.is_error:
            raise OcrError(
                f"OCR API request failed: {response.status_code} {response.reason_phrase}"
            )

        try:
            payload: dict[str, Any] = response.json()
        except ValueError as exc:
            raise OcrError("OCR API returned invalid JSON") from exc

        if payload.get("IsErroredOnProcessing"):
            raise OcrError(self._error_message(payload))

        results = payload.get("ParsedResults") or []
        if not results:
            return ""
        return results[0].get("ParsedText") or ""

    def _build_form(self, image: ImageInput, engine: str) -> dict[str, str]:
        return {
            "base64Image": image.data_uri,
            "language": self._language,
            "isOverlayRequired": "false",
            "detectOrientation": "true",
            "scale": "true",
            "OCREngine": engine,
            "isTable": "true",
            "detectCheckbox": "true",
        }

    @staticmethod
    def _error_message(payload: dict[str, Any]) -> str:
        messages = payload.get("ErrorMessage")
        if isinstance(messages, list) and messages:
            return str(messages[0])
        if isinstance(messages, str) and messages:
            return messages
        return "OCR processing failed"
