import httpx
import openai

from printform.extraction.exceptions import ProviderNetworkError, ProviderResponseError
from printform.extraction.models import ImageInput
from printform.vision.client_base import BaseVisionClient


class OpenAIVisionClient(BaseVisionClient):
    """Vision client built on the OpenAI chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float | None = None,
        max_tokens: int = 1000,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        # No SDK retries: a failed call falls through to the next model or provider.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )
        self._max_tokens = max_tokens

    def generate(
        self,
        *,
        model: str,
        prompt: str,
        image: ImageInput,
        temperature: float,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=self._max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {"type": "image_url", "image_url": {"url": image.data_uri}},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ProviderNetworkError(f"OpenAI network error: {exc}") from exc
        except openai.APIError as exc:
            raise ProviderNetworkError(f"OpenAI API error: {exc}") from exc

        if not response.choices:
            raise ProviderResponseError("OpenAI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ProviderResponseError("OpenAI returned empty response")
        return content
