import json
from typing import Any

from printform.extraction.exceptions import ProviderResponseError

_decoder = json.JSONDecoder()


def extract_json_object(text: str) -> dict[str, Any]:
    """Return the first JSON object embedded in a model's free-form answer.

    Code fences and surrounding prose are tolerated: decoding starts at each
    opening brace in turn until one yields a complete object.

    Raises:
        ProviderResponseError: if the text holds no JSON object.
    """
    start = text.find("{")
    while start != -1:
        try:
            parsed, _end = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(parsed, dict):
            return parsed
        start = text.find("{", start + 1)
    raise ProviderResponseError("No valid JSON found in AI response")
