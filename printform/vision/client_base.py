from abc import ABC, abstractmethod

from printform.extraction.models import ImageInput


class BaseVisionClient(ABC):
    """Contract for provider-specific vision-language model clients."""

    @abstractmethod
    def generate(
        self,
        *,
        model: str,
        prompt: str,
        image: ImageInput,
        temperature: float,
    ) -> str:
        """Return the provider's free-form text answer for prompt + image."""
