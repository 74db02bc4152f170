from printform.config.settings import Settings
from printform.logging.logger import Log
from printform.vision.extractor import VisionExtractor
from printform.vision.gemini_client_adapter import GeminiVisionClient
from printform.vision.openai_client_adapter import OpenAIVisionClient
from printform.vision.prompt_loader import load_prompt


class VisionExtractorFactory:
    """Creates the configured vision extractors in priority order."""

    PROVIDERS = ("openai", "gemini")

    @classmethod
    def create_all(cls, settings: Settings) -> list[VisionExtractor]:
        """Build one extractor per credentialed provider, keeping configured order.

        Providers without a credential are left out so that no network call
        is ever attempted for them.
        """
        extractors: list[VisionExtractor] = []
        for configured in settings.vision_provider_order:
            provider = configured.strip().lower()
            if provider not in cls.PROVIDERS:
                raise ValueError(
                    f"Unknown vision provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
                )
            if not cls._api_key(provider, settings):
                Log.debug(f"Vision provider {provider} has no API key, skipping")
                continue
            extractors.append(cls.create(provider, settings))
        return extractors

    @classmethod
    def create(cls, provider: str, settings: Settings) -> VisionExtractor:
        if provider == "openai":
            return VisionExtractor(
                name="openai",
                client=OpenAIVisionClient(
                    api_key=settings.openai_api_key,
                    timeout_seconds=settings.openai_timeout_seconds,
                    max_tokens=settings.openai_max_tokens,
                ),
                models=settings.openai_model_names,
                prompt=load_prompt("openai_extraction"),
                temperature=settings.vision_temperature,
            )
        if provider == "gemini":
            return VisionExtractor(
                name="gemini",
                client=GeminiVisionClient(
                    api_key=settings.gemini_api_key,
                    base_url=settings.gemini_base_url,
                    timeout_seconds=settings.gemini_timeout_seconds,
                    max_output_tokens=settings.gemini_max_output_tokens,
                ),
                models=settings.gemini_model_names,
                prompt=load_prompt("gemini_extraction"),
                temperature=settings.vision_temperature,
            )
        raise ValueError(
            f"Unknown vision provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )

    @staticmethod
    def _api_key(provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.openai_api_key,
            "gemini": settings.gemini_api_key,
        }
        return key_map.get(provider, "").strip()
