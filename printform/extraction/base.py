from abc import ABC, abstractmethod

from printform.extraction.models import ImageInput, StrategyOutput


class ExtractionStrategy(ABC):
    """Contract for one way of turning an image into form data."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short provider identifier used in logs and result tags."""

    def is_configured(self) -> bool:
        """Return False to have the orchestrator skip this strategy silently."""
        return True

    @abstractmethod
    def attempt(self, image: ImageInput) -> StrategyOutput:
        """Extract raw form data from one image.

        Args:
            image: Image bytes and declared media type.

        Returns:
            StrategyOutput carrying the unsanitized field mapping.

        Raises:
            ExtractionError: on any failure; the orchestrator falls through
                to the next strategy.
        """
