from dataclasses import dataclass, field
from datetime import datetime, timezone

from printform.extraction.models import FieldSet


@dataclass
class PendingVerification:
    """An extraction result waiting for a human to confirm or discard it."""

    image_id: int
    filename: str
    method: str
    field_set: FieldSet
    provider: str = ""
    raw_text: str = ""
    staged_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, object]:
        return {
            "imageId": self.image_id,
            "filename": self.filename,
            "extractionMethod": self.method,
            "provider": self.provider,
            "data": self.field_set.to_dict(),
        }
