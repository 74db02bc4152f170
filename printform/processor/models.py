from dataclasses import dataclass
from typing import Literal

from printform.extraction.models import FieldSet


@dataclass(frozen=True)
class UploadedFile:
    """One file received in an upload request."""

    filename: str
    content: bytes
    media_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class UploadOutcome:
    """Per-file result reported back to the uploader."""

    filename: str
    status: Literal["success", "failed"]
    image_id: int | None = None
    method: str = ""
    provider: str = ""
    extracted_text: str = ""
    field_set: FieldSet | None = None
    error: str = ""

    def to_dict(self) -> dict[str, object]:
        if self.status == "failed":
            return {
                "filename": self.filename,
                "status": self.status,
                "imageId": self.image_id,
                "error": self.error,
            }
        return {
            "filename": self.filename,
            "status": self.status,
            "imageId": self.image_id,
            "extractedText": self.extracted_text,
            "parsedData": self.field_set.to_dict() if self.field_set else None,
            "extractionMethod": self.method,
            "provider": self.provider,
        }
