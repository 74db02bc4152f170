import base64
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

METHOD_AI_VISION = "AI Vision"
METHOD_OCR_PARSING = "OCR + Parsing"

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only images are allowed."

# Attribute name -> key used by prompts, API payloads and CSV exports.
FIELD_KEYS: dict[str, str] = {
    "class_name": "Class",
    "subject": "Subject",
    "teacher_in_charge": "Teacher_in_charge",
    "no_of_pages_original_copy": "No_of_pages_original_copy",
    "no_of_copies": "No_of_copies",
    "total_no_of_printed_pages": "Total_No_of_printed_pages",
    "ricoh": "Ricoh",
    "toshiba": "Toshiba",
}

TEXT_FIELDS = ("class_name", "subject", "teacher_in_charge", "ricoh", "toshiba")
COUNT_FIELDS = (
    "no_of_pages_original_copy",
    "no_of_copies",
    "total_no_of_printed_pages",
)


def is_image_media_type(media_type: str | None) -> bool:
    """Return True when the declared media type names an image."""
    return bool(media_type) and media_type.strip().lower().startswith("image/")


@dataclass
class FieldSet:
    """The 8 data points captured from one printing request form."""

    class_name: str = ""
    subject: str = ""
    teacher_in_charge: str = ""
    no_of_pages_original_copy: int | None = None
    no_of_copies: int | None = None
    total_no_of_printed_pages: int | None = None
    ricoh: str = ""
    toshiba: str = ""

    def to_dict(self) -> dict[str, object]:
        """Serialize using the form's schema keys."""
        return {key: getattr(self, attr) for attr, key in FIELD_KEYS.items()}


@dataclass(frozen=True)
class ImageInput:
    """Image bytes plus the media type declared by the uploader."""

    content: bytes
    media_type: str

    @property
    def base64(self) -> str:
        return base64.b64encode(self.content).decode("ascii")

    @property
    def data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.base64}"


@dataclass(frozen=True)
class StrategyOutput:
    """What one extraction strategy produced before sanitization."""

    data: Mapping[str, object]
    raw_text: str
    method: str
    provider: str
    confidence: float


@dataclass(frozen=True)
class ExtractionResult:
    """Normalized orchestrator outcome, independent of the strategy used."""

    status: Literal["success", "failed"]
    field_set: FieldSet | None = None
    raw_text: str = ""
    method: str = ""
    provider: str = ""
    confidence: float = 0.0
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def failed(cls, reason: str) -> "ExtractionResult":
        return cls(status="failed", reason=reason)
