from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from printform.extraction.models import FieldSet

ProcessingStatus = Literal["pending", "processing", "completed", "failed"]


@dataclass
class UploadedImageRecord:
    """Represents a row from the uploaded_images table."""

    id: int
    filename: str
    file_size: int
    mime_type: str
    processing_status: ProcessingStatus
    error_message: str | None = None
    upload_date: datetime | None = None


@dataclass
class ExtractionRecord:
    """Represents a row from the extracted_data table."""

    id: int
    image_id: int
    extracted_text: str
    confidence: float
    language: str
    extraction_date: datetime | None = None


@dataclass
class ImageSummary:
    """An uploaded image joined with its extraction record, if any."""

    image: UploadedImageRecord
    extraction: ExtractionRecord | None = None


@dataclass
class PrintingFormRecord:
    """Represents a row from the printing_forms table plus joined image columns."""

    id: int
    image_id: int
    fields: FieldSet
    created_at: datetime | None = None
    filename: str | None = None
    upload_date: datetime | None = None
    extracted_text: str | None = None
