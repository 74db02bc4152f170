"""Operations exposed to the HTTP layer: upload, catalogue, verification."""

import csv
import io
from collections.abc import Iterable
from dataclasses import dataclass

from printform.config.settings import Settings
from printform.database.models import ImageSummary, PrintingFormRecord
from printform.database.repositories.extraction_repository import ExtractionRepository
from printform.database.repositories.printing_forms_repository import (
    PrintingFormsRepository,
)
from printform.database.repositories.uploaded_images_repository import (
    UploadedImagesRepository,
)
from printform.extraction.factory import OrchestratorFactory
from printform.logging.logger import Log
from printform.parsing.sanitizer import FieldSanitizer
from printform.processor.models import UploadedFile, UploadOutcome
from printform.processor.processor import UploadProcessor
from printform.staging.committer import CommitReport, VerificationCommitter, VerifiedRecord
from printform.staging.store import StagingRegistry, StagingStore

CSV_HEADERS = (
    "ID",
    "Filename",
    "Upload Date",
    "Class",
    "Subject",
    "Teacher-in-charge",
    "No. of Pages (Original)",
    "No. of Copies",
    "Total Printed Pages",
    "Ricoh",
    "Toshiba",
)


@dataclass
class UploadBatchResult:
    outcomes: list[UploadOutcome]

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": True,
            "processed": self.processed,
            "results": [outcome.to_dict() for outcome in self.outcomes],
        }


class FormService:
    """Facade over the upload processor, repositories and committer."""

    def __init__(
        self,
        processor: UploadProcessor,
        images_repo: UploadedImagesRepository,
        extractions_repo: ExtractionRepository,
        forms_repo: PrintingFormsRepository,
        committer: VerificationCommitter,
        staging_registry: StagingRegistry,
    ) -> None:
        self._processor = processor
        self._images_repo = images_repo
        self._extractions_repo = extractions_repo
        self._forms_repo = forms_repo
        self._committer = committer
        self._staging_registry = staging_registry

    def open_staging(self, session_id: str | None = None) -> StagingStore:
        """Return the staging store of a verification session, creating it if needed."""
        return self._staging_registry.open(session_id)

    def discard_staging(self, session_id: str) -> int:
        """Drop every staged entry of a session and end the session."""
        store = self._staging_registry.get(session_id)
        count = store.discard_all()
        self._staging_registry.close(session_id)
        return count

    def upload(self, files: Iterable[UploadedFile], staging: StagingStore) -> UploadBatchResult:
        """Extract every file in the batch and stage successes in ``staging``."""
        batch = list(files)
        if not batch:
            raise ValueError("No files uploaded")
        outcomes = self._processor.process_batch(batch, staging)
        return UploadBatchResult(outcomes=outcomes)

    def list_images(self) -> list[ImageSummary]:
        return self._images_repo.list_with_extractions()

    def search_images(self, query: str) -> list[ImageSummary]:
        if not query or not query.strip():
            raise ValueError("Search query required")
        return self._images_repo.search(query.strip())

    def get_image(self, image_id: int) -> ImageSummary:
        image = self._images_repo.find_by_id(image_id)
        extraction = self._extractions_repo.find_by_image_id(image_id)
        return ImageSummary(image=image, extraction=extraction)

    def delete_image(self, image_id: int) -> None:
        self._images_repo.delete(image_id)
        Log.info(f"Deleted image {image_id}")

    def save_verified(
        self,
        records: Iterable[VerifiedRecord],
        staging: StagingStore | None = None,
    ) -> CommitReport:
        """Persist caller-confirmed FieldSets; see CommitReport for partial results."""
        return self._committer.commit(records, staging=staging)

    def save_staged(self, staging: StagingStore) -> CommitReport:
        return self._committer.commit_staged(staging)

    def list_printing_forms(self) -> list[PrintingFormRecord]:
        return self._forms_repo.list_all()

    def get_printing_form(self, form_id: int) -> PrintingFormRecord:
        return self._forms_repo.find_by_id(form_id)

    def export_printing_forms_csv(self) -> str:
        """Render all confirmed forms as CSV text."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_HEADERS)
        for form in self._forms_repo.list_all():
            fields = form.fields
            writer.writerow(
                [
                    form.id,
                    form.filename or "",
                    form.upload_date.isoformat() if form.upload_date else "",
                    fields.class_name,
                    fields.subject,
                    fields.teacher_in_charge,
                    _blank_if_none(fields.no_of_pages_original_copy),
                    _blank_if_none(fields.no_of_copies),
                    _blank_if_none(fields.total_no_of_printed_pages),
                    fields.ricoh,
                    fields.toshiba,
                ]
            )
        return buffer.getvalue()


def _blank_if_none(value: int | None) -> object:
    return "" if value is None else value


def build_service(settings: Settings) -> FormService:
    """Build a FormService with all required adapters."""
    images_repo = UploadedImagesRepository()
    extractions_repo = ExtractionRepository()
    forms_repo = PrintingFormsRepository()
    processor = UploadProcessor(
        orchestrator=OrchestratorFactory.create(settings),
        images_repo=images_repo,
        extractions_repo=extractions_repo,
    )
    committer = VerificationCommitter(
        forms_repo=forms_repo,
        sanitizer=FieldSanitizer(settings.forbidden_characters),
    )
    return FormService(
        processor=processor,
        images_repo=images_repo,
        extractions_repo=extractions_repo,
        forms_repo=forms_repo,
        committer=committer,
        staging_registry=StagingRegistry(settings.staging_ttl_seconds),
    )
