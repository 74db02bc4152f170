from collections.abc import Iterable

from printform.database.repositories.extraction_repository import ExtractionRepository
from printform.database.repositories.uploaded_images_repository import (
    UploadedImagesRepository,
)
from printform.extraction.models import INVALID_FILE_TYPE_MESSAGE, is_image_media_type
from printform.extraction.orchestrator import ExtractionOrchestrator
from printform.logging.logger import Log
from printform.processor.models import UploadedFile, UploadOutcome
from printform.staging.models import PendingVerification
from printform.staging.store import StagingStore

EXTRACTION_LANGUAGE = "en"


class UploadProcessor:
    """Runs the upload flow for a batch of files, one file at a time.

    Per file: record image -> extract -> write extraction record ->
    stage for verification. Each file's failure is recorded on its own
    image row and never stops the rest of the batch.
    """

    def __init__(
        self,
        orchestrator: ExtractionOrchestrator,
        images_repo: UploadedImagesRepository,
        extractions_repo: ExtractionRepository,
    ) -> None:
        self._orchestrator = orchestrator
        self._images_repo = images_repo
        self._extractions_repo = extractions_repo

    def process_batch(
        self, files: Iterable[UploadedFile], staging: StagingStore
    ) -> list[UploadOutcome]:
        outcomes: list[UploadOutcome] = []
        for file in files:
            try:
                outcomes.append(self.process_file(file, staging))
            except Exception as exc:
                Log.exception(f"Unexpected failure processing {file.filename}")
                outcomes.append(
                    UploadOutcome(filename=file.filename, status="failed", error=str(exc))
                )
        return outcomes

    def process_file(self, file: UploadedFile, staging: StagingStore) -> UploadOutcome:
        if not is_image_media_type(file.media_type):
            Log.warning(f"Skipping {file.filename}: media type {file.media_type!r}")
            return UploadOutcome(
                filename=file.filename,
                status="failed",
                error=INVALID_FILE_TYPE_MESSAGE,
            )

        image_id = self._images_repo.create(file.filename, file.size, file.media_type)
        Log.info(f"Processing {file.filename} as image {image_id} ({file.size} bytes)")
        try:
            return self._extract_and_stage(image_id, file, staging)
        except Exception as exc:
            Log.exception(f"Image {image_id} failed after extraction")
            self._images_repo.mark_failed(image_id, str(exc))
            return UploadOutcome(
                filename=file.filename,
                status="failed",
                image_id=image_id,
                error=str(exc),
            )

    def _extract_and_stage(
        self, image_id: int, file: UploadedFile, staging: StagingStore
    ) -> UploadOutcome:
        self._images_repo.mark_processing(image_id)
        result = self._orchestrator.extract(file.content, file.media_type)

        if not result.ok or result.field_set is None:
            self._images_repo.mark_failed(image_id, result.reason)
            Log.error(f"Image {image_id} extraction failed: {result.reason}")
            return UploadOutcome(
                filename=file.filename,
                status="failed",
                image_id=image_id,
                error=result.reason,
            )

        self._extractions_repo.insert(
            image_id,
            result.raw_text,
            confidence=result.confidence,
            language=EXTRACTION_LANGUAGE,
        )
        self._images_repo.mark_completed(image_id)
        staging.stage(
            PendingVerification(
                image_id=image_id,
                filename=file.filename,
                method=result.method,
                provider=result.provider,
                field_set=result.field_set,
                raw_text=result.raw_text,
            )
        )
        Log.info(f"Image {image_id} extracted via {result.method}, awaiting verification")
        return UploadOutcome(
            filename=file.filename,
            status="success",
            image_id=image_id,
            method=result.method,
            provider=result.provider,
            extracted_text=result.raw_text,
            field_set=result.field_set,
        )
