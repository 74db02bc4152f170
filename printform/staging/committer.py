"""Commit of human-verified FieldSets into durable printing_forms rows."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from printform.database.repositories.printing_forms_repository import (
    PrintingFormsRepository,
)
from printform.extraction.models import FieldSet
from printform.logging.logger import Log
from printform.parsing.sanitizer import FieldSanitizer
from printform.staging.exceptions import StagedEntryNotFoundError
from printform.staging.store import StagingStore


@dataclass(frozen=True)
class VerifiedRecord:
    """One caller-confirmed FieldSet for an uploaded image."""

    image_id: int
    data: Mapping[str, object] | FieldSet


@dataclass(frozen=True)
class CommitFailure:
    image_id: int
    error: str


@dataclass
class CommitReport:
    """Outcome of a batch commit; rows are written independently."""

    saved: int = 0
    form_ids: list[int] = field(default_factory=list)
    failures: list[CommitFailure] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return self.saved > 0 and bool(self.failures)

    def to_dict(self) -> dict[str, object]:
        return {
            "success": not self.failures,
            "saved": self.saved,
            "partial": self.partial,
            "formIds": list(self.form_ids),
            "failures": [
                {"imageId": failure.image_id, "error": failure.error}
                for failure in self.failures
            ],
        }


class VerificationCommitter:
    """Writes verified records one by one, without cross-row rollback."""

    def __init__(
        self,
        forms_repo: PrintingFormsRepository,
        sanitizer: FieldSanitizer,
    ) -> None:
        self._forms_repo = forms_repo
        self._sanitizer = sanitizer

    def commit(
        self,
        records: Iterable[VerifiedRecord],
        staging: StagingStore | None = None,
    ) -> CommitReport:
        """Persist each record and release it from staging when written.

        A failing row is logged and reported; rows already written stay
        written and later rows are still attempted.
        """
        report = CommitReport()
        for record in records:
            fields = self._sanitizer.sanitize(record.data)
            try:
                form_id = self._forms_repo.insert(record.image_id, fields)
            except Exception as exc:
                Log.exception(f"Failed to save printing form for image {record.image_id}")
                report.failures.append(CommitFailure(record.image_id, str(exc)))
                continue
            report.saved += 1
            report.form_ids.append(form_id)
            if staging is not None:
                self._release(staging, record.image_id)

        Log.info(f"Saved {report.saved} printing forms ({len(report.failures)} failed)")
        return report

    def commit_staged(self, staging: StagingStore) -> CommitReport:
        """Commit every entry currently held in a staging store, as edited."""
        records = [
            VerifiedRecord(image_id=entry.image_id, data=entry.field_set)
            for entry in staging.entries()
        ]
        return self.commit(records, staging=staging)

    @staticmethod
    def _release(staging: StagingStore, image_id: int) -> None:
        try:
            staging.release(image_id)
        except StagedEntryNotFoundError:
            Log.debug(f"Image {image_id} was not staged in session {staging.session_id}")
