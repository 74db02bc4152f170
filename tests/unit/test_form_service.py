"""Tests for FormService."""

import csv
import io
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from printform.api.service import CSV_HEADERS, FormService
from printform.database.models import ExtractionRecord, PrintingFormRecord, UploadedImageRecord
from printform.extraction.models import FieldSet
from printform.processor.models import UploadedFile, UploadOutcome
from printform.staging.committer import VerifiedRecord
from printform.staging.exceptions import StagingSessionNotFoundError
from printform.staging.store import StagingRegistry


def _make_service(**overrides: MagicMock) -> tuple[FormService, dict[str, MagicMock]]:
    mocks = {
        "processor": MagicMock(),
        "images_repo": MagicMock(),
        "extractions_repo": MagicMock(),
        "forms_repo": MagicMock(),
        "committer": MagicMock(),
    }
    mocks.update(overrides)
    service = FormService(staging_registry=StagingRegistry(ttl_seconds=60), **mocks)
    return service, mocks


def _form(form_id: int, **fields: object) -> PrintingFormRecord:
    return PrintingFormRecord(
        id=form_id,
        image_id=form_id + 100,
        fields=FieldSet(**fields),  # type: ignore[arg-type]
        filename=f"form-{form_id}.jpg",
        upload_date=datetime(2025, 11, 15, 9, 30, tzinfo=timezone.utc),
    )


class TestUpload:
    def test_empty_batch_is_rejected(self) -> None:
        service, _ = _make_service()
        with pytest.raises(ValueError, match="No files uploaded"):
            service.upload([], service.open_staging())

    def test_reports_processed_count(self) -> None:
        service, mocks = _make_service()
        mocks["processor"].process_batch.return_value = [
            UploadOutcome(filename="a.jpg", status="success", image_id=1),
            UploadOutcome(filename="b.pdf", status="failed", error="Invalid file type."),
        ]
        staging = service.open_staging()
        files = [
            UploadedFile("a.jpg", b"x", "image/jpeg"),
            UploadedFile("b.pdf", b"y", "application/pdf"),
        ]

        result = service.upload(files, staging)

        mocks["processor"].process_batch.assert_called_once_with(files, staging)
        payload = result.to_dict()
        assert payload["processed"] == 2
        assert payload["success"] is True


class TestCatalogue:
    def test_search_requires_query(self) -> None:
        service, _ = _make_service()
        with pytest.raises(ValueError, match="Search query required"):
            service.search_images("   ")

    def test_search_strips_query(self) -> None:
        service, mocks = _make_service()
        service.search_images("  maths ")
        mocks["images_repo"].search.assert_called_once_with("maths")

    def test_get_image_joins_extraction(self) -> None:
        service, mocks = _make_service()
        image = UploadedImageRecord(
            id=3, filename="f.png", file_size=10, mime_type="image/png", processing_status="completed"
        )
        extraction = ExtractionRecord(
            id=9, image_id=3, extracted_text="Class: 5A", confidence=0.95, language="en"
        )
        mocks["images_repo"].find_by_id.return_value = image
        mocks["extractions_repo"].find_by_image_id.return_value = extraction

        summary = service.get_image(3)

        assert summary.image is image
        assert summary.extraction is extraction

    def test_delete_image_delegates(self) -> None:
        service, mocks = _make_service()
        service.delete_image(5)
        mocks["images_repo"].delete.assert_called_once_with(5)


class TestStagingSessions:
    def test_open_staging_reuses_session(self) -> None:
        service, _ = _make_service()
        store = service.open_staging("s1")
        assert service.open_staging("s1") is store

    def test_discard_staging_ends_session(self) -> None:
        service, mocks = _make_service()
        store = service.open_staging("s1")
        assert service.discard_staging("s1") == 0
        with pytest.raises(StagingSessionNotFoundError):
            service.discard_staging("s1")
        mocks["forms_repo"].insert.assert_not_called()
        assert store.entries() == []

    def test_save_verified_delegates_to_committer(self) -> None:
        service, mocks = _make_service()
        records = [VerifiedRecord(1, {"Class": "5A"})]
        service.save_verified(records)
        mocks["committer"].commit.assert_called_once_with(records, staging=None)

    def test_save_staged_delegates_to_committer(self) -> None:
        service, mocks = _make_service()
        staging = service.open_staging()
        service.save_staged(staging)
        mocks["committer"].commit_staged.assert_called_once_with(staging)


class TestExportCsv:
    def test_header_only_when_empty(self) -> None:
        service, mocks = _make_service()
        mocks["forms_repo"].list_all.return_value = []
        rows = list(csv.reader(io.StringIO(service.export_printing_forms_csv())))
        assert rows == [list(CSV_HEADERS)]

    def test_renders_rows_with_blank_counts(self) -> None:
        service, mocks = _make_service()
        mocks["forms_repo"].list_all.return_value = [
            _form(1, class_name="5A", subject="Math", no_of_copies=30, ricoh="150"),
        ]
        rows = list(csv.reader(io.StringIO(service.export_printing_forms_csv())))
        assert rows[1] == [
            "1",
            "form-1.jpg",
            "2025-11-15T09:30:00+00:00",
            "5A",
            "Math",
            "",
            "",
            "30",
            "",
            "150",
            "",
        ]

    def test_values_with_commas_are_quoted(self) -> None:
        service, mocks = _make_service()
        mocks["forms_repo"].list_all.return_value = [_form(2, teacher_in_charge="Lee, A.")]
        text = service.export_printing_forms_csv()
        assert '"Lee, A."' in text
