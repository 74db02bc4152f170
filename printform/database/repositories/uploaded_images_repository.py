from typing import Any

from psycopg.rows import dict_row

from printform.database.connection import get_connection
from printform.database.exceptions import ImageNotFoundError, PersistenceError
from printform.database.models import (
    ExtractionRecord,
    ImageSummary,
    ProcessingStatus,
    UploadedImageRecord,
)

_SUMMARY_COLUMNS = """
    ui.id, ui.filename, ui.file_size, ui.mime_type, ui.upload_date,
    ui.processing_status, ui.error_message,
    ed.id AS extraction_id, ed.extracted_text, ed.confidence,
    ed.language, ed.extraction_date
"""


def image_from_row(row: dict[str, Any]) -> UploadedImageRecord:
    return UploadedImageRecord(
        id=row["id"],
        filename=row["filename"],
        file_size=row["file_size"],
        mime_type=row["mime_type"],
        processing_status=row["processing_status"],
        error_message=row.get("error_message"),
        upload_date=row.get("upload_date"),
    )


def _summary_from_row(row: dict[str, Any]) -> ImageSummary:
    extraction = None
    if row.get("extraction_id") is not None:
        extraction = ExtractionRecord(
            id=row["extraction_id"],
            image_id=row["id"],
            extracted_text=row["extracted_text"],
            confidence=row["confidence"],
            language=row["language"],
            extraction_date=row.get("extraction_date"),
        )
    return ImageSummary(image=image_from_row(row), extraction=extraction)


class UploadedImagesRepository:
    """Database operations for the uploaded_images table."""

    def create(self, filename: str, file_size: int, mime_type: str) -> int:
        """Insert a pending image row and return its new identity."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO uploaded_images
                        (filename, file_size, mime_type, processing_status)
                    VALUES (%s, %s, %s, 'pending')
                    RETURNING id
                    """,
                    (filename, file_size, mime_type),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise PersistenceError("INSERT INTO uploaded_images returned no id")
        return int(row[0])

    def mark_processing(self, image_id: int) -> None:
        self._set_status(image_id, "processing", None)

    def mark_completed(self, image_id: int) -> None:
        self._set_status(image_id, "completed", None)

    def mark_failed(self, image_id: int, error: str) -> None:
        self._set_status(image_id, "failed", error)

    def _set_status(
        self, image_id: int, status: ProcessingStatus, error: str | None
    ) -> None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE uploaded_images
                    SET processing_status = %s, error_message = %s
                    WHERE id = %s
                    """,
                    (status, error, image_id),
                )
                if cur.rowcount == 0:
                    raise ImageNotFoundError(f"Image {image_id} not found")
            conn.commit()

    def find_by_id(self, image_id: int) -> UploadedImageRecord:
        """Find an uploaded image by ID.

        Raises:
            ImageNotFoundError: if no image with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, filename, file_size, mime_type, processing_status,
                           error_message, upload_date
                    FROM uploaded_images
                    WHERE id = %s
                    """,
                    (image_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ImageNotFoundError(f"Image {image_id} not found")
        return image_from_row(row)

    def list_with_extractions(self) -> list[ImageSummary]:
        """All images, newest first, each with its extraction record if written."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_SUMMARY_COLUMNS}
                    FROM uploaded_images ui
                    LEFT JOIN extracted_data ed ON ui.id = ed.image_id
                    ORDER BY ui.upload_date DESC, ui.id DESC
                    """
                )
                rows = cur.fetchall()
        return [_summary_from_row(row) for row in rows]

    def search(self, query: str) -> list[ImageSummary]:
        """Images whose extraction text contains the query (case-insensitive)."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_SUMMARY_COLUMNS}
                    FROM uploaded_images ui
                    INNER JOIN extracted_data ed ON ui.id = ed.image_id
                    WHERE ed.extracted_text ILIKE %s
                    ORDER BY ui.upload_date DESC, ui.id DESC
                    """,
                    (f"%{query}%",),
                )
                rows = cur.fetchall()
        return [_summary_from_row(row) for row in rows]

    def delete(self, image_id: int) -> None:
        """Delete an image; its extraction record and forms go with it.

        Raises:
            ImageNotFoundError: if no image with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM uploaded_images WHERE id = %s", (image_id,))
                if cur.rowcount == 0:
                    raise ImageNotFoundError(f"Image {image_id} not found")
            conn.commit()
