from psycopg.rows import dict_row

from printform.database.connection import get_connection
from printform.database.exceptions import ExtractionAlreadyRecordedError
from printform.database.models import ExtractionRecord


class ExtractionRepository:
    """Database operations for the extracted_data table (write-once per image)."""

    def insert(
        self,
        image_id: int,
        extracted_text: str,
        confidence: float,
        language: str = "en",
    ) -> int:
        """Record the raw extraction output for an image.

        Raises:
            ExtractionAlreadyRecordedError: if the image already has a record.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO extracted_data
                        (image_id, extracted_text, confidence, language)
                    VALUES (%s, %s, %s, %s)
                    ON CONFLICT (image_id) DO NOTHING
                    RETURNING id
                    """,
                    (image_id, extracted_text, confidence, language),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise ExtractionAlreadyRecordedError(
                f"Image {image_id} already has an extraction record"
            )
        return int(row[0])

    def find_by_image_id(self, image_id: int) -> ExtractionRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, image_id, extracted_text, confidence, language,
                           extraction_date
                    FROM extracted_data
                    WHERE image_id = %s
                    """,
                    (image_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return ExtractionRecord(
            id=row["id"],
            image_id=row["image_id"],
            extracted_text=row["extracted_text"],
            confidence=row["confidence"],
            language=row["language"],
            extraction_date=row["extraction_date"],
        )
