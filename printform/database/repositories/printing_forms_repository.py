from typing import Any

from psycopg.rows import dict_row

from printform.database.connection import get_connection
from printform.database.exceptions import PersistenceError, PrintingFormNotFoundError
from printform.database.models import PrintingFormRecord
from printform.extraction.models import FieldSet

_FORM_COLUMNS = """
    pf.id, pf.image_id, pf.class_name, pf.subject, pf.teacher_in_charge,
    pf.no_of_pages_original_copy, pf.no_of_copies, pf.total_no_of_printed_pages,
    pf.ricoh, pf.toshiba, pf.created_at, ui.filename, ui.upload_date
"""


def _form_from_row(row: dict[str, Any]) -> PrintingFormRecord:
    return PrintingFormRecord(
        id=row["id"],
        image_id=row["image_id"],
        fields=FieldSet(
            class_name=row["class_name"],
            subject=row["subject"],
            teacher_in_charge=row["teacher_in_charge"],
            no_of_pages_original_copy=row["no_of_pages_original_copy"],
            no_of_copies=row["no_of_copies"],
            total_no_of_printed_pages=row["total_no_of_printed_pages"],
            ricoh=row["ricoh"],
            toshiba=row["toshiba"],
        ),
        created_at=row.get("created_at"),
        filename=row.get("filename"),
        upload_date=row.get("upload_date"),
        extracted_text=row.get("extracted_text"),
    )


class PrintingFormsRepository:
    """Database operations for the printing_forms table."""

    def insert(self, image_id: int, fields: FieldSet) -> int:
        """Persist one confirmed FieldSet and return the new form id."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO printing_forms (
                        image_id, class_name, subject, teacher_in_charge,
                        no_of_pages_original_copy, no_of_copies,
                        total_no_of_printed_pages, ricoh, toshiba
                    ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        image_id,
                        fields.class_name,
                        fields.subject,
                        fields.teacher_in_charge,
                        fields.no_of_pages_original_copy,
                        fields.no_of_copies,
                        fields.total_no_of_printed_pages,
                        fields.ricoh,
                        fields.toshiba,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise PersistenceError("INSERT INTO printing_forms returned no id")
        return int(row[0])

    def list_all(self) -> list[PrintingFormRecord]:
        """All confirmed forms, newest first, with their image filename."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_FORM_COLUMNS}
                    FROM printing_forms pf
                    INNER JOIN uploaded_images ui ON pf.image_id = ui.id
                    ORDER BY pf.created_at DESC, pf.id DESC
                    """
                )
                rows = cur.fetchall()
        return [_form_from_row(row) for row in rows]

    def find_by_id(self, form_id: int) -> PrintingFormRecord:
        """Find one form with its image metadata and raw extraction text.

        Raises:
            PrintingFormNotFoundError: if no form with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_FORM_COLUMNS}, ed.extracted_text
                    FROM printing_forms pf
                    INNER JOIN uploaded_images ui ON pf.image_id = ui.id
                    LEFT JOIN extracted_data ed ON pf.image_id = ed.image_id
                    WHERE pf.id = %s
                    """,
                    (form_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise PrintingFormNotFoundError(f"Printing form {form_id} not found")
        return _form_from_row(row)
