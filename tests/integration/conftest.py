import os
from collections.abc import Generator
from importlib import resources
from typing import Any

import psycopg
import pytest

from printform.config.settings import Settings
from printform.database.connection import close_pool, get_connection, init_pool


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "printform_test")
    return Settings()


def _apply_schema() -> None:
    ddl = resources.files("printform.database").joinpath("schema.sql").read_text()
    with get_connection() as conn:
        conn.execute(ddl)
        conn.commit()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        _apply_schema()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a scratch database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Image ids to delete after the test; dependent rows go by cascade."""
    image_ids: list[int] = []
    yield image_ids
    if not image_ids:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM uploaded_images WHERE id = ANY(%s)", (image_ids,))
        conn.commit()


@pytest.fixture
def seed_image(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[int],
) -> int:
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO uploaded_images (filename, file_size, mime_type)
            VALUES (%s, %s, %s)
            RETURNING id
            """,
            ("seed-form.jpg", 1024, "image/jpeg"),
        )
        row = cur.fetchone()
        assert row is not None
        image_id = row[0]
    db_conn.commit()
    integration_cleanup.append(image_id)
    return image_id
