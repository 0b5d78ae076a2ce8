import os
import secrets
import uuid
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from techdoc.config.settings import Settings
from techdoc.database.connection import close_pool, get_connection, init_pool
from techdoc.database.models import DocumentRecord, ProcessingStatus
from techdoc.database.repositories.documents_repository import DocumentsRepository

_SCHEMA_PATH = Path(__file__).resolve().parents[2] / "techdoc" / "database" / "schema.sql"


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "techdoc_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(_SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
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
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Collect document ids to delete (with their activity rows) after the test."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for document_id in cleanup:
                cur.execute("DELETE FROM activity_logs WHERE document_id = %s", (document_id,))
                cur.execute("DELETE FROM documents WHERE id = %s", (document_id,))
        conn.commit()


@pytest.fixture
def test_user_id() -> str:
    return f"it-user-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def make_document(
    integration_cleanup: list[str],
    test_user_id: str,
) -> Any:
    """Factory inserting a document row in the 'uploaded' state."""
    repo = DocumentsRepository()

    def _make(
        filename: str = "manual.pdf",
        user_id: str | None = None,
    ) -> DocumentRecord:
        document = DocumentRecord(
            id=str(uuid.uuid4()),
            user_id=user_id or test_user_id,
            filename=filename,
            file_path=f"/tmp/{uuid.uuid4().hex}.pdf",
            file_size=1024,
            mime_type="application/pdf",
            access_token=secrets.token_urlsafe(32),
            processing_status=ProcessingStatus.UPLOADED,
        )
        repo.insert(document)
        integration_cleanup.append(document.id)
        return document

    return _make
