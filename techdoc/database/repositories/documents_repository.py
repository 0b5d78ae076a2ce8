from typing import Any

from psycopg.rows import dict_row

from techdoc.database.connection import get_connection
from techdoc.database.models import DocumentRecord, ProcessingStatus
from techdoc.documents.exceptions import DocumentNotFoundError

_COLUMNS = """
    id, user_id, filename, file_path, file_size, mime_type, access_token,
    processing_status, processing_error, ocr_text, summary, tags,
    download_count, qr_generation_count, last_accessed_at, created_at, updated_at
"""


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DocumentsRepository:
    """Database operations for the documents table."""

    def insert(self, document: DocumentRecord) -> None:
        """Create a document row in the 'uploaded' state."""
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO documents
                (id, user_id, filename, file_path, file_size, mime_type,
                 access_token, processing_status, tags, created_at, updated_at)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s,
                        COALESCE(%s, NOW()), COALESCE(%s, NOW()))
                """,
                (
                    document.id,
                    document.user_id,
                    document.filename,
                    document.file_path,
                    document.file_size,
                    document.mime_type,
                    document.access_token,
                    document.processing_status.value,
                    list(document.tags),
                    document.created_at,
                    document.updated_at,
                ),
            )
            conn.commit()

    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        return self._find_one("id = %s", (document_id,))

    def find_by_access_token(self, access_token: str) -> DocumentRecord | None:
        return self._find_one("access_token = %s", (access_token,))

    def list_by_user(self, user_id: str) -> list[DocumentRecord]:
        """Return a user's documents, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE user_id = %s "
                    "ORDER BY created_at DESC",
                    (user_id,),
                )
                rows = cur.fetchall()
        return [self._row_to_record(row) for row in rows]

    def list_all(self) -> list[DocumentRecord]:
        """Return every document, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM documents ORDER BY created_at DESC")
                rows = cur.fetchall()
        return [self._row_to_record(row) for row in rows]

    def mark_processing(self, document_id: str) -> None:
        """Move a document into the 'processing' state.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s, updated_at = NOW()
                    WHERE id = %s
                    """,
                    (ProcessingStatus.PROCESSING.value, document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def complete_processing(
        self,
        document_id: str,
        *,
        status: ProcessingStatus,
        ocr_text: str | None,
        summary: str,
        tags: list[str],
        error: str | None = None,
    ) -> None:
        """Persist the terminal processing state in a single statement.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        if not status.is_terminal:
            raise ValueError(f"'{status.value}' is not a terminal processing status")
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE documents
                    SET processing_status = %s,
                        processing_error = %s,
                        ocr_text = %s,
                        summary = %s,
                        tags = %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (status.value, error, ocr_text, summary, list(tags), document_id),
                )
                if cur.rowcount == 0:
                    raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()

    def record_download(self, document_id: str) -> None:
        """Increment the download counter and refresh last_accessed_at."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE documents
                SET download_count = download_count + 1,
                    last_accessed_at = NOW()
                WHERE id = %s
                """,
                (document_id,),
            )
            conn.commit()

    def increment_qr_count(self, document_id: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE documents
                SET qr_generation_count = qr_generation_count + 1
                WHERE id = %s
                """,
                (document_id,),
            )
            conn.commit()

    def delete(self, document_id: str, user_id: str) -> bool:
        """Delete a document owned by user_id. Returns False when nothing matched."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "DELETE FROM documents WHERE id = %s AND user_id = %s",
                    (document_id, user_id),
                )
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def search(
        self,
        terms: list[str],
        *,
        user_id: str | None,
        limit: int,
        offset: int,
    ) -> tuple[list[DocumentRecord], int]:
        """Find documents where every term matches filename, summary, a tag or OCR text.

        A user_id of None searches across all owners.

        Returns:
            The requested page of records and the total match count.
        """
        clauses: list[str] = []
        params: list[Any] = []
        if user_id is not None:
            clauses.append("user_id = %s")
            params.append(user_id)
        for term in terms:
            pattern = f"%{_escape_like(term.lower())}%"
            clauses.append(
                """(
                    LOWER(filename) LIKE %s ESCAPE '\\'
                    OR LOWER(COALESCE(summary, '')) LIKE %s ESCAPE '\\'
                    OR EXISTS (
                        SELECT 1 FROM unnest(tags) AS tag
                        WHERE LOWER(tag) LIKE %s ESCAPE '\\'
                    )
                    OR LOWER(COALESCE(ocr_text, '')) LIKE %s ESCAPE '\\'
                )"""
            )
            params.extend([pattern] * 4)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT COUNT(*) AS total FROM documents {where}", params)
                count_row = cur.fetchone()
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents {where} "
                    "ORDER BY created_at DESC LIMIT %s OFFSET %s",
                    [*params, limit, offset],
                )
                rows = cur.fetchall()

        total = int(count_row["total"]) if count_row is not None else 0
        return [self._row_to_record(row) for row in rows], total

    def _find_one(self, condition: str, params: tuple[Any, ...]) -> DocumentRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM documents WHERE {condition}", params)
                row = cur.fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    @staticmethod
    def _row_to_record(row: dict[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            id=row["id"],
            user_id=row["user_id"],
            filename=row["filename"],
            file_path=row["file_path"],
            file_size=row["file_size"],
            mime_type=row["mime_type"],
            access_token=row["access_token"],
            processing_status=ProcessingStatus(row["processing_status"]),
            processing_error=row["processing_error"],
            ocr_text=row["ocr_text"],
            summary=row["summary"],
            tags=list(row["tags"] or []),
            download_count=row["download_count"],
            qr_generation_count=row["qr_generation_count"],
            last_accessed_at=row["last_accessed_at"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
