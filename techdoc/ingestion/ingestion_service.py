import secrets
import uuid
from datetime import UTC, datetime

from techdoc.activity.activity_logger import ActivityLogger
from techdoc.activity.models import ActionType
from techdoc.database.models import DocumentRecord, ProcessingStatus
from techdoc.database.repositories.documents_repository import DocumentsRepository
from techdoc.documents.exceptions import DocumentValidationError
from techdoc.documents.models import DocumentResponse
from techdoc.documents.presenter import DocumentPresenter
from techdoc.logging.logger import Log
from techdoc.processor.exceptions import QueueFullError
from techdoc.processor.models import ProcessingJob
from techdoc.processor.processor import Processor
from techdoc.storage.file_storage import FileStorage
from techdoc.worker.worker import WorkerPool

DEFAULT_FILENAME = "document"
DEFAULT_MEDIA_TYPE = "application/octet-stream"


def new_access_token() -> str:
    """Unguessable token for download links, independent of the document id."""
    return secrets.token_urlsafe(32)


class IngestionService:
    """Accepts an upload, records it, and hands it to the worker pool."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        storage: FileStorage,
        presenter: DocumentPresenter,
        activity_logger: ActivityLogger,
        worker_pool: WorkerPool,
        processor: Processor,
        max_file_size_bytes: int,
    ) -> None:
        self._doc_repo = doc_repo
        self._storage = storage
        self._presenter = presenter
        self._activity_logger = activity_logger
        self._worker_pool = worker_pool
        self._processor = processor
        self._max_file_size_bytes = max_file_size_bytes

    def ingest(
        self,
        file_bytes: bytes,
        filename: str,
        media_type: str,
        owner_id: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> DocumentResponse:
        """Store an upload and schedule its processing.

        Raises:
            DocumentValidationError: if the file is empty or too large.
        """
        self._validate(file_bytes)
        filename = filename.strip() or DEFAULT_FILENAME
        media_type = media_type.strip() or DEFAULT_MEDIA_TYPE

        document_id = str(uuid.uuid4())
        now = datetime.now(UTC)
        stored_path = self._storage.save(owner_id, document_id, filename, file_bytes)
        document = DocumentRecord(
            id=document_id,
            user_id=owner_id,
            filename=filename,
            file_path=str(stored_path),
            file_size=len(file_bytes),
            mime_type=media_type,
            access_token=new_access_token(),
            processing_status=ProcessingStatus.UPLOADED,
            created_at=now,
            updated_at=now,
        )
        try:
            self._doc_repo.insert(document)
        except Exception:
            self._storage.delete(stored_path)
            raise
        Log.info(f"Stored upload {filename} ({len(file_bytes)} bytes) as document {document_id}")

        self._activity_logger.log_activity(
            owner_id,
            ActionType.UPLOAD,
            details={"FileName": filename, "FileSize": len(file_bytes)},
            ip_address=ip_address,
            user_agent=user_agent,
            document_id=document_id,
        )
        self._schedule(ProcessingJob(document_id=document_id, user_id=owner_id))
        return self._presenter.to_response(document)

    def _validate(self, file_bytes: bytes) -> None:
        if not file_bytes:
            raise DocumentValidationError("File is required")
        if len(file_bytes) > self._max_file_size_bytes:
            limit_mb = self._max_file_size_bytes // 1024 // 1024
            raise DocumentValidationError(
                f"File size exceeds maximum allowed size of {limit_mb} MB"
            )

    def _schedule(self, job: ProcessingJob) -> None:
        try:
            self._worker_pool.submit(job)
        except QueueFullError as exc:
            Log.error(f"Could not queue document {job.document_id}: {exc}")
            self._processor.reject(job, str(exc))
