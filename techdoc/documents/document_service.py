from pathlib import Path

from techdoc.activity.activity_logger import ActivityLogger
from techdoc.activity.models import ActionType
from techdoc.database.models import DocumentRecord
from techdoc.database.repositories.documents_repository import DocumentsRepository
from techdoc.documents.exceptions import (
    DocumentAccessDeniedError,
    DocumentNotFoundError,
    DocumentValidationError,
    StoredFileNotFoundError,
)
from techdoc.documents.models import DocumentResponse, DownloadedFile, SearchPage, is_admin
from techdoc.documents.presenter import DocumentPresenter
from techdoc.logging.logger import Log
from techdoc.storage.file_storage import FileStorage

MAX_PAGE_SIZE = 100


class DocumentService:
    """Retrieval, download, QR generation, deletion and search of documents."""

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        storage: FileStorage,
        presenter: DocumentPresenter,
        activity_logger: ActivityLogger,
    ) -> None:
        self._doc_repo = doc_repo
        self._storage = storage
        self._presenter = presenter
        self._activity_logger = activity_logger

    def list_user_documents(self, user_id: str) -> list[DocumentResponse]:
        return [self._presenter.to_response(doc) for doc in self._doc_repo.list_by_user(user_id)]

    def list_all_documents(self, role: str) -> list[DocumentResponse]:
        """Every document in the system. Admin only."""
        if not is_admin(role):
            raise DocumentAccessDeniedError("Only administrators can list all documents")
        return [self._presenter.to_response(doc) for doc in self._doc_repo.list_all()]

    def get_document(self, document_id: str, user_id: str, role: str) -> DocumentResponse:
        """Return a document visible to the caller and record a view.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            DocumentAccessDeniedError: if the caller is neither owner nor admin.
        """
        document = self._load_authorized(document_id, user_id, role)
        self._activity_logger.log_activity(
            user_id,
            ActionType.VIEW,
            details={"DocumentName": document.filename},
            document_id=document.id,
        )
        return self._presenter.to_response(document)

    def download_by_access_token(
        self,
        access_token: str,
        user_id: str | None = None,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> DownloadedFile:
        """Serve a document to anyone holding its access token.

        Raises:
            DocumentNotFoundError: if no document has this token.
            StoredFileNotFoundError: if the stored file is missing.
        """
        document = self._doc_repo.find_by_access_token(access_token)
        if document is None:
            raise DocumentNotFoundError("Document not found")
        return self._serve(document, user_id, ip_address, user_agent)

    def download_by_id(
        self,
        document_id: str,
        user_id: str,
        role: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> DownloadedFile:
        """Serve a document to its owner or an admin.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            DocumentAccessDeniedError: if the caller is neither owner nor admin.
            StoredFileNotFoundError: if the stored file is missing.
        """
        document = self._load_authorized(document_id, user_id, role)
        return self._serve(document, user_id, ip_address, user_agent)

    def generate_qr(
        self,
        document_id: str,
        user_id: str,
        role: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> str:
        """Render the access-link QR code and count the generation."""
        document = self._load_authorized(document_id, user_id, role)
        qr_code = self._presenter.qr_code(document)
        self._doc_repo.increment_qr_count(document.id)
        self._activity_logger.log_activity(
            user_id,
            ActionType.QR_GENERATE,
            details={"DocumentName": document.filename},
            ip_address=ip_address,
            user_agent=user_agent,
            document_id=document.id,
        )
        return qr_code

    def delete_document(self, document_id: str, user_id: str) -> bool:
        """Delete an owned document and its stored file. Returns False if not found."""
        document = self._doc_repo.find_by_id(document_id)
        if document is None or document.user_id != user_id:
            return False
        if not self._doc_repo.delete(document.id, user_id):
            return False
        if not self._storage.delete(document.file_path):
            Log.warning(f"Stored file for document {document.id} was already missing")
        Log.info(f"Deleted document {document.id} for user {user_id}")
        return True

    def search(
        self,
        query: str,
        user_id: str,
        role: str,
        page: int = 1,
        page_size: int = 10,
    ) -> SearchPage:
        """Match every whitespace-separated term against filename, summary, tags and text.

        Admins search all documents; everyone else searches their own.
        """
        if page < 1 or page_size < 1:
            raise DocumentValidationError("page and page_size must be positive")
        page_size = min(page_size, MAX_PAGE_SIZE)
        terms = query.split()
        records, total = self._doc_repo.search(
            terms,
            user_id=None if is_admin(role) else user_id,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        results = [self._presenter.to_response(doc) for doc in records]
        self._activity_logger.log_activity(
            user_id,
            ActionType.SEARCH,
            details={"Query": query, "ResultsCount": len(results)},
        )
        return SearchPage(results=results, total_count=total, page=page, page_size=page_size)

    def _load_authorized(self, document_id: str, user_id: str, role: str) -> DocumentRecord:
        document = self._doc_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        if document.user_id != user_id and not is_admin(role):
            raise DocumentAccessDeniedError(f"Access to document {document_id} denied")
        return document

    def _serve(
        self,
        document: DocumentRecord,
        user_id: str | None,
        ip_address: str | None,
        user_agent: str | None,
    ) -> DownloadedFile:
        try:
            content = self._storage.read(Path(document.file_path))
        except FileNotFoundError as exc:
            Log.warning(f"Stored file missing for document {document.id}: {document.file_path}")
            raise StoredFileNotFoundError("Physical file not found") from exc

        self._doc_repo.record_download(document.id)
        if user_id is not None:
            self._activity_logger.log_activity(
                user_id,
                ActionType.DOWNLOAD,
                details={"FileName": document.filename},
                ip_address=ip_address,
                user_agent=user_agent,
                document_id=document.id,
            )
        return DownloadedFile(
            content=content,
            filename=document.filename,
            media_type=document.mime_type,
        )
