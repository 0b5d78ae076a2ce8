from techdoc.database.models import DocumentRecord
from techdoc.documents.models import DocumentResponse
from techdoc.qr.qr_service import QrCodeService


class DocumentPresenter:
    """Builds access links and response projections for document records."""

    def __init__(self, public_base_url: str, qr_service: QrCodeService) -> None:
        self._public_base_url = public_base_url.rstrip("/")
        self._qr_service = qr_service

    def access_link(self, access_token: str) -> str:
        """Download URL keyed by the access token, never by the document id."""
        return f"{self._public_base_url}/api/documents/download/{access_token}"

    def qr_code(self, document: DocumentRecord) -> str:
        return self._qr_service.generate_base64(self.access_link(document.access_token))

    def to_response(self, document: DocumentRecord) -> DocumentResponse:
        return DocumentResponse(
            id=document.id,
            filename=document.filename,
            file_size=document.file_size,
            mime_type=document.mime_type,
            access_link=self.access_link(document.access_token),
            qr_code_base64=self.qr_code(document),
            summary=document.summary,
            tags=list(document.tags),
            processing_status=document.processing_status.value,
            created_at=document.created_at,
            download_count=document.download_count,
            qr_generation_count=document.qr_generation_count,
            last_accessed_at=document.last_accessed_at,
        )
