from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile
from fastapi.responses import JSONResponse

from techdoc.api.dependencies import (
    Identity,
    Services,
    client_ip,
    get_services,
    optional_identity,
    require_identity,
)
from techdoc.documents.models import DownloadedFile

router = APIRouter(prefix="/api/documents", tags=["documents"])


def _file_response(downloaded: DownloadedFile) -> Response:
    disposition = f"attachment; filename*=UTF-8''{quote(downloaded.filename)}"
    return Response(
        content=downloaded.content,
        media_type=downloaded.media_type,
        headers={"Content-Disposition": disposition},
    )


@router.post("/upload")
def upload_document(
    request: Request,
    file: UploadFile = File(...),
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> dict[str, object]:
    document = services.ingestion.ingest(
        file.file.read(services.settings.max_file_size_bytes + 1),
        file.filename or "",
        file.content_type or "",
        identity.user_id,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    return document.to_dict()


@router.get("/my-documents")
def my_documents(
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> list[dict[str, object]]:
    return [doc.to_dict() for doc in services.documents.list_user_documents(identity.user_id)]


@router.get("/all")
def all_documents(
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> list[dict[str, object]]:
    return [doc.to_dict() for doc in services.documents.list_all_documents(identity.role)]


@router.get("/search")
def search_documents(
    query: str = "",
    page: int = 1,
    page_size: int = 10,
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> dict[str, object]:
    result = services.documents.search(
        query, identity.user_id, identity.role, page=page, page_size=page_size
    )
    return result.to_dict()


@router.get("/download/{access_token}")
def download_by_token(
    access_token: str,
    request: Request,
    identity: Identity | None = Depends(optional_identity),
    services: Services = Depends(get_services),
) -> Response:
    downloaded = services.documents.download_by_access_token(
        access_token,
        user_id=identity.user_id if identity else None,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    return _file_response(downloaded)


@router.get("/{document_id}")
def get_document(
    document_id: str,
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> dict[str, object]:
    return services.documents.get_document(document_id, identity.user_id, identity.role).to_dict()


@router.get("/{document_id}/download")
def download_by_id(
    document_id: str,
    request: Request,
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> Response:
    downloaded = services.documents.download_by_id(
        document_id,
        identity.user_id,
        identity.role,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    return _file_response(downloaded)


@router.post("/{document_id}/qr")
def generate_qr(
    document_id: str,
    request: Request,
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> dict[str, str]:
    qr_code = services.documents.generate_qr(
        document_id,
        identity.user_id,
        identity.role,
        ip_address=client_ip(request),
        user_agent=request.headers.get("User-Agent"),
    )
    return {"qr_code_base64": qr_code}


@router.delete("/{document_id}")
def delete_document(
    document_id: str,
    identity: Identity = Depends(require_identity),
    services: Services = Depends(get_services),
) -> JSONResponse:
    if not services.documents.delete_document(document_id, identity.user_id):
        return JSONResponse(status_code=404, content={"message": "Document not found"})
    return JSONResponse(content={"message": "Document deleted successfully"})
