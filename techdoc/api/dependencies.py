from dataclasses import dataclass

from fastapi import Header, HTTPException, Request, status

from techdoc.config.settings import Settings
from techdoc.documents.document_service import DocumentService
from techdoc.ingestion.ingestion_service import IngestionService
from techdoc.notifications.broker import NotificationBroker
from techdoc.worker.worker import WorkerPool

USER_ID_HEADER = "X-User-Id"
USER_ROLE_HEADER = "X-User-Role"


@dataclass
class Services:
    """Process-wide collaborators shared by the HTTP and WebSocket handlers."""

    settings: Settings
    ingestion: IngestionService
    documents: DocumentService
    broker: NotificationBroker
    worker_pool: WorkerPool


@dataclass(frozen=True)
class Identity:
    """Caller identity injected by the authentication gateway."""

    user_id: str
    role: str = "user"


def get_services(request: Request) -> Services:
    return request.app.state.services


def require_identity(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity:
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return Identity(user_id=x_user_id, role=x_user_role or "user")


def optional_identity(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity | None:
    if not x_user_id:
        return None
    return Identity(user_id=x_user_id, role=x_user_role or "user")


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    if request.client is not None:
        return request.client.host
    return "unknown"
