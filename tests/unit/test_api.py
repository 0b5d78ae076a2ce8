import time
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from techdoc.api.app import create_app
from techdoc.api.dependencies import Services
from techdoc.documents.exceptions import (
    DocumentAccessDeniedError,
    DocumentNotFoundError,
    DocumentValidationError,
    StoredFileNotFoundError,
)
from techdoc.documents.models import DocumentResponse, DownloadedFile, SearchPage
from techdoc.notifications.broker import NotificationBroker
from techdoc.notifications.events import ProcessingOutcome

OWNER = {"X-User-Id": "user-1"}


def _response(document_id: str = "doc-1") -> DocumentResponse:
    return DocumentResponse(
        id=document_id,
        filename="manual.pdf",
        file_size=4,
        mime_type="application/pdf",
        access_link=f"http://docs.local/api/documents/download/tok-{document_id}",
        qr_code_base64="qr",
        summary=None,
    )


def _make_client() -> tuple[TestClient, Services]:
    services = Services(
        settings=MagicMock(
            notification_send_timeout_seconds=5.0,
            worker_shutdown_timeout_seconds=1.0,
            max_file_size_bytes=1024,
        ),
        ingestion=MagicMock(),
        documents=MagicMock(),
        broker=NotificationBroker(),
        worker_pool=MagicMock(),
    )
    services.worker_pool.stats.return_value = {"pending": 0, "completed": 0, "crashed": 0}
    return TestClient(create_app(services)), services


class TestUpload:
    def test_upload_passes_file_and_identity(self) -> None:
        client, services = _make_client()
        services.ingestion.ingest.return_value = _response()

        response = client.post(
            "/api/documents/upload",
            files={"file": ("manual.pdf", b"%PDF", "application/pdf")},
            headers={**OWNER, "X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        )

        assert response.status_code == 200
        assert response.json()["id"] == "doc-1"
        args = services.ingestion.ingest.call_args
        assert args.args == (b"%PDF", "manual.pdf", "application/pdf", "user-1")
        assert args.kwargs["ip_address"] == "203.0.113.7"

    def test_oversized_upload_is_read_only_past_the_limit(self) -> None:
        client, services = _make_client()
        services.ingestion.ingest.return_value = _response()

        client.post(
            "/api/documents/upload",
            files={"file": ("big.pdf", b"x" * 4096, "application/pdf")},
            headers=OWNER,
        )

        assert len(services.ingestion.ingest.call_args.args[0]) == 1025

    def test_upload_requires_identity(self) -> None:
        client, _services = _make_client()
        response = client.post(
            "/api/documents/upload",
            files={"file": ("manual.pdf", b"%PDF", "application/pdf")},
        )
        assert response.status_code == 401

    def test_validation_error_is_400(self) -> None:
        client, services = _make_client()
        services.ingestion.ingest.side_effect = DocumentValidationError("File is required")

        response = client.post(
            "/api/documents/upload",
            files={"file": ("empty.pdf", b"", "application/pdf")},
            headers=OWNER,
        )

        assert response.status_code == 400
        assert response.json() == {"message": "File is required"}


class TestReadRoutes:
    def test_my_documents(self) -> None:
        client, services = _make_client()
        services.documents.list_user_documents.return_value = [_response("a"), _response("b")]

        response = client.get("/api/documents/my-documents", headers=OWNER)

        assert [d["id"] for d in response.json()] == ["a", "b"]

    def test_all_documents_forbidden_for_users(self) -> None:
        client, services = _make_client()
        services.documents.list_all_documents.side_effect = DocumentAccessDeniedError("no")

        response = client.get("/api/documents/all", headers=OWNER)

        assert response.status_code == 403

    def test_get_document_passes_role(self) -> None:
        client, services = _make_client()
        services.documents.get_document.return_value = _response()

        client.get("/api/documents/doc-1", headers={**OWNER, "X-User-Role": "admin"})

        services.documents.get_document.assert_called_once_with("doc-1", "user-1", "admin")

    def test_unknown_document_is_404(self) -> None:
        client, services = _make_client()
        services.documents.get_document.side_effect = DocumentNotFoundError("Document x not found")

        response = client.get("/api/documents/x", headers=OWNER)

        assert response.status_code == 404

    def test_search(self) -> None:
        client, services = _make_client()
        services.documents.search.return_value = SearchPage(
            results=[_response()], total_count=1, page=1, page_size=10
        )

        response = client.get("/api/documents/search?query=pump", headers=OWNER)

        assert response.json()["total_count"] == 1
        services.documents.search.assert_called_once_with(
            "pump", "user-1", "user", page=1, page_size=10
        )


class TestDownloadRoutes:
    def test_token_download_is_public(self) -> None:
        client, services = _make_client()
        services.documents.download_by_access_token.return_value = DownloadedFile(
            content=b"%PDF", filename="руководство.pdf", media_type="application/pdf"
        )

        response = client.get("/api/documents/download/tok-1")

        assert response.status_code == 200
        assert response.content == b"%PDF"
        assert response.headers["content-type"] == "application/pdf"
        assert "filename*=UTF-8''" in response.headers["content-disposition"]
        assert services.documents.download_by_access_token.call_args.kwargs["user_id"] is None

    def test_missing_physical_file_is_404(self) -> None:
        client, services = _make_client()
        services.documents.download_by_id.side_effect = StoredFileNotFoundError(
            "Physical file not found"
        )

        response = client.get("/api/documents/doc-1/download", headers=OWNER)

        assert response.status_code == 404

    def test_qr(self) -> None:
        client, services = _make_client()
        services.documents.generate_qr.return_value = "qr-data"

        response = client.post("/api/documents/doc-1/qr", headers=OWNER)

        assert response.json() == {"qr_code_base64": "qr-data"}


class TestDeleteRoute:
    def test_delete(self) -> None:
        client, services = _make_client()
        services.documents.delete_document.return_value = True
        assert client.delete("/api/documents/doc-1", headers=OWNER).status_code == 200

    def test_delete_not_found(self) -> None:
        client, services = _make_client()
        services.documents.delete_document.return_value = False
        assert client.delete("/api/documents/doc-1", headers=OWNER).status_code == 404


class TestLifespanAndHealth:
    def test_lifespan_starts_and_stops_pool(self) -> None:
        client, services = _make_client()
        with client:
            services.worker_pool.start.assert_called_once()
            assert client.get("/health").json()["worker_pool"]["pending"] == 0
        services.worker_pool.stop.assert_called_once_with(1.0)


class TestNotificationsSocket:
    def test_receives_events_for_own_user(self) -> None:
        client, services = _make_client()
        with client.websocket_connect("/ws/documents", headers=OWNER) as websocket:
            deadline = time.monotonic() + 5
            while services.broker.subscriber_count("user-1") == 0:
                assert time.monotonic() < deadline
                time.sleep(0.01)

            delivered = services.broker.publish(
                "user-1", ProcessingOutcome.completed("doc-1", "manual.pdf", "Pump", ["pump"])
            )
            message = websocket.receive_json()

        assert delivered == 1
        assert message["event"] == "DocumentProcessingCompleted"
        assert message["data"]["documentId"] == "doc-1"
        assert message["data"]["tags"] == ["pump"]

    def test_disconnect_unregisters(self) -> None:
        client, services = _make_client()
        with client.websocket_connect("/ws/documents", headers=OWNER):
            deadline = time.monotonic() + 5
            while services.broker.subscriber_count("user-1") == 0:
                assert time.monotonic() < deadline
                time.sleep(0.01)
        deadline = time.monotonic() + 5
        while services.broker.subscriber_count("user-1") != 0:
            assert time.monotonic() < deadline
            time.sleep(0.01)

    def test_anonymous_connection_is_rejected(self) -> None:
        client, _services = _make_client()
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/ws/documents"):
                pass
