from pathlib import Path

import uvicorn

from techdoc.activity.activity_logger import ActivityLogger
from techdoc.api.app import create_app
from techdoc.api.dependencies import Services
from techdoc.config.settings import Settings
from techdoc.database.connection import close_pool, init_pool
from techdoc.database.repositories.activity_log_repository import ActivityLogRepository
from techdoc.database.repositories.documents_repository import DocumentsRepository
from techdoc.documents.document_service import DocumentService
from techdoc.documents.presenter import DocumentPresenter
from techdoc.ingestion.ingestion_service import IngestionService
from techdoc.logging.logger import Log
from techdoc.notifications.broker import NotificationBroker
from techdoc.processor.processor import build_processor
from techdoc.qr.qr_service import QrCodeService
from techdoc.storage.file_storage import FileStorage
from techdoc.worker.job_runner import JobRunner
from techdoc.worker.worker import WorkerPool


def build_services(settings: Settings) -> Services:
    """Wire repositories, storage, processor and worker pool together."""
    doc_repo = DocumentsRepository()
    activity_logger = ActivityLogger(ActivityLogRepository())
    storage = FileStorage(Path(settings.upload_root))
    broker = NotificationBroker()
    presenter = DocumentPresenter(settings.public_base_url, QrCodeService())

    processor = build_processor(settings, doc_repo, broker, activity_logger)
    worker_pool = WorkerPool(JobRunner(processor), settings)

    return Services(
        settings=settings,
        ingestion=IngestionService(
            doc_repo=doc_repo,
            storage=storage,
            presenter=presenter,
            activity_logger=activity_logger,
            worker_pool=worker_pool,
            processor=processor,
            max_file_size_bytes=settings.max_file_size_bytes,
        ),
        documents=DocumentService(doc_repo, storage, presenter, activity_logger),
        broker=broker,
        worker_pool=worker_pool,
    )


def main() -> None:
    """Entry point: initialize pool -> build services -> serve HTTP until stopped."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        app = create_app(build_services(settings))
        uvicorn.run(app, host=settings.api_host, port=settings.api_port)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
