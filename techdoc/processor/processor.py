from pathlib import Path

from techdoc.activity.activity_logger import ActivityLogger
from techdoc.activity.models import ActionType
from techdoc.config.settings import Settings
from techdoc.database.models import DocumentRecord, ProcessingStatus
from techdoc.database.repositories.documents_repository import DocumentsRepository
from techdoc.documents.exceptions import DocumentNotFoundError
from techdoc.enrichment.enricher import Enricher
from techdoc.enrichment.factory import EnricherFactory
from techdoc.extraction.models import ExtractionResult
from techdoc.extraction.text_extractor import TextExtractor, build_text_extractor
from techdoc.logging.logger import Log
from techdoc.notifications.broker import NotificationBroker
from techdoc.notifications.events import ProcessingOutcome
from techdoc.processor.exceptions import PersistenceError
from techdoc.processor.models import ProcessingJob

NO_TEXT_SUMMARY = "No text found in document"
NO_TEXT_TAGS = ("no-text",)
ERROR_SUMMARY = "Document processing error"
ERROR_TAGS = ("error",)


class Processor:
    """Drives one document from 'uploaded' to a terminal state.

    Pipeline: mark processing -> notify started -> extract -> enrich ->
    persist terminal state -> notify completed. Any failure before the terminal
    write ends in the 'failed' state with a fixed marker; an empty extraction is
    a successful, uninformative outcome.
    """

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        text_extractor: TextExtractor,
        enricher: Enricher,
        broker: NotificationBroker,
        activity_logger: ActivityLogger,
    ) -> None:
        self._doc_repo = doc_repo
        self._text_extractor = text_extractor
        self._enricher = enricher
        self._broker = broker
        self._activity_logger = activity_logger

    def process(self, job: ProcessingJob) -> ProcessingStatus | None:
        """Run the pipeline for job. Returns the terminal status, or None if skipped."""
        document = self._doc_repo.find_by_id(job.document_id)
        if document is None:
            Log.warning(f"Document {job.document_id} no longer exists, skipping job")
            return None

        Log.info(f"Processing document {document.id} ({document.filename}) for user {job.user_id}")
        try:
            self._doc_repo.mark_processing(document.id)
            self._notify(
                document.user_id, ProcessingOutcome.started(document.id, document.filename)
            )

            # Step 1: Extract first-page text
            extraction = self._text_extractor.extract_primary_text(
                Path(document.file_path), document.mime_type
            )

            # Step 2: Enrich, or mark as having no text
            if extraction.has_text:
                enrichment = self._enricher.enrich(extraction.text)
                ocr_text, summary, tags = extraction.text, enrichment.summary, enrichment.tags
                source = enrichment.source.value
            else:
                ocr_text, summary, tags = "", NO_TEXT_SUMMARY, list(NO_TEXT_TAGS)
                source = None

            # Step 3: Persist terminal state in one write
            self._persist_terminal(
                document.id,
                status=ProcessingStatus.COMPLETED,
                ocr_text=ocr_text,
                summary=summary,
                tags=tags,
            )
        except DocumentNotFoundError:
            Log.warning(f"Document {document.id} was deleted during processing")
            return None
        except Exception as exc:
            self._fail(document, str(exc) or exc.__class__.__name__)
            return ProcessingStatus.FAILED

        Log.info(
            f"Document {document.id} completed: {len(ocr_text)} chars, "
            f"{len(tags)} tags via {extraction.strategy.value}"
        )
        self._notify(
            document.user_id,
            ProcessingOutcome.completed(document.id, document.filename, summary, tags),
        )
        self._log_processing(document, extraction, source)
        return ProcessingStatus.COMPLETED

    def reject(self, job: ProcessingJob, reason: str) -> None:
        """Move a document that could not be scheduled straight to 'failed'."""
        document = self._doc_repo.find_by_id(job.document_id)
        if document is None:
            Log.warning(f"Document {job.document_id} no longer exists, nothing to reject")
            return
        self._fail(document, reason)

    def _fail(self, document: DocumentRecord, error: str) -> None:
        Log.error(f"Processing failed for document {document.id}: {error}")
        try:
            self._persist_terminal(
                document.id,
                status=ProcessingStatus.FAILED,
                ocr_text=None,
                summary=ERROR_SUMMARY,
                tags=list(ERROR_TAGS),
                error=error,
            )
        except DocumentNotFoundError:
            Log.warning(f"Document {document.id} was deleted before its failure was recorded")
            return
        except PersistenceError as exc:
            Log.critical(str(exc))
        self._notify(
            document.user_id,
            ProcessingOutcome.failed(document.id, document.filename, error),
        )

    def _persist_terminal(
        self,
        document_id: str,
        *,
        status: ProcessingStatus,
        ocr_text: str | None,
        summary: str,
        tags: list[str],
        error: str | None = None,
    ) -> None:
        try:
            self._doc_repo.complete_processing(
                document_id,
                status=status,
                ocr_text=ocr_text,
                summary=summary,
                tags=tags,
                error=error,
            )
        except DocumentNotFoundError:
            raise
        except Exception as exc:
            raise PersistenceError(
                f"Failed to persist '{status.value}' state for document {document_id}: {exc}"
            ) from exc

    def _notify(self, user_id: str, outcome: ProcessingOutcome) -> None:
        try:
            self._broker.publish(user_id, outcome)
        except Exception as exc:
            Log.error(f"Notification {outcome.event_name} for user {user_id} failed: {exc}")

    def _log_processing(
        self,
        document: DocumentRecord,
        extraction: ExtractionResult,
        source: str | None,
    ) -> None:
        self._activity_logger.log_activity(
            document.user_id,
            ActionType.AI_PROCESSING,
            details={
                "FileName": document.filename,
                "Strategy": extraction.strategy.value,
                "EnrichmentSource": source,
            },
            document_id=document.id,
        )


def build_processor(
    settings: Settings,
    doc_repo: DocumentsRepository,
    broker: NotificationBroker,
    activity_logger: ActivityLogger,
) -> Processor:
    """Build a Processor with the configured extraction and enrichment adapters."""
    return Processor(
        doc_repo=doc_repo,
        text_extractor=build_text_extractor(settings),
        enricher=EnricherFactory.create(settings),
        broker=broker,
        activity_logger=activity_logger,
    )
