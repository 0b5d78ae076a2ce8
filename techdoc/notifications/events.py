from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class OutcomeStatus(str, Enum):
    """Processing milestones broadcast to a user's live connections."""

    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"


_EVENT_NAMES = {
    OutcomeStatus.STARTED: "DocumentProcessingStarted",
    OutcomeStatus.COMPLETED: "DocumentProcessingCompleted",
    OutcomeStatus.FAILED: "DocumentProcessingFailed",
}

# Wire status values understood by the web client.
_WIRE_STATUS = {
    OutcomeStatus.STARTED: "processing",
    OutcomeStatus.COMPLETED: "completed",
    OutcomeStatus.FAILED: "failed",
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ProcessingOutcome:
    """Point-in-time projection of a document's processing state."""

    document_id: str
    filename: str
    status: OutcomeStatus
    summary: str | None = None
    tags: list[str] = field(default_factory=list)
    error: str | None = None
    timestamp: datetime = field(default_factory=_utcnow)

    @classmethod
    def started(cls, document_id: str, filename: str) -> "ProcessingOutcome":
        return cls(document_id=document_id, filename=filename, status=OutcomeStatus.STARTED)

    @classmethod
    def completed(
        cls, document_id: str, filename: str, summary: str, tags: list[str]
    ) -> "ProcessingOutcome":
        return cls(
            document_id=document_id,
            filename=filename,
            status=OutcomeStatus.COMPLETED,
            summary=summary,
            tags=list(tags),
        )

    @classmethod
    def failed(cls, document_id: str, filename: str, error: str) -> "ProcessingOutcome":
        return cls(
            document_id=document_id,
            filename=filename,
            status=OutcomeStatus.FAILED,
            error=error,
        )

    @property
    def event_name(self) -> str:
        return _EVENT_NAMES[self.status]

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "documentId": self.document_id,
            "filename": self.filename,
            "status": _WIRE_STATUS[self.status],
            "timestamp": self.timestamp.isoformat(),
        }
        if self.status is OutcomeStatus.COMPLETED:
            payload["summary"] = self.summary or ""
            payload["tags"] = list(self.tags)
        elif self.status is OutcomeStatus.FAILED:
            payload["error"] = self.error or ""
        return payload
