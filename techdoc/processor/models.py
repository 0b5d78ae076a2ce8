from dataclasses import dataclass, field
from datetime import UTC, datetime


@dataclass(frozen=True)
class ProcessingJob:
    """One queued request to process an uploaded document."""

    document_id: str
    user_id: str
    enqueued_at: datetime = field(default_factory=lambda: datetime.now(UTC))
