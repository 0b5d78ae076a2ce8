from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ProcessingStatus(str, Enum):
    """Lifecycle of a document through the processing pipeline."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingStatus.COMPLETED, ProcessingStatus.FAILED)


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    user_id: str
    filename: str
    file_path: str
    file_size: int
    mime_type: str
    access_token: str
    processing_status: ProcessingStatus = ProcessingStatus.UPLOADED
    processing_error: str | None = None
    ocr_text: str | None = None
    summary: str | None = None
    tags: list[str] = field(default_factory=list)
    download_count: int = 0
    qr_generation_count: int = 0
    last_accessed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class ActivityLogRecord:
    """Represents a row from the activity_logs table."""

    id: int
    user_id: str
    action_type: str
    document_id: str | None = None
    details: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime | None = None
