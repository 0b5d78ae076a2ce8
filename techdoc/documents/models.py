from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

ADMIN_ROLE = "admin"


def is_admin(role: str | None) -> bool:
    return (role or "").strip().lower() == ADMIN_ROLE


@dataclass(frozen=True)
class DocumentResponse:
    """Client-facing projection of a document."""

    id: str
    filename: str
    file_size: int
    mime_type: str
    access_link: str
    qr_code_base64: str
    summary: str | None
    tags: list[str] = field(default_factory=list)
    processing_status: str = "uploaded"
    created_at: datetime | None = None
    download_count: int = 0
    qr_generation_count: int = 0
    last_accessed_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for key in ("created_at", "last_accessed_at"):
            value = data[key]
            data[key] = value.isoformat() if value is not None else None
        return data


@dataclass(frozen=True)
class DownloadedFile:
    """Stored bytes plus the metadata needed to serve them."""

    content: bytes
    filename: str
    media_type: str


@dataclass(frozen=True)
class SearchPage:
    """One page of search results."""

    results: list[DocumentResponse]
    total_count: int
    page: int
    page_size: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "results": [result.to_dict() for result in self.results],
            "total_count": self.total_count,
            "page": self.page,
            "page_size": self.page_size,
        }
