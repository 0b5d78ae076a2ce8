from dataclasses import dataclass, field
from enum import Enum


class EnrichmentSource(str, Enum):
    """Where a summary/tag pair came from."""

    EMPTY = "empty"
    REMOTE = "remote"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class EnrichmentResult:
    """Summary plus bounded tag list attached to a document."""

    summary: str
    tags: list[str] = field(default_factory=list)
    source: EnrichmentSource = EnrichmentSource.REMOTE

    @classmethod
    def empty(cls) -> "EnrichmentResult":
        return cls(summary="", tags=[], source=EnrichmentSource.EMPTY)
