class EnrichmentError(Exception):
    """Raised when enrichment fails."""


class EnrichmentNetworkError(EnrichmentError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class EnrichmentResponseError(EnrichmentError):
    """Raised when the AI provider reply cannot be parsed into a summary and tags."""
