class DocumentError(Exception):
    """Base exception for all document-service errors."""


class DocumentValidationError(DocumentError):
    """Raised when an upload is rejected (empty or oversized file)."""


class DocumentNotFoundError(DocumentError):
    """Raised when a document cannot be found in the database."""


class StoredFileNotFoundError(DocumentNotFoundError):
    """Raised when a document record exists but its stored file is gone."""


class DocumentAccessDeniedError(DocumentError):
    """Raised when a caller is neither the owner nor an admin."""
