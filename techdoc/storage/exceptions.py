class StorageError(Exception):
    """Raised when a file cannot be written to or removed from storage."""
