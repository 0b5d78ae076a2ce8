class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class PersistenceError(ProcessorError):
    """Raised when the terminal processing state cannot be written."""


class QueueFullError(ProcessorError):
    """Raised when the processing queue has no room for another job."""
