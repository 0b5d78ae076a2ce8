class ExtractionError(Exception):
    """Raised when the input file itself cannot be read."""
