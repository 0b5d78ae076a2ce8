class PdfExtractionError(Exception):
    """Raised when a PDF engine cannot read or render a document."""
