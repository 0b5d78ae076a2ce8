from pathlib import Path

import pymupdf

from techdoc.pdf.base import BasePdfExtractor
from techdoc.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads and renders the first PDF page using PyMuPDF."""

    def extract_first_page(self, pdf_path: Path) -> str:
        try:
            with pymupdf.open(pdf_path) as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    return ""
                text = doc[0].get_text()
            return text.strip()
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc

    def render_first_page(self, pdf_path: Path, output_path: Path, dpi: int) -> None:
        try:
            with pymupdf.open(pdf_path) as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise PdfExtractionError("PDF has no pages to render")
                pixmap = doc[0].get_pixmap(dpi=dpi)
                pixmap.save(str(output_path))
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf rendering failed: {exc}") from exc
