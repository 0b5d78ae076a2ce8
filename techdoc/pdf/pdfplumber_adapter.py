from pathlib import Path

import pdfplumber

from techdoc.pdf.base import BasePdfExtractor
from techdoc.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads and renders the first PDF page using pdfplumber."""

    def extract_first_page(self, pdf_path: Path) -> str:
        try:
            with pdfplumber.open(pdf_path) as pdf:
                if not pdf.pages:
                    return ""
                text = pdf.pages[0].extract_text() or ""
            return text.strip()
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc

    def render_first_page(self, pdf_path: Path, output_path: Path, dpi: int) -> None:
        try:
            with pdfplumber.open(pdf_path) as pdf:
                if not pdf.pages:
                    raise PdfExtractionError("PDF has no pages to render")
                pdf.pages[0].to_image(resolution=dpi).save(output_path, format="PNG")
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber rendering failed: {exc}") from exc
