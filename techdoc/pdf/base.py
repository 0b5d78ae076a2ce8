from abc import ABC, abstractmethod
from pathlib import Path


class BasePdfExtractor(ABC):
    """Contract for all PDF engine adapters. Only the first page is ever read."""

    @abstractmethod
    def extract_first_page(self, pdf_path: Path) -> str:
        """Extract the native text layer of the first page.

        Args:
            pdf_path: Path to the PDF file on disk.

        Returns:
            Stripped text; empty string when the page has no selectable text.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """

    @abstractmethod
    def render_first_page(self, pdf_path: Path, output_path: Path, dpi: int) -> None:
        """Rasterize the first page to a PNG image at output_path.

        Raises:
            PdfExtractionError: if rendering fails for any reason.
        """
