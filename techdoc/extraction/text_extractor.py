"""First-page text extraction.

Strategy per declared media type:
1. Image  -> OCR the file directly.
2. PDF    -> native text layer of page one; when empty, render page one to a
             temporary PNG, OCR it, and always delete the PNG.
3. Other  -> unsupported sentinel, never an exception.

Engine failures degrade to empty text. Only an unreadable input file raises.
"""

import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from techdoc.config.settings import Settings
from techdoc.extraction.exceptions import ExtractionError
from techdoc.extraction.media_types import MediaKind, classify
from techdoc.extraction.models import ExtractionResult, ExtractionStrategy
from techdoc.logging.logger import Log
from techdoc.ocr.base import BaseOcrEngine
from techdoc.ocr.tesseract_adapter import TesseractAdapter
from techdoc.pdf.base import BasePdfExtractor
from techdoc.pdf.exceptions import PdfExtractionError
from techdoc.pdf.factory import PdfExtractorFactory


class TextExtractor:
    """Produces raw text from the first page of an uploaded document."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        ocr_engine: BaseOcrEngine,
        render_dpi: int = 300,
        temp_dir: Path | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._ocr_engine = ocr_engine
        self._render_dpi = render_dpi
        self._temp_dir = temp_dir
        self._strategies: dict[MediaKind, Callable[[Path], ExtractionResult]] = {
            MediaKind.IMAGE: self._extract_image,
            MediaKind.PDF: self._extract_pdf,
            MediaKind.UNSUPPORTED: self._extract_unsupported,
        }

    def extract_primary_text(self, path: Path, declared_media_type: str) -> ExtractionResult:
        """Extract text from the first page of the file at path.

        Raises:
            ExtractionError: if the file does not exist or cannot be opened.
        """
        self._ensure_readable(path)
        kind = classify(declared_media_type)
        Log.debug(f"Extracting {path} as {kind.value} (declared '{declared_media_type}')")
        try:
            return self._strategies[kind](path)
        except Exception as exc:
            Log.error(f"Text extraction engine failed for {path}: {exc}")
            return ExtractionResult(text="", strategy=ExtractionStrategy.ENGINE_ERROR)

    def _extract_image(self, path: Path) -> ExtractionResult:
        text = self._ocr_engine.recognize(path)
        Log.info(f"Image OCR produced {len(text)} chars for {path.name}")
        return ExtractionResult(text=text.strip(), strategy=ExtractionStrategy.IMAGE_OCR)

    def _extract_pdf(self, path: Path) -> ExtractionResult:
        try:
            text = self._pdf_extractor.extract_first_page(path).strip()
        except PdfExtractionError as exc:
            Log.warning(f"PDF text layer unreadable for {path.name}: {exc}")
            text = ""
        if text:
            Log.info(f"PDF text layer produced {len(text)} chars for {path.name}")
            return ExtractionResult(text=text, strategy=ExtractionStrategy.PDF_TEXT_LAYER)

        Log.info(f"PDF {path.name} has no text layer on page one, falling back to OCR")
        return ExtractionResult(
            text=self._ocr_rendered_first_page(path),
            strategy=ExtractionStrategy.PDF_OCR,
        )

    def _extract_unsupported(self, path: Path) -> ExtractionResult:
        Log.warning(f"Unsupported media type for {path.name}, skipping extraction")
        return ExtractionResult.unsupported()

    def _ocr_rendered_first_page(self, path: Path) -> str:
        fd, temp_name = tempfile.mkstemp(
            prefix=f"{path.stem}-page1-",
            suffix=".png",
            dir=self._temp_dir,
        )
        os.close(fd)
        rendered = Path(temp_name)
        try:
            self._pdf_extractor.render_first_page(path, rendered, self._render_dpi)
            text = self._ocr_engine.recognize(rendered).strip()
            Log.info(f"Rendered-page OCR produced {len(text)} chars for {path.name}")
            return text
        finally:
            rendered.unlink(missing_ok=True)

    @staticmethod
    def _ensure_readable(path: Path) -> None:
        if not path.is_file():
            raise ExtractionError(f"File not found: {path}")
        if not os.access(path, os.R_OK):
            raise ExtractionError(f"File is not readable: {path}")


def build_text_extractor(settings: Settings) -> TextExtractor:
    """Build a TextExtractor with the configured PDF engine and Tesseract OCR."""
    return TextExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        ocr_engine=TesseractAdapter(
            languages=settings.ocr_languages,
            tesseract_cmd=settings.tesseract_cmd,
        ),
        render_dpi=settings.pdf_render_dpi,
        temp_dir=Path(settings.temp_dir) if settings.temp_dir else None,
    )
