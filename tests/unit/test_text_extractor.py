from pathlib import Path
from unittest.mock import MagicMock

import pytest

from techdoc.extraction.exceptions import ExtractionError
from techdoc.extraction.models import ExtractionStrategy
from techdoc.extraction.text_extractor import TextExtractor
from techdoc.ocr.exceptions import OcrError
from techdoc.pdf.exceptions import PdfExtractionError
from techdoc.pdf.pdfplumber_adapter import PdfPlumberAdapter


def _make_extractor(tmp_path: Path) -> tuple[TextExtractor, MagicMock, MagicMock]:
    pdf_extractor = MagicMock()
    ocr_engine = MagicMock()
    render_dir = tmp_path / "render"
    render_dir.mkdir()
    extractor = TextExtractor(
        pdf_extractor=pdf_extractor,
        ocr_engine=ocr_engine,
        render_dpi=150,
        temp_dir=render_dir,
    )
    return extractor, pdf_extractor, ocr_engine


def _write(tmp_path: Path, name: str, content: bytes = b"data") -> Path:
    path = tmp_path / name
    path.write_bytes(content)
    return path


class TestImageExtraction:
    def test_ocr_only_never_touches_pdf(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        ocr_engine.recognize.return_value = "  Scanned label  "
        path = _write(tmp_path, "label.png")

        result = extractor.extract_primary_text(path, "image/png")

        assert result.text == "Scanned label"
        assert result.strategy is ExtractionStrategy.IMAGE_OCR
        ocr_engine.recognize.assert_called_once_with(path)
        pdf_extractor.extract_first_page.assert_not_called()
        pdf_extractor.render_first_page.assert_not_called()


class TestPdfExtraction:
    def test_text_layer_skips_ocr(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.return_value = "Hello PDF World"
        path = _write(tmp_path, "doc.pdf")

        result = extractor.extract_primary_text(path, "application/pdf")

        assert result.text == "Hello PDF World"
        assert result.strategy is ExtractionStrategy.PDF_TEXT_LAYER
        ocr_engine.recognize.assert_not_called()
        pdf_extractor.render_first_page.assert_not_called()

    def test_blank_text_layer_falls_back_to_ocr(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.return_value = "   "
        ocr_engine.recognize.return_value = "Scanned page"
        path = _write(tmp_path, "scan.pdf")

        result = extractor.extract_primary_text(path, "application/pdf")

        assert result.text == "Scanned page"
        assert result.strategy is ExtractionStrategy.PDF_OCR
        rendered = pdf_extractor.render_first_page.call_args.args[1]
        assert pdf_extractor.render_first_page.call_args.args[2] == 150
        ocr_engine.recognize.assert_called_once_with(rendered)

    def test_rendered_image_deleted_after_success(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.return_value = ""
        pdf_extractor.render_first_page.side_effect = (
            lambda _src, out, _dpi: Path(out).write_bytes(b"png")
        )
        ocr_engine.recognize.return_value = "text"

        extractor.extract_primary_text(_write(tmp_path, "scan.pdf"), "application/pdf")

        assert list((tmp_path / "render").iterdir()) == []

    def test_rendered_image_deleted_after_ocr_failure(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.return_value = ""
        pdf_extractor.render_first_page.side_effect = (
            lambda _src, out, _dpi: Path(out).write_bytes(b"png")
        )
        ocr_engine.recognize.side_effect = OcrError("tesseract crashed")

        result = extractor.extract_primary_text(_write(tmp_path, "scan.pdf"), "application/pdf")

        assert result.text == ""
        assert result.strategy is ExtractionStrategy.ENGINE_ERROR
        assert list((tmp_path / "render").iterdir()) == []

    def test_rendered_image_deleted_after_render_failure(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.return_value = ""
        pdf_extractor.render_first_page.side_effect = PdfExtractionError("render failed")

        result = extractor.extract_primary_text(_write(tmp_path, "scan.pdf"), "application/pdf")

        assert result.text == ""
        ocr_engine.recognize.assert_not_called()
        assert list((tmp_path / "render").iterdir()) == []

    def test_broken_text_layer_falls_back_to_ocr(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.side_effect = PdfExtractionError("bad font")
        ocr_engine.recognize.return_value = "  scanned text  "

        result = extractor.extract_primary_text(_write(tmp_path, "bad.pdf"), "application/pdf")

        assert result.text == "scanned text"
        assert result.strategy is ExtractionStrategy.PDF_OCR
        pdf_extractor.render_first_page.assert_called_once()
        assert list((tmp_path / "render").iterdir()) == []

    def test_pdf_engine_failure_returns_empty_text(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, _ocr = _make_extractor(tmp_path)
        pdf_extractor.extract_first_page.side_effect = PdfExtractionError("corrupt")
        pdf_extractor.render_first_page.side_effect = PdfExtractionError("corrupt")

        result = extractor.extract_primary_text(_write(tmp_path, "bad.pdf"), "application/pdf")

        assert result.text == ""
        assert result.strategy is ExtractionStrategy.ENGINE_ERROR
        assert result.has_text is False


class TestUnsupportedAndMissing:
    def test_unsupported_type_returns_sentinel(self, tmp_path: Path) -> None:
        extractor, pdf_extractor, ocr_engine = _make_extractor(tmp_path)

        result = extractor.extract_primary_text(_write(tmp_path, "notes.txt"), "text/plain")

        assert result.text == ""
        assert result.strategy is ExtractionStrategy.UNSUPPORTED
        pdf_extractor.extract_first_page.assert_not_called()
        ocr_engine.recognize.assert_not_called()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        extractor, _pdf, _ocr = _make_extractor(tmp_path)
        with pytest.raises(ExtractionError, match="File not found"):
            extractor.extract_primary_text(tmp_path / "gone.pdf", "application/pdf")


class TestWithRealPdfEngine:
    def test_reads_generated_pdf(self, tmp_path: Path, sample_pdf_path: Path) -> None:
        ocr_engine = MagicMock()
        extractor = TextExtractor(pdf_extractor=PdfPlumberAdapter(), ocr_engine=ocr_engine)

        result = extractor.extract_primary_text(sample_pdf_path, "application/pdf")

        assert "Hello PDF World" in result.text
        ocr_engine.recognize.assert_not_called()
