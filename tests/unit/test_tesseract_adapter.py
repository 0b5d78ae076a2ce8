from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from techdoc.ocr.exceptions import OcrError
from techdoc.ocr.tesseract_adapter import TesseractAdapter


@pytest.fixture()
def png_path(tmp_path: Path) -> Path:
    path = tmp_path / "scan.png"
    Image.new("RGB", (32, 32), color="white").save(path, format="PNG")
    return path


class TestTesseractAdapter:
    def test_returns_stripped_text(self, png_path: Path) -> None:
        with patch(
            "techdoc.ocr.tesseract_adapter.pytesseract.image_to_string",
            return_value="  Pump manual\n",
        ) as mock_ocr:
            text = TesseractAdapter(languages="eng").recognize(png_path)

        assert text == "Pump manual"
        assert mock_ocr.call_args.kwargs["lang"] == "eng"

    def test_engine_failure_raises_ocr_error(self, png_path: Path) -> None:
        with patch(
            "techdoc.ocr.tesseract_adapter.pytesseract.image_to_string",
            side_effect=RuntimeError("tesseract is not installed"),
        ):
            with pytest.raises(OcrError, match="tesseract is not installed"):
                TesseractAdapter().recognize(png_path)

    def test_unreadable_image_raises_ocr_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        with pytest.raises(OcrError):
            TesseractAdapter().recognize(path)
