from pathlib import Path

import pytesseract
from PIL import Image

from techdoc.logging.logger import Log
from techdoc.ocr.base import BaseOcrEngine
from techdoc.ocr.exceptions import OcrError


class TesseractAdapter(BaseOcrEngine):
    """OCR via the Tesseract binary through pytesseract."""

    def __init__(self, languages: str = "eng+rus", tesseract_cmd: str = "") -> None:
        self._languages = languages
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def recognize(self, image_path: Path) -> str:
        try:
            with Image.open(image_path) as image:
                image.load()
                text = pytesseract.image_to_string(image, lang=self._languages)
        except Exception as exc:
            raise OcrError(f"Tesseract OCR failed for {image_path}: {exc}") from exc
        text = (text or "").strip()
        Log.debug(f"OCR recognized {len(text)} chars from {image_path}")
        return text
