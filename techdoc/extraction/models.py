from dataclasses import dataclass
from enum import Enum


class ExtractionStrategy(str, Enum):
    """Which path produced the extracted text."""

    IMAGE_OCR = "image_ocr"
    PDF_TEXT_LAYER = "pdf_text_layer"
    PDF_OCR = "pdf_ocr"
    UNSUPPORTED = "unsupported"
    ENGINE_ERROR = "engine_error"


@dataclass(frozen=True)
class ExtractionResult:
    """Output of the text extractor. Text is always a string, possibly empty."""

    text: str
    strategy: ExtractionStrategy

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    @classmethod
    def unsupported(cls) -> "ExtractionResult":
        return cls(text="", strategy=ExtractionStrategy.UNSUPPORTED)
