from abc import ABC, abstractmethod
from pathlib import Path


class BaseOcrEngine(ABC):
    """Contract for all OCR engine adapters."""

    @abstractmethod
    def recognize(self, image_path: Path) -> str:
        """Run OCR over an image file.

        Returns:
            Stripped recognized text; empty string when nothing was recognized.

        Raises:
            OcrError: if the engine fails for any reason.
        """
