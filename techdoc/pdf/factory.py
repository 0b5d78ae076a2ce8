from techdoc.config.settings import Settings
from techdoc.pdf.base import BasePdfExtractor
from techdoc.pdf.pdfplumber_adapter import PdfPlumberAdapter
from techdoc.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Resolves the configured PDF engine name to an adapter instance."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.for_engine(settings.pdf_engine)

    @classmethod
    def for_engine(cls, name: str) -> BasePdfExtractor:
        adapter_cls = cls.ADAPTERS.get(name.strip().lower())
        if adapter_cls is None:
            supported = ", ".join(sorted(cls.ADAPTERS))
            raise ValueError(f"Unknown PDF engine '{name}'. Supported engines: {supported}")
        return adapter_cls()
