import io
from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def render_pdf(*pages: str) -> bytes:
    """Build a PDF in memory with one page per entry; an empty entry gives a blank page."""
    buf = io.BytesIO()
    pdf = canvas.Canvas(buf, pagesize=A4)
    for text in pages:
        if text:
            pdf.drawString(72, 760, text)
        pdf.showPage()
    pdf.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    return render_pdf("Hello PDF World")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return render_pdf("Page one content", "Page two content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid scanned-style PDF: one page, no text layer."""
    return render_pdf("")


@pytest.fixture()
def blank_jpeg_bytes() -> bytes:
    """A small white JPEG with nothing to recognize."""
    buf = io.BytesIO()
    Image.new("RGB", (64, 64), color="white").save(buf, format="JPEG")
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_path(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    path = tmp_path / "sample.pdf"
    path.write_bytes(sample_pdf_bytes)
    return path


@pytest.fixture()
def empty_pdf_path(tmp_path: Path, empty_pdf_bytes: bytes) -> Path:
    path = tmp_path / "blank.pdf"
    path.write_bytes(empty_pdf_bytes)
    return path
