import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

TWO_MEGABYTES = 2 * 1024 * 1024


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Today was great")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def two_megabyte_pdf_bytes(sample_pdf_bytes: bytes) -> bytes:
    """A scanned-journal sized PDF: the sample page padded with comment lines."""
    line = b"%" + b"0" * 62 + b"\n"
    padding = line * ((TWO_MEGABYTES - len(sample_pdf_bytes)) // len(line) + 1)
    return (sample_pdf_bytes + padding)[:TWO_MEGABYTES]
