"""Pytest configuration — ensures the project root is importable and builds sample uploads."""

import io
import sys
from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen.canvas import Canvas

sys.path.insert(0, str(Path(__file__).parent))


def make_png(width: int, height: int, color: str = "navy", mode: str = "RGB") -> bytes:
    """Encode a solid-colour PNG of the given pixel size."""
    buffer = io.BytesIO()
    Image.new(mode, (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_pdf(*page_sizes: tuple[float, float]) -> bytes:
    """Build a PDF with one page per (width, height) in points."""
    buffer = io.BytesIO()
    canvas = Canvas(buffer, pagesize=page_sizes[0])
    for index, size in enumerate(page_sizes, start=1):
        canvas.setPageSize(size)
        canvas.rect(10, 10, size[0] - 20, size[1] - 20)
        canvas.drawString(20, 20, f"page {index}")
        canvas.showPage()
    canvas.save()
    return buffer.getvalue()


@pytest.fixture
def png_factory():
    return make_png


@pytest.fixture
def pdf_factory():
    return make_pdf


@pytest.fixture
def a4_pdf() -> bytes:
    return make_pdf(A4, A4)
