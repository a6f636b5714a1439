"""
Document assembler — orchestrates the full receipt build.

Flow:
  ┌───────────────┐
  │ FormData +    │
  │ attachments   │
  └──────┬────────┘
         │  partition (images first, then PDFs — each in upload order)
  ┌──────▼────────┐
  │ Stage 1       │   reportlab canvas: form page + one page per image
  └──────┬────────┘
         │  no PDFs? → done
  ┌──────▼────────┐
  │ Stage 2       │   pypdf: reopen stage-1 output, append PDF pages
  └──────┬────────┘     (verbatim or transcluded)
         │
  ┌──────▼────────┐
  │ bytes         │
  └───────────────┘

Design principles:
  - Best effort per attachment: a bad image becomes an error page, a bad
    PDF is logged and skipped. The receipt is still produced.
  - All-or-nothing at the end: serialization failures raise
    DocumentAssemblyError and nothing partial is returned.
  - Each call owns its canvas/reader/writer; assemblers are safe to share.
"""

from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Sequence

from pypdf import PdfWriter
from reportlab.pdfgen.canvas import Canvas

from .attachments import PDF_MEDIA_TYPE, draw_image_page, normalize_image, normalize_pdf
from .exceptions import AttachmentDecodeError, DocumentAssemblyError
from .labels import labels_for
from .models import Attachment, FormData, Language, PdfDocument, RasterImage
from .page_layout import render_primary_page
from .style import DEFAULT_STYLE, StyleConstants, register_fonts

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "Dowod_wyplaty"
FALLBACK_FILENAME = f"{FILENAME_PREFIX}_document.pdf"

__all__ = [
    "FALLBACK_FILENAME",
    "PDF_MEDIA_TYPE",
    "ReceiptAssembler",
    "partition_attachments",
    "receipt_filename",
    "save_receipt",
]


# ─── Output Naming / Saving ──────────────────────────────────────────


def receipt_filename(date: str) -> str:
    """Derive the output filename from the free-text date field.

    "2024/05/17" → "Dowod_wyplaty_2024-05-17.pdf"; "" → the fallback name.
    """
    text = (date or "").strip()
    if not text:
        return FALLBACK_FILENAME
    safe = re.sub(r"[^0-9A-Za-z]", "-", text)
    return f"{FILENAME_PREFIX}_{safe}.pdf"


def save_receipt(pdf_bytes: bytes, directory: str | Path, date: str) -> Path:
    """Write the receipt under its derived name. I/O errors propagate."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / receipt_filename(date)
    path.write_bytes(pdf_bytes)
    logger.info("Receipt saved to %s (%d bytes)", path, len(pdf_bytes))
    return path


# ─── Ordering Policy ─────────────────────────────────────────────────


def partition_attachments(
    attachments: Sequence[Attachment],
) -> tuple[list[RasterImage], list[PdfDocument]]:
    """Split uploads into images and PDFs, each keeping its relative order.

    NOTE: images always precede PDFs in the output, whatever the upload
    order was. This is observable behaviour and is kept intentionally.
    """
    images = [a for a in attachments if isinstance(a, RasterImage)]
    pdfs = [a for a in attachments if isinstance(a, PdfDocument)]
    return images, pdfs


# ─── Assembler ───────────────────────────────────────────────────────


class ReceiptAssembler:
    """Builds the receipt PDF.

    Usage:
        assembler = ReceiptAssembler(organization="ACME Foundation")
        pdf_bytes = assembler.assemble(form, attachments, Language.PL)
        save_receipt(pdf_bytes, "out/", form.date)
    """

    def __init__(self, style: StyleConstants = DEFAULT_STYLE, organization: str = ""):
        self.style = style
        self.organization = organization
        self.fonts = register_fonts(style)

    def assemble(
        self,
        form: FormData,
        attachments: Sequence[Attachment] = (),
        language: Language | str = Language.PL,
    ) -> bytes:
        """Render the form page, then image pages, then PDF pages.

        Raises:
            DocumentAssemblyError: If the final document cannot be written.
        """
        images, pdfs = partition_attachments(attachments)
        logger.info(
            "Assembling receipt: %d image(s), %d PDF attachment(s)",
            len(images),
            len(pdfs),
        )

        # ── Stage 1: drawn pages ────────────────────────────────────
        first_stage = self._render_drawn_pages(form, images, Language(language))
        if not pdfs:
            return first_stage

        # ── Stage 2: reopen and append PDF pages ────────────────────
        logger.info("Reopening drawn document to append PDF pages")
        return self._append_pdf_pages(first_stage, pdfs)

    # ─── Stage 1 ─────────────────────────────────────────────────────

    def _render_drawn_pages(self, form: FormData, images: list[RasterImage], language: Language) -> bytes:
        labels = labels_for(language)
        buffer = io.BytesIO()
        try:
            canvas = Canvas(buffer, pagesize=self.style.page_size_pt)
            canvas.setTitle(labels.title)
            canvas.setSubject(receipt_filename(form.date))

            render_primary_page(canvas, form, labels, self.style, self.fonts, self.organization)
            canvas.showPage()

            for image in images:
                content = normalize_image(image, labels, self.style)
                draw_image_page(canvas, content, self.fonts, self.style)
                canvas.showPage()

            canvas.save()
        except Exception as e:
            logger.error("Rendering the receipt failed: %s", e)
            raise DocumentAssemblyError(f"Could not render receipt pages: {e}") from e
        return buffer.getvalue()

    # ─── Stage 2 ─────────────────────────────────────────────────────

    def _append_pdf_pages(self, first_stage: bytes, pdfs: list[PdfDocument]) -> bytes:
        try:
            writer = PdfWriter(clone_from=io.BytesIO(first_stage))
        except Exception as e:
            logger.error("Reopening the drawn document failed: %s", e)
            raise DocumentAssemblyError(f"Could not reopen receipt for PDF attachments: {e}") from e

        for pdf in pdfs:
            try:
                pages = normalize_pdf(pdf, self.style)
            except AttachmentDecodeError as e:
                logger.warning("Skipping PDF attachment: %s", e)
                continue

            # All pages of one attachment go in, or none do
            start = len(writer.pages)
            try:
                for normalized in pages:
                    writer.add_page(normalized.page)
            except Exception as e:
                del writer.pages[start:]
                logger.warning("Skipping PDF attachment '%s': could not append pages: %s", pdf.filename, e)

        buffer = io.BytesIO()
        try:
            writer.write(buffer)
        except Exception as e:
            logger.error("Serializing the receipt failed: %s", e)
            raise DocumentAssemblyError(f"Could not serialize receipt: {e}") from e
        return buffer.getvalue()
