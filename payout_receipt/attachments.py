"""
Attachment normalizer — turns user uploads into target-size pages.

Two kinds of attachment are accepted (anything else is rejected up front):

  RasterImage  → exactly one page; the image is aspect-fitted into the
                 content box and centred. Undecodable images become a page
                 with a one-line error naming the file.
  PdfDocument  → one page per source page. Pages already the target size
                 (±1 pt) are copied verbatim; others are transcluded —
                 scaled and centred onto a fresh target-size page.
                 Unreadable PDFs raise AttachmentDecodeError; the assembler
                 logs and skips them.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError
from pypdf import PageObject, PdfReader, Transformation
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from .exceptions import AttachmentDecodeError, UnsupportedAttachmentError
from .geometry import Box, Placement, fit_into_box, mm_to_pt
from .labels import ReceiptLabels
from .models import Attachment, PdfDocument, RasterImage
from .style import DEFAULT_STYLE, Fonts, StyleConstants

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"

_GENERIC_MEDIA_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})

# Leading bytes of the raster formats Pillow decodes out of the box
_IMAGE_SIGNATURES: tuple[bytes, ...] = (
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",  # JPEG
    b"GIF87a",
    b"GIF89a",
    b"BM",
    b"II*\x00",  # TIFF little-endian
    b"MM\x00*",  # TIFF big-endian
)


# ─── Classification ──────────────────────────────────────────────────


def _sniff_media_type(content: bytes) -> str | None:
    head = content[:16]
    if head.lstrip().startswith(b"%PDF-"):
        return PDF_MEDIA_TYPE
    if head.startswith(b"RIFF") and head[8:12] == b"WEBP":
        return "image/webp"
    if any(head.startswith(sig) for sig in _IMAGE_SIGNATURES):
        return "image/*"
    return None


def classify_attachment(filename: str, media_type: str | None, content: bytes) -> Attachment:
    """Wrap an upload as a RasterImage or PdfDocument.

    The declared media type decides (image/* or application/pdf, like the
    upload filter). A missing or generic type falls back to magic bytes.

    Raises:
        UnsupportedAttachmentError: For any other kind of file.
    """
    declared = (media_type or "").split(";")[0].strip().lower()
    effective = _sniff_media_type(content) if declared in _GENERIC_MEDIA_TYPES else declared

    if effective == PDF_MEDIA_TYPE:
        return PdfDocument(filename=filename, media_type=PDF_MEDIA_TYPE, content=content)
    if effective and effective.startswith("image/"):
        return RasterImage(filename=filename, media_type=declared or effective, content=content)

    raise UnsupportedAttachmentError(
        f"'{filename}' is not an image or PDF (media type {media_type!r})",
        details={"filename": filename, "media_type": media_type},
    )


# ─── Raster Images ───────────────────────────────────────────────────


def _flatten(image: Image.Image) -> Image.Image:
    """Drop transparency onto white and normalise the colour mode."""
    has_alpha = image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info)
    if has_alpha:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode not in ("RGB", "L"):
        return image.convert("RGB")
    return image


def decode_image(content: bytes, filename: str) -> Image.Image:
    """Decode image bytes, honouring EXIF orientation.

    Raises:
        AttachmentDecodeError: If Pillow cannot read the data.
    """
    try:
        with Image.open(io.BytesIO(content)) as opened:
            opened.load()
            image = ImageOps.exif_transpose(opened)
        return _flatten(image)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise AttachmentDecodeError(
            f"Could not decode image '{filename}': {e}",
            details={"filename": filename},
        ) from e


@dataclass
class PlacedImage:
    """A decoded image and where it goes on its page (mm, from top-left)."""

    filename: str
    image: Image.Image
    placement: Placement


@dataclass
class ErrorNotice:
    """Stand-in page content for an image that failed to decode."""

    filename: str
    text: str


PageContent = Union[PlacedImage, ErrorNotice]


def normalize_image(
    attachment: RasterImage,
    labels: ReceiptLabels,
    style: StyleConstants = DEFAULT_STYLE,
) -> PageContent:
    """Fit one image into the page's content box, or describe its failure."""
    try:
        image = decode_image(attachment.content, attachment.filename)
    except AttachmentDecodeError as e:
        logger.warning("Image attachment replaced by error page: %s", e)
        return ErrorNotice(
            filename=attachment.filename,
            text=labels.attachment_error.format(filename=attachment.filename),
        )

    placement = fit_into_box(image.width, image.height, style.content_box_mm)
    return PlacedImage(filename=attachment.filename, image=image, placement=placement)


def draw_image_page(canvas: Canvas, content: PageContent, fonts: Fonts, style: StyleConstants = DEFAULT_STYLE) -> None:
    """Draw normalized image content on the canvas's current page."""
    _, page_height = style.page_size_pt

    if isinstance(content, ErrorNotice):
        canvas.setFont(fonts.regular, style.error_font_size)
        canvas.drawString(mm_to_pt(style.margin_x_mm), page_height / 2, content.text)
        return

    placement = content.placement
    canvas.drawImage(
        ImageReader(content.image),
        mm_to_pt(placement.x),
        page_height - mm_to_pt(placement.y + placement.height),
        mm_to_pt(placement.width),
        mm_to_pt(placement.height),
    )


# ─── PDF Documents ───────────────────────────────────────────────────


@dataclass
class NormalizedPage:
    """One output page taken from a PDF attachment."""

    page: PageObject
    transcluded: bool
    placement: Optional[Placement] = None  # points, bottom-up; set when transcluded


def _effective_size(page: PageObject) -> tuple[float, float]:
    width = float(page.mediabox.width)
    height = float(page.mediabox.height)
    if page.rotation % 180 == 90:
        return height, width
    return width, height


def _matches_target(size: tuple[float, float], target: tuple[float, float], tolerance: float) -> bool:
    return abs(size[0] - target[0]) <= tolerance and abs(size[1] - target[1]) <= tolerance


def _transclude(page: PageObject, style: StyleConstants) -> NormalizedPage:
    """Place a source page, scaled and centred, on a fresh target page."""
    if page.rotation % 360:
        page.transfer_rotation_to_content()

    box = page.mediabox
    width, height = float(box.width), float(box.height)
    target_w, target_h = style.page_size_pt
    margin_x = mm_to_pt(style.margin_x_mm)
    margin_y = mm_to_pt(style.margin_y_mm)

    placement = fit_into_box(width, height, Box(margin_x, margin_y, target_w - 2 * margin_x, target_h - 2 * margin_y))
    transform = (
        Transformation()
        .translate(-float(box.left), -float(box.bottom))
        .scale(placement.scale, placement.scale)
        .translate(placement.x, placement.y)
    )

    blank = PageObject.create_blank_page(width=target_w, height=target_h)
    blank.merge_transformed_page(page, transform)
    return NormalizedPage(page=blank, transcluded=True, placement=placement)


def normalize_pdf(attachment: PdfDocument, style: StyleConstants = DEFAULT_STYLE) -> list[NormalizedPage]:
    """Reconcile every page of a PDF attachment with the target page size.

    Raises:
        AttachmentDecodeError: If the PDF cannot be parsed, decrypted, or
            one of its pages cannot be placed.
    """
    target = style.page_size_pt
    try:
        reader = PdfReader(io.BytesIO(attachment.content))
        if reader.is_encrypted and not reader.decrypt(""):
            raise AttachmentDecodeError(
                f"PDF '{attachment.filename}' is password protected",
                details={"filename": attachment.filename},
            )
        if len(reader.pages) == 0:
            raise AttachmentDecodeError(
                f"PDF '{attachment.filename}' has no pages",
                details={"filename": attachment.filename},
            )

        pages: list[NormalizedPage] = []
        for page in reader.pages:
            if _matches_target(_effective_size(page), target, style.pdf_size_tolerance_pt):
                pages.append(NormalizedPage(page=page, transcluded=False))
            else:
                pages.append(_transclude(page, style))
    except AttachmentDecodeError:
        raise
    except Exception as e:
        raise AttachmentDecodeError(
            f"Could not read PDF '{attachment.filename}': {e}",
            details={"filename": attachment.filename},
        ) from e

    logger.info(
        "PDF '%s': %d page(s), %d transcluded",
        attachment.filename,
        len(pages),
        sum(1 for p in pages if p.transcluded),
    )
    return pages
