"""
Style constants and font registration for the receipt pages.

Every measurement the layout engine and the attachment normalizer use is
declared here, in millimetres, so the whole document geometry can be
tuned (or tested) through one frozen object.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .geometry import Box, mm_to_pt

logger = logging.getLogger(__name__)


_DEFAULT_REGULAR_FONTS: tuple[str, ...] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
)
_DEFAULT_BOLD_FONTS: tuple[str, ...] = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
)


@dataclass(frozen=True)
class StyleConstants:
    """Fixed geometry of an A4 portrait receipt (millimetres unless noted)."""

    page_width_mm: float = 210.0
    page_height_mm: float = 297.0
    margin_x_mm: float = 15.0
    margin_y_mm: float = 20.0

    # Header
    header_baseline_mm: float = 20.0
    title_baseline_mm: float = 32.0
    header_font_size: float = 11.0
    title_font_size: float = 16.0

    # Label / value table
    table_top_mm: float = 45.0
    label_width_mm: float = 55.0
    row_height_mm: float = 9.0
    sub_row_height_mm: float = 7.0
    cell_padding_mm: float = 2.0
    label_font_size: float = 9.0
    body_font_size: float = 10.0
    label_shade: float = 0.9  # grey level of the label cell fill
    border_width_pt: float = 0.6
    based_on_lines: int = 3
    amount_in_words_lines: int = 3

    # Signature block
    signature_gap_mm: float = 12.0
    signature_caption_gap_mm: float = 2.0
    signature_box_width_mm: float = 80.0
    signature_box_height_mm: float = 28.0
    signature_padding_mm: float = 2.0
    cashier_name_gap_mm: float = 12.0

    # Attachment pages
    error_font_size: float = 12.0
    pdf_size_tolerance_pt: float = 1.0

    regular_font_paths: tuple[str, ...] = _DEFAULT_REGULAR_FONTS
    bold_font_paths: tuple[str, ...] = _DEFAULT_BOLD_FONTS

    @property
    def page_size_pt(self) -> tuple[float, float]:
        return mm_to_pt(self.page_width_mm), mm_to_pt(self.page_height_mm)

    @property
    def content_width_mm(self) -> float:
        return self.page_width_mm - 2 * self.margin_x_mm

    @property
    def content_height_mm(self) -> float:
        return self.page_height_mm - 2 * self.margin_y_mm

    @property
    def content_box_mm(self) -> Box:
        """Area inside the outer margin, measured from the top-left corner."""
        return Box(self.margin_x_mm, self.margin_y_mm, self.content_width_mm, self.content_height_mm)


DEFAULT_STYLE = StyleConstants()


# ─── Fonts ───────────────────────────────────────────────────────────


class Fonts(NamedTuple):
    regular: str
    bold: str


_FALLBACK_FONTS = Fonts("Helvetica", "Helvetica-Bold")
_REGISTERED: dict[tuple[tuple[str, ...], tuple[str, ...]], Fonts] = {}


def _first_existing_path(candidates: tuple[str, ...]) -> str | None:
    return next((path for path in candidates if Path(path).is_file()), None)


def register_fonts(style: StyleConstants = DEFAULT_STYLE) -> Fonts:
    """Register a Unicode TrueType pair so Polish and Cyrillic render.

    The first existing regular/bold candidates win. Without any, the
    built-in Helvetica pair is used (Latin-1 only) and a warning is logged.
    """
    key = (style.regular_font_paths, style.bold_font_paths)
    if key in _REGISTERED:
        return _REGISTERED[key]

    regular_path = _first_existing_path(style.regular_font_paths)
    bold_path = _first_existing_path(style.bold_font_paths) or regular_path

    if regular_path is None or bold_path is None:
        logger.warning(
            "No TrueType font found — falling back to Helvetica; "
            "non-Latin-1 characters will not render"
        )
        fonts = _FALLBACK_FONTS
    else:
        fonts = Fonts(f"Receipt-{Path(regular_path).stem}", f"Receipt-{Path(bold_path).stem}-Bold")
        registered = set(pdfmetrics.getRegisteredFontNames())
        try:
            if fonts.regular not in registered:
                pdfmetrics.registerFont(TTFont(fonts.regular, regular_path))
            if fonts.bold not in registered:
                pdfmetrics.registerFont(TTFont(fonts.bold, bold_path))
        except Exception as e:
            logger.warning("Could not load TrueType fonts (%s) — falling back to Helvetica", e)
            fonts = _FALLBACK_FONTS

    _REGISTERED[key] = fonts
    return fonts
