"""
Page layout engine — draws the primary receipt page.

Layout (top-down, millimetres, A4 portrait):

    ┌───────────────────────────────────────────────┐
    │            organisation line (optional)       │
    │                 DOCUMENT TITLE                │
    │ ┌──────────┬────────────────────────────────┐ │
    │ │ label    │ value                          │ │  single-line rows
    │ ├──────────┼────────────────────────────────┤ │
    │ │ label    │ line 1                         │ │  multi-line rows:
    │ │          │ line 2                         │ │  N fixed sub-rows,
    │ │          │ line 3                         │ │  overflow dropped
    │ └──────────┴────────────────────────────────┘ │
    │  cashier signature       recipient signature  │
    │  ┌──────────────┐        ┌──────────────┐     │
    │  └──────────────┘        └──────────────┘     │
    │  cashier name ________                        │
    └───────────────────────────────────────────────┘

Constraint: there is no pagination. The fixed row set always fits one
page; text that does not fit its rows is truncated, never carried over.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from reportlab.lib.utils import ImageReader
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from .attachments import decode_image
from .exceptions import AttachmentDecodeError
from .geometry import Box, fit_into_box, mm_to_pt, pt_to_mm
from .labels import ReceiptLabels
from .models import FormData
from .style import DEFAULT_STYLE, Fonts, StyleConstants, register_fonts

logger = logging.getLogger(__name__)

_LEADING = 1.2  # line height as a multiple of the font size


# ─── Text Wrapping ───────────────────────────────────────────────────


def _longest_fitting_prefix(word: str, font_name: str, font_size: float, max_width: float) -> int:
    cut = 1
    while cut < len(word) and stringWidth(word[: cut + 1], font_name, font_size) <= max_width:
        cut += 1
    return cut


def wrap_text(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
    """Greedy word wrap using real font metrics.

    Explicit newlines start a new line; a single word wider than the line
    is broken between characters. Returns every line — truncation is the
    caller's decision.
    """
    lines: list[str] = []
    for paragraph in (text or "").splitlines():
        words = paragraph.split()
        if not words:
            lines.append("")
            continue
        current = ""
        for word in words:
            candidate = f"{current} {word}" if current else word
            if stringWidth(candidate, font_name, font_size) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            while len(word) > 1 and stringWidth(word, font_name, font_size) > max_width:
                cut = _longest_fitting_prefix(word, font_name, font_size, max_width)
                lines.append(word[:cut])
                word = word[cut:]
            current = word
        lines.append(current)
    return lines


# ─── Row Plan ────────────────────────────────────────────────────────


@dataclass
class Row:
    """One label/value row of the receipt table."""

    label: str
    lines: list[str] = field(default_factory=list)
    sub_rows: int = 1
    height_mm: float = 0.0

    @property
    def multiline(self) -> bool:
        return self.sub_rows > 1


def build_rows(
    form: FormData,
    labels: ReceiptLabels,
    style: StyleConstants = DEFAULT_STYLE,
    fonts: Fonts | None = None,
) -> list[Row]:
    """Compute every row's wrapped, truncated content before drawing."""
    fonts = fonts or register_fonts(style)
    value_width_pt = mm_to_pt(style.content_width_mm - style.label_width_mm - 2 * style.cell_padding_mm)

    def single(label: str, value: str) -> Row:
        lines = wrap_text(value, fonts.regular, style.body_font_size, value_width_pt)[:1]
        return Row(label=label, lines=lines, sub_rows=1, height_mm=style.row_height_mm)

    def multi(label: str, value: str, max_lines: int) -> Row:
        wrapped = wrap_text(value, fonts.regular, style.body_font_size, value_width_pt)
        if len(wrapped) > max_lines:
            logger.info("%s: %d wrapped line(s) beyond %d dropped", label, len(wrapped) - max_lines, max_lines)
        return Row(
            label=label,
            lines=wrapped[:max_lines],
            sub_rows=max_lines,
            height_mm=max_lines * style.sub_row_height_mm,
        )

    amount = f"{form.amount} {form.currency.value}" if form.amount else ""
    return [
        single(labels.date, form.date),
        single(labels.amount, amount),
        single(labels.issued_to, form.issued_to),
        single(labels.account_info, form.account_info),
        single(labels.department_name, form.department_name),
        multi(labels.based_on, form.based_on, style.based_on_lines),
        multi(labels.amount_in_words, form.amount_in_words, style.amount_in_words_lines),
    ]


# ─── Drawing ─────────────────────────────────────────────────────────


class _Page:
    """Top-down millimetre coordinates over a bottom-up point canvas."""

    def __init__(self, canvas: Canvas, style: StyleConstants):
        self.canvas = canvas
        self.style = style
        self.height_pt = mm_to_pt(style.page_height_mm)

    def y(self, top_mm: float) -> float:
        return self.height_pt - mm_to_pt(top_mm)

    def rect(self, box: Box, *, fill: bool = False) -> None:
        self.canvas.rect(
            mm_to_pt(box.x),
            self.y(box.y + box.height),
            mm_to_pt(box.width),
            mm_to_pt(box.height),
            stroke=1,
            fill=1 if fill else 0,
        )

    def text(self, x_mm: float, baseline_mm: float, text: str, font: str, size: float) -> None:
        self.canvas.setFont(font, size)
        self.canvas.drawString(mm_to_pt(x_mm), self.y(baseline_mm), text)

    def centered_text(self, baseline_mm: float, text: str, font: str, size: float) -> None:
        self.canvas.setFont(font, size)
        self.canvas.drawCentredString(mm_to_pt(self.style.page_width_mm) / 2.0, self.y(baseline_mm), text)


def _baseline_in(top_mm: float, height_mm: float, font_size: float) -> float:
    """Baseline that vertically centres one line of text in a band."""
    cap_mm = pt_to_mm(font_size) * 0.7
    return top_mm + (height_mm + cap_mm) / 2


def _draw_row(page: _Page, row: Row, top_mm: float, fonts: Fonts) -> None:
    style = page.style
    x0 = style.margin_x_mm
    value_x = x0 + style.label_width_mm
    value_w = style.content_width_mm - style.label_width_mm

    page.canvas.setLineWidth(style.border_width_pt)
    page.canvas.setFillGray(style.label_shade)
    page.rect(Box(x0, top_mm, style.label_width_mm, row.height_mm), fill=True)
    page.canvas.setFillGray(0)
    page.rect(Box(value_x, top_mm, value_w, row.height_mm))

    # Label caption: wrapped inside the label cell, centred as a block
    label_inner_pt = mm_to_pt(style.label_width_mm - 2 * style.cell_padding_mm)
    leading_mm = pt_to_mm(style.label_font_size * _LEADING)
    max_label_lines = max(1, int(row.height_mm // leading_mm))
    label_lines = wrap_text(row.label, fonts.bold, style.label_font_size, label_inner_pt)[:max_label_lines]
    block_top = top_mm + (row.height_mm - len(label_lines) * leading_mm) / 2
    for i, line in enumerate(label_lines):
        baseline = _baseline_in(block_top + i * leading_mm, leading_mm, style.label_font_size)
        page.text(x0 + style.cell_padding_mm, baseline, line, fonts.bold, style.label_font_size)

    # Value: one sub-row per line
    band = style.sub_row_height_mm if row.multiline else row.height_mm
    if row.multiline:
        page.canvas.setLineWidth(style.border_width_pt / 2)
        page.canvas.setDash(1, 2)
        for i in range(1, row.sub_rows):
            y = page.y(top_mm + i * band)
            page.canvas.line(mm_to_pt(value_x), y, mm_to_pt(value_x + value_w), y)
        page.canvas.setDash()
        page.canvas.setLineWidth(style.border_width_pt)
    for i, line in enumerate(row.lines):
        baseline = _baseline_in(top_mm + i * band, band, style.body_font_size)
        page.text(value_x + style.cell_padding_mm, baseline, line, fonts.regular, style.body_font_size)


def _draw_signature(page: _Page, signature: bytes, box: Box) -> None:
    """Aspect-fit the recipient's signature inside the padded box."""
    style = page.style
    try:
        image = decode_image(signature, "signature")
    except AttachmentDecodeError as e:
        logger.warning("Recipient signature skipped: %s", e)
        return

    pad = style.signature_padding_mm
    inner = Box(box.x + pad, box.y + pad, box.width - 2 * pad, box.height - 2 * pad)
    placement = fit_into_box(image.width, image.height, inner)
    page.canvas.drawImage(
        ImageReader(image),
        mm_to_pt(placement.x),
        page.y(placement.y + placement.height),
        mm_to_pt(placement.width),
        mm_to_pt(placement.height),
    )


def _draw_signature_block(page: _Page, form: FormData, labels: ReceiptLabels, top_mm: float, fonts: Fonts) -> float:
    style = page.style
    size = style.body_font_size
    caption_baseline = top_mm + pt_to_mm(size)
    box_top = caption_baseline + style.signature_caption_gap_mm
    left_x = style.margin_x_mm
    right_x = style.margin_x_mm + style.content_width_mm - style.signature_box_width_mm

    cashier_box = Box(left_x, box_top, style.signature_box_width_mm, style.signature_box_height_mm)
    recipient_box = Box(right_x, box_top, style.signature_box_width_mm, style.signature_box_height_mm)

    page.text(left_x, caption_baseline, labels.cashier_signature, fonts.regular, size)
    page.text(right_x, caption_baseline, labels.recipient_signature, fonts.regular, size)
    page.canvas.setLineWidth(style.border_width_pt)
    page.rect(cashier_box)
    page.rect(recipient_box)

    if form.recipient_signature:
        _draw_signature(page, form.recipient_signature, recipient_box)

    # Cashier name: caption plus an empty underline for handwriting
    name_baseline = box_top + style.signature_box_height_mm + style.cashier_name_gap_mm
    page.text(left_x, name_baseline, labels.cashier_name, fonts.regular, size)
    caption_w_mm = pt_to_mm(page.canvas.stringWidth(labels.cashier_name, fonts.regular, size))
    line_start = left_x + caption_w_mm + style.signature_caption_gap_mm
    line_end = max(left_x + style.signature_box_width_mm, line_start + 20)
    y = page.y(name_baseline + 1)
    page.canvas.line(mm_to_pt(line_start), y, mm_to_pt(line_end), y)
    return name_baseline + 1


def render_primary_page(
    canvas: Canvas,
    form: FormData,
    labels: ReceiptLabels,
    style: StyleConstants = DEFAULT_STYLE,
    fonts: Fonts | None = None,
    organization: str = "",
) -> list[Row]:
    """Draw the receipt form on the canvas's current page.

    Does not call showPage(); the assembler owns page breaks.

    Returns:
        The row plan that was drawn.
    """
    fonts = fonts or register_fonts(style)
    page = _Page(canvas, style)

    if organization:
        page.centered_text(style.header_baseline_mm, organization, fonts.regular, style.header_font_size)
    page.centered_text(style.title_baseline_mm, labels.title, fonts.bold, style.title_font_size)

    rows = build_rows(form, labels, style, fonts)
    cursor = style.table_top_mm
    for row in rows:
        _draw_row(page, row, cursor, fonts)
        cursor += row.height_mm

    bottom = _draw_signature_block(page, form, labels, cursor + style.signature_gap_mm, fonts)
    if bottom > style.page_height_mm - style.margin_y_mm:
        logger.warning("Primary page content ends at %.1f mm, below the bottom margin", bottom)
    return rows
