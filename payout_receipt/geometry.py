"""
Page geometry: aspect-preserving fit and unit conversion.

All layout is specified top-down in millimetres (as on paper); reportlab
and pypdf work bottom-up in points. Conversions happen only at draw time.
"""

from __future__ import annotations

from dataclasses import dataclass

from reportlab.lib.units import mm

PT_PER_MM: float = mm  # 72 / 25.4


def mm_to_pt(value_mm: float) -> float:
    return float(value_mm) * PT_PER_MM


def pt_to_mm(value_pt: float) -> float:
    return float(value_pt) / PT_PER_MM


@dataclass(frozen=True)
class Box:
    """An axis-aligned rectangle; units are whatever the caller uses."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Placement:
    """Where a scaled object lands inside a box."""

    x: float
    y: float
    width: float
    height: float
    scale: float


def fit_into_box(content_width: float, content_height: float, box: Box) -> Placement:
    """Scale content to fit the box without distortion and center it.

    scale = min(box.width / content_width, box.height / content_height)

    The axis that binds gets the full box extent; the other is centered.
    Works in any unit as long as box and content share the origin's axis
    direction.

    Raises:
        ValueError: If the content has no area.
    """
    if content_width <= 0 or content_height <= 0:
        raise ValueError(f"Content must have positive size, got {content_width}x{content_height}")

    scale = min(box.width / content_width, box.height / content_height)
    width = content_width * scale
    height = content_height * scale
    return Placement(
        x=box.x + (box.width - width) / 2,
        y=box.y + (box.height - height) / 2,
        width=width,
        height=height,
        scale=scale,
    )
