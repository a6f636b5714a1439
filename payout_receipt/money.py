"""
Money normalizer — turns whatever the user typed into a canonical amount.

Two entry points mirror the two moments the amount field is touched:

    sanitize_live("12,345")  → "12.34"    (every keystroke: cap, never round)
    format_amount("12,345")  → "12.35"    (field blur: round half-up)

Multiple separators: everything after the first fractional group is
dropped ("1.2.3" → "1.2"). Nothing here raises — an unparseable value
becomes the empty string so typing is never interrupted.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

_NOT_AMOUNT_CHAR = re.compile(r"[^0-9.,]")
_CENT = Decimal("0.01")


def sanitize_amount(raw: str) -> str:
    """Keep digits and separators, map ',' to '.', collapse extra dots."""
    cleaned = _NOT_AMOUNT_CHAR.sub("", raw or "")
    cleaned = cleaned.replace(",", ".")
    parts = cleaned.split(".")
    if len(parts) > 2:
        cleaned = f"{parts[0]}.{parts[1]}"
    return cleaned


def sanitize_live(raw: str) -> str:
    """Keystroke path: sanitize and cap the fraction at two digits."""
    cleaned = sanitize_amount(raw)
    whole, dot, fraction = cleaned.partition(".")
    if dot and len(fraction) > 2:
        return f"{whole}.{fraction[:2]}"
    return cleaned


def format_amount(raw: str) -> str:
    """Blur path: sanitize, parse, and render with exactly two decimals.

    Returns:
        "" when the input holds no number, otherwise e.g. "1234.50".
    """
    cleaned = sanitize_amount(raw)
    if not cleaned or cleaned == ".":
        return ""
    try:
        value = Decimal(cleaned).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ""
    return f"{value:f}"
