"""
Amount-to-words converter.

    amount_to_words("1234.56", "pl", "PLN")
        → "tysiąc dwieście trzydzieści cztery złote pięćdziesiąt sześć groszy"

Runs on every keystroke, so it NEVER raises on bad input: anything that is
not a finite non-negative number yields "". Only an unknown currency or
language (a programming error) propagates as LexiconLookupError.

Phrase rules:
  - major phrase: emitted when major > 0, or when the whole amount is zero
    ("zero złotych")
  - minor phrase: emitted only when minor > 0 (a zero minor part is
    silently dropped, unlike the major rule)
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from .cardinals import to_cardinal
from .lexicon import lookup
from .models import Currency, Gender, Language, Money, PluralForms
from .plurals import plural_category

logger = logging.getLogger(__name__)


def parse_amount(amount_text: str) -> Money | None:
    """Parse user text into Money, or None if it is not a usable amount."""
    normalized = (amount_text or "").replace(",", ".").strip()
    if not normalized:
        return None
    try:
        return Money.from_decimal(Decimal(normalized))
    except (InvalidOperation, ValueError):
        return None


def _phrase(count: int, language: Language | str, forms: PluralForms, gender: Gender) -> str:
    return f"{to_cardinal(count, language, gender)} {forms.select(plural_category(count))}"


def amount_to_words(
    amount_text: str,
    language: Language | str,
    currency: Currency | str,
) -> str:
    """Spell a monetary amount in words.

    Args:
        amount_text: e.g. "21.00", "1,01" or "0"
        language: one of pl / en / ru / uk
        currency: one of USD / PLN / UAH / EUR

    Returns:
        The phrase, or "" while the input is not (yet) a valid amount.
    """
    entry = lookup(currency, language)

    money = parse_amount(amount_text)
    if money is None:
        return ""

    parts: list[str] = []
    try:
        if money.major_units > 0 or money.minor_units == 0:
            parts.append(_phrase(money.major_units, language, entry.major, entry.major_gender))
        if money.minor_units > 0:
            parts.append(_phrase(money.minor_units, language, entry.minor, entry.minor_gender))
    except ValueError as exc:
        logger.debug("Amount %r cannot be spelled: %s", amount_text, exc)
        return ""

    return " ".join(parts)
