"""
Plural-category resolver (East Slavic counting rule).

The same rule is applied to every language; the lexicon decides which word
fills each category, so English simply repeats one form three times.
"""

from __future__ import annotations

from .models import PluralCategory


def plural_category(n: int) -> PluralCategory:
    """Return the grammatical category for a non-negative count.

    Examples:
        1 → SINGULAR, 2 → FEW, 5 → MANY, 11 → MANY, 21 → SINGULAR, 0 → MANY
    """
    if n < 0:
        raise ValueError(f"Count must be non-negative: {n}")

    last_two = n % 100
    last_one = n % 10

    if 11 <= last_two <= 19:
        return PluralCategory.MANY
    if last_one == 1:
        return PluralCategory.SINGULAR
    if 2 <= last_one <= 4:
        return PluralCategory.FEW
    return PluralCategory.MANY
