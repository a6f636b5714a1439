"""
Cardinal numbers spelled out in words — one speller per language.

Spelling is delegated to num2words. The only local logic is numeral
gender, which the currency noun dictates:

    to_cardinal(2, Language.UK, Gender.FEMININE)  → "дві"
    to_cardinal(1000, Language.RU)                → "одна тысяча"
    to_cardinal(1, Language.PL, Gender.NEUTER)    → "jedno"

num2words' Polish speller has no gender argument, so spell_pl() patches
the final unit word itself.

Supported range: 0 ≤ n < 10**12.
"""

from __future__ import annotations

from typing import Callable

from num2words import num2words

from .models import Gender, Language

MAX_CARDINAL = 10**12

Speller = Callable[[int, Gender], str]

# num2words' Russian speller takes single-letter gender codes
_RU_GENDER = {Gender.MASCULINE: "m", Gender.FEMININE: "f", Gender.NEUTER: "n"}

_PL_SINGLE = {Gender.MASCULINE: "jeden", Gender.FEMININE: "jedna", Gender.NEUTER: "jedno"}


def _check_range(n: int) -> None:
    if n < 0 or n >= MAX_CARDINAL:
        raise ValueError(f"Cardinal out of supported range [0, {MAX_CARDINAL}): {n}")


def spell_en(n: int, gender: Gender = Gender.MASCULINE) -> str:
    """English has no numeral gender; the argument is ignored."""
    _check_range(n)
    return num2words(n, lang="en")


def spell_pl(n: int, gender: Gender = Gender.MASCULINE) -> str:
    """Polish, with "jedna"/"jedno" for a bare 1 and "dwie" for feminine 2.

    A compound one never inflects ("dwadzieścia jeden hrywien").
    """
    _check_range(n)
    if n == 1:
        return _PL_SINGLE[gender]

    words = num2words(n, lang="pl").split()
    if gender is Gender.FEMININE and n % 10 == 2 and n % 100 != 12 and words[-1] == "dwa":
        words[-1] = "dwie"
    return " ".join(words)


def spell_ru(n: int, gender: Gender = Gender.MASCULINE) -> str:
    _check_range(n)
    return num2words(n, lang="ru", gender=_RU_GENDER[gender])


def spell_uk(n: int, gender: Gender = Gender.MASCULINE) -> str:
    _check_range(n)
    return num2words(n, lang="uk", gender=gender.value)


# ─── Registry ───────────────────────────────────────────────────────

SPELLERS: dict[Language, Speller] = {
    Language.EN: spell_en,
    Language.PL: spell_pl,
    Language.RU: spell_ru,
    Language.UK: spell_uk,
}


def to_cardinal(n: int, language: Language | str, gender: Gender = Gender.MASCULINE) -> str:
    """Spell a non-negative integer in the given language.

    Raises:
        ValueError: If n is outside [0, 10**12) or the language is unknown.
    """
    return SPELLERS[Language(language)](n, gender)
