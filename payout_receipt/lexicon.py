"""
Currency lexicon — unit words for every (currency, language) pair.

A pure lookup table: 4 currencies × 4 languages = 16 entries, each holding
singular / few / many forms for the major and minor unit plus the nouns'
grammatical gender. No branching per language lives here; the generic
plural_category() picks the slot.

English rows repeat one form in all three slots (the category rule is
Slavic and would misfire on English plurals).
"""

from __future__ import annotations

from .exceptions import LexiconLookupError
from .models import Currency, Gender, Language, LexiconEntry, PluralForms

_M = Gender.MASCULINE
_F = Gender.FEMININE
_N = Gender.NEUTER


def _forms(singular: str, few: str | None = None, many: str | None = None) -> PluralForms:
    """Build a triple; omitted forms repeat the singular."""
    return PluralForms(
        singular=singular,
        few=few if few is not None else singular,
        many=many if many is not None else (few if few is not None else singular),
    )


# ─── The Table ───────────────────────────────────────────────────────

CURRENCY_LEXICON: dict[tuple[Currency, Language], LexiconEntry] = {
    # ── Polish złoty ────────────────────────────────────────────────
    (Currency.PLN, Language.PL): LexiconEntry(
        major=_forms("złoty", "złote", "złotych"),
        minor=_forms("grosz", "grosze", "groszy"),
    ),
    (Currency.PLN, Language.EN): LexiconEntry(
        major=_forms("zloty"),
        minor=_forms("grosz"),
    ),
    (Currency.PLN, Language.RU): LexiconEntry(
        major=_forms("злотый", "злотых", "злотых"),
        minor=_forms("грош", "гроша", "грошей"),
    ),
    (Currency.PLN, Language.UK): LexiconEntry(
        major=_forms("злотий", "злотих", "злотих"),
        minor=_forms("грош", "гроші", "грошів"),
    ),
    # ── US dollar ───────────────────────────────────────────────────
    (Currency.USD, Language.PL): LexiconEntry(
        major=_forms("dolar", "dolary", "dolarów"),
        minor=_forms("cent", "centy", "centów"),
    ),
    (Currency.USD, Language.EN): LexiconEntry(
        major=_forms("dollar"),
        minor=_forms("cent"),
    ),
    (Currency.USD, Language.RU): LexiconEntry(
        major=_forms("доллар", "доллара", "долларов"),
        minor=_forms("цент", "цента", "центов"),
    ),
    (Currency.USD, Language.UK): LexiconEntry(
        major=_forms("долар", "долари", "доларів"),
        minor=_forms("цент", "центи", "центів"),
    ),
    # ── Ukrainian hryvnia ───────────────────────────────────────────
    (Currency.UAH, Language.PL): LexiconEntry(
        major=_forms("hrywna", "hrywny", "hrywien"),
        minor=_forms("kopiejka", "kopiejki", "kopiejek"),
        major_gender=_F,
        minor_gender=_F,
    ),
    (Currency.UAH, Language.EN): LexiconEntry(
        major=_forms("hryvnia"),
        minor=_forms("kopiyka"),
        major_gender=_F,
        minor_gender=_F,
    ),
    (Currency.UAH, Language.RU): LexiconEntry(
        major=_forms("гривна", "гривны", "гривен"),
        minor=_forms("копейка", "копейки", "копеек"),
        major_gender=_F,
        minor_gender=_F,
    ),
    (Currency.UAH, Language.UK): LexiconEntry(
        major=_forms("гривня", "гривні", "гривень"),
        minor=_forms("копійка", "копійки", "копійок"),
        major_gender=_F,
        minor_gender=_F,
    ),
    # ── Euro (indeclinable in pl / ru / uk) ─────────────────────────
    (Currency.EUR, Language.PL): LexiconEntry(
        major=_forms("euro"),
        minor=_forms("cent", "centy", "centów"),
        major_gender=_N,
    ),
    (Currency.EUR, Language.EN): LexiconEntry(
        major=_forms("euro"),
        minor=_forms("cent"),
        major_gender=_N,
    ),
    (Currency.EUR, Language.RU): LexiconEntry(
        major=_forms("евро"),
        minor=_forms("цент", "цента", "центов"),
        major_gender=_N,
    ),
    (Currency.EUR, Language.UK): LexiconEntry(
        major=_forms("євро"),
        minor=_forms("цент", "центи", "центів"),
        major_gender=_N,
    ),
}


# ─── Lookup ──────────────────────────────────────────────────────────


def lookup(currency: Currency | str, language: Language | str) -> LexiconEntry:
    """Return the unit words for a currency in a language.

    Raises:
        LexiconLookupError: If either code is outside the fixed set. Inputs
            are validated upstream, so this signals a programming error.
    """
    try:
        key = (Currency(currency), Language(language))
    except ValueError as exc:
        raise LexiconLookupError(
            f"No lexicon entry for currency={currency!r}, language={language!r}",
            details={"currency": str(currency), "language": str(language)},
        ) from exc
    return CURRENCY_LEXICON[key]
