"""
Test suite for the amount side channel: normalizing typed amounts and
spelling them in words.

Pure functions only — no PDF, no I/O.

Run: pytest tests/ -v
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from payout_receipt.amount_words import amount_to_words, parse_amount
from payout_receipt.cardinals import MAX_CARDINAL, spell_en, spell_pl, spell_ru, spell_uk, to_cardinal
from payout_receipt.exceptions import LexiconLookupError
from payout_receipt.lexicon import CURRENCY_LEXICON, lookup
from payout_receipt.models import Currency, Gender, Language, Money, PluralCategory
from payout_receipt.money import format_amount, sanitize_amount, sanitize_live
from payout_receipt.plurals import plural_category


# ═══════════════════════════════════════════════════════════════════════
# MONEY NORMALIZER
# ═══════════════════════════════════════════════════════════════════════


class TestSanitize:
    def test_strips_letters_and_spaces(self):
        assert sanitize_amount("1 234 zł") == "1234"

    def test_comma_becomes_dot(self):
        assert sanitize_amount("12,5") == "12.5"

    def test_extra_separators_truncated_after_first_fraction(self):
        assert sanitize_amount("1.2.3") == "1.2"
        assert sanitize_amount("1,2,3") == "1.2"

    def test_empty(self):
        assert sanitize_amount("") == ""

    def test_live_caps_fraction_without_rounding(self):
        assert sanitize_live("12,345") == "12.34"
        assert sanitize_live("12.349") == "12.34"

    def test_live_keeps_trailing_dot_while_typing(self):
        assert sanitize_live("12.") == "12."


class TestFormatAmount:
    def test_rounds_half_up(self):
        assert format_amount("12,345") == "12.35"
        assert format_amount("0.005") == "0.01"

    def test_pads_to_two_decimals(self):
        assert format_amount("5") == "5.00"
        assert format_amount("1 234,5") == "1234.50"

    def test_leading_dot(self):
        assert format_amount(".5") == "0.50"

    def test_no_number_gives_empty(self):
        assert format_amount("") == ""
        assert format_amount("abc") == ""
        assert format_amount(".") == ""

    @pytest.mark.parametrize("raw", ["12,345", "5", "1.2.3", "0.005", "999999.999", "abc", ""])
    def test_idempotent(self, raw: str):
        once = format_amount(raw)
        assert format_amount(once) == once


class TestMoney:
    def test_splits_units(self):
        money = Money.from_decimal(Decimal("1234.56"))
        assert (money.major_units, money.minor_units) == (1234, 56)

    def test_rounding_carries_into_major(self):
        money = Money.from_decimal(Decimal("1.999"))
        assert (money.major_units, money.minor_units) == (2, 0)

    def test_negative_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            Money.from_decimal(Decimal("-1"))

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            Money.from_decimal(Decimal("NaN"))

    def test_parse_amount_accepts_comma(self):
        assert parse_amount("1,5") == Money(major_units=1, minor_units=50)

    def test_parse_amount_rejects_garbage(self):
        assert parse_amount("") is None
        assert parse_amount("12a") is None
        assert parse_amount("-3") is None
        assert parse_amount("Infinity") is None


# ═══════════════════════════════════════════════════════════════════════
# PLURAL CATEGORY
# ═══════════════════════════════════════════════════════════════════════


class TestPluralCategory:
    @pytest.mark.parametrize(
        "n, expected",
        [
            (1, PluralCategory.SINGULAR),
            (2, PluralCategory.FEW),
            (4, PluralCategory.FEW),
            (5, PluralCategory.MANY),
            (11, PluralCategory.MANY),
            (12, PluralCategory.MANY),
            (14, PluralCategory.MANY),
            (21, PluralCategory.SINGULAR),
            (22, PluralCategory.FEW),
            (0, PluralCategory.MANY),
            (111, PluralCategory.MANY),
            (101, PluralCategory.SINGULAR),
        ],
    )
    def test_category(self, n: int, expected: PluralCategory):
        assert plural_category(n) is expected

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            plural_category(-1)


# ═══════════════════════════════════════════════════════════════════════
# CURRENCY LEXICON
# ═══════════════════════════════════════════════════════════════════════


class TestLexicon:
    def test_table_is_complete(self):
        assert len(CURRENCY_LEXICON) == len(Currency) * len(Language)
        for currency in Currency:
            for language in Language:
                assert (currency, language) in CURRENCY_LEXICON

    def test_lookup_accepts_codes(self):
        entry = lookup("PLN", "pl")
        assert entry.major.many == "złotych"
        assert entry.minor.few == "grosze"

    def test_english_repeats_one_form(self):
        entry = lookup(Currency.USD, Language.EN)
        assert entry.major.singular == entry.major.few == entry.major.many == "dollar"

    def test_hryvnia_is_feminine(self):
        assert lookup(Currency.UAH, Language.UK).major_gender is Gender.FEMININE

    def test_unknown_currency_raises(self):
        with pytest.raises(LexiconLookupError) as exc_info:
            lookup("GBP", "pl")
        assert exc_info.value.code == "LEXICON_LOOKUP_FAILED"

    def test_unknown_language_raises(self):
        with pytest.raises(LexiconLookupError):
            lookup("PLN", "de")

    def test_symbols(self):
        assert Currency.PLN.symbol == "zł"
        assert Currency.UAH.symbol == "₴"


# ═══════════════════════════════════════════════════════════════════════
# CARDINALS
# ═══════════════════════════════════════════════════════════════════════


class TestEnglishCardinals:
    def test_zero(self):
        assert spell_en(0) == "zero"

    def test_teens_and_tens(self):
        assert spell_en(13) == "thirteen"
        assert spell_en(40) == "forty"
        assert spell_en(21) == "twenty-one"

    def test_thousands(self):
        assert spell_en(1234) == "one thousand, two hundred and thirty-four"

    def test_hundred_and_units(self):
        assert spell_en(105) == "one hundred and five"

    def test_gender_ignored(self):
        assert spell_en(2, Gender.FEMININE) == "two"


class TestPolishCardinals:
    def test_bare_thousand(self):
        assert spell_pl(1000) == "tysiąc"

    def test_thousand_forms(self):
        assert spell_pl(2000) == "dwa tysiące"
        assert spell_pl(5000) == "pięć tysięcy"
        assert spell_pl(12000) == "dwanaście tysięcy"
        assert spell_pl(21000) == "dwadzieścia jeden tysięcy"
        assert spell_pl(22000) == "dwadzieścia dwa tysiące"

    def test_hundreds(self):
        assert spell_pl(234) == "dwieście trzydzieści cztery"

    def test_gendered_units(self):
        assert spell_pl(1, Gender.FEMININE) == "jedna"
        assert spell_pl(1, Gender.NEUTER) == "jedno"
        assert spell_pl(2, Gender.FEMININE) == "dwie"
        assert spell_pl(22, Gender.FEMININE) == "dwadzieścia dwie"
        assert spell_pl(2002, Gender.FEMININE) == "dwa tysiące dwie"
        assert spell_pl(12, Gender.FEMININE) == "dwanaście"

    def test_compound_one_does_not_inflect(self):
        assert spell_pl(21, Gender.FEMININE) == "dwadzieścia jeden"

    def test_millions(self):
        assert spell_pl(3_000_000) == "trzy miliony"


class TestEastSlavicCardinals:
    def test_russian_thousand_is_feminine(self):
        assert spell_ru(1000) == "одна тысяча"
        assert spell_ru(2000) == "две тысячи"
        assert spell_ru(5000) == "пять тысяч"

    def test_russian_millions(self):
        assert spell_ru(5_000_000) == "пять миллионов"
        assert spell_ru(2_000_000) == "два миллиона"

    def test_russian_gender(self):
        assert spell_ru(2, Gender.FEMININE) == "две"
        assert spell_ru(2) == "два"

    def test_ukrainian_zero(self):
        assert spell_uk(0) == "нуль"

    def test_ukrainian_gender(self):
        assert spell_uk(2, Gender.FEMININE) == "дві"

    def test_ukrainian_thousands(self):
        assert spell_uk(21000) == "двадцять одна тисяча"
        assert spell_uk(11000) == "одинадцять тисяч"


class TestCardinalRange:
    def test_upper_bound(self):
        with pytest.raises(ValueError, match="range"):
            to_cardinal(MAX_CARDINAL, Language.EN)

    def test_largest_supported(self):
        assert "billion" in to_cardinal(MAX_CARDINAL - 1, "en")

    def test_negative(self):
        with pytest.raises(ValueError):
            to_cardinal(-1, Language.PL)


# ═══════════════════════════════════════════════════════════════════════
# AMOUNT TO WORDS
# ═══════════════════════════════════════════════════════════════════════


class TestAmountToWords:
    def test_zero_gives_major_phrase_only(self):
        assert amount_to_words("0.00", "pl", "PLN") == "zero złotych"

    def test_one_and_one(self):
        assert amount_to_words("1.01", "pl", "PLN") == "jeden złoty jeden grosz"

    def test_twenty_one_uses_singular_and_no_minor(self):
        assert amount_to_words("21.00", "pl", "PLN") == "dwadzieścia jeden złoty"

    def test_few_forms(self):
        assert amount_to_words("2.02", "pl", "PLN") == "dwa złote dwa grosze"

    def test_full_example(self):
        expected = "tysiąc dwieście trzydzieści cztery złote pięćdziesiąt sześć groszy"
        assert amount_to_words("1234.56", "pl", "PLN") == expected

    def test_minor_only(self):
        assert amount_to_words("0.50", "en", "USD") == "fifty cent"

    def test_english(self):
        assert amount_to_words("1.01", Language.EN, Currency.USD) == "one dollar one cent"

    def test_feminine_currency(self):
        assert amount_to_words("1.01", "uk", "UAH") == "одна гривня одна копійка"
        assert amount_to_words("2", "ru", "UAH") == "две гривны"
        assert amount_to_words("2", "pl", "UAH") == "dwie hrywny"

    def test_neuter_currency(self):
        assert amount_to_words("1", "pl", "EUR") == "jedno euro"
        assert amount_to_words("5.05", "ru", "EUR") == "пять евро пять центов"

    def test_comma_separator(self):
        assert amount_to_words("1,5", "pl", "PLN") == "jeden złoty pięćdziesiąt groszy"

    def test_rounding_before_split(self):
        assert amount_to_words("1.999", "en", "USD") == "two dollar"

    @pytest.mark.parametrize("text", ["", "   ", "abc", "-5", "NaN", "1e15"])
    def test_invalid_amount_gives_empty(self, text: str):
        assert amount_to_words(text, "pl", "PLN") == ""

    def test_unknown_language_propagates(self):
        with pytest.raises(LexiconLookupError):
            amount_to_words("1", "xx", "PLN")
