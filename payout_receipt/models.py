"""
Pydantic models for receipt data — the typed boundary of the core.

Form fields are plain strings that the caller has already validated for
presence. Attachments carry their raw bytes; the assembler reads them once
per generation and does not keep them.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# ─── Enumerated Sets ────────────────────────────────────────────────


class Language(str, Enum):
    """Languages the amount can be spelled in (and the page captioned in)."""

    PL = "pl"
    EN = "en"
    RU = "ru"
    UK = "uk"


class Currency(str, Enum):
    """Currencies the receipt can be issued in."""

    USD = "USD"
    PLN = "PLN"
    UAH = "UAH"
    EUR = "EUR"

    @property
    def symbol(self) -> str:
        return _CURRENCY_SYMBOLS[self]


_CURRENCY_SYMBOLS: dict[Currency, str] = {
    Currency.USD: "$",
    Currency.PLN: "zł",
    Currency.UAH: "₴",
    Currency.EUR: "€",
}


class PluralCategory(str, Enum):
    """Grammatical count class that picks a unit word form."""

    SINGULAR = "singular"  # 1, 21, 31 ...
    FEW = "few"  # 2-4, 22-24 ...
    MANY = "many"  # 0, 5-20, 25-30 ...


class Gender(str, Enum):
    """Grammatical gender of a unit noun; Slavic numerals agree with it."""

    MASCULINE = "masculine"
    FEMININE = "feminine"
    NEUTER = "neuter"


# ─── Word Forms ─────────────────────────────────────────────────────


class PluralForms(BaseModel):
    """Ordered triple of word forms, one per plural category."""

    model_config = ConfigDict(frozen=True)

    singular: str
    few: str
    many: str

    def select(self, category: PluralCategory) -> str:
        if category is PluralCategory.SINGULAR:
            return self.singular
        if category is PluralCategory.FEW:
            return self.few
        return self.many


class LexiconEntry(BaseModel):
    """Unit words for one (currency, language) pair."""

    model_config = ConfigDict(frozen=True)

    major: PluralForms
    minor: PluralForms
    major_gender: Gender = Gender.MASCULINE
    minor_gender: Gender = Gender.MASCULINE


# ─── Money ──────────────────────────────────────────────────────────

_CENT = Decimal("0.01")


class Money(BaseModel):
    """A non-negative amount split into major and minor units."""

    model_config = ConfigDict(frozen=True)

    major_units: int = Field(ge=0)
    minor_units: int = Field(ge=0, le=99)

    @classmethod
    def from_decimal(cls, value: Decimal) -> Money:
        """Round half-up to cents first, then split.

        Rounding before the split keeps minor_units inside [0, 99]:
        "1.999" becomes 2 major units and 0 minor units.

        Raises:
            ValueError: If the value is negative, not finite, or too large
                to quantize.
        """
        if not value.is_finite() or value < 0:
            raise ValueError(f"Amount must be a finite non-negative number: {value!r}")
        try:
            rounded = value.quantize(_CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise ValueError(f"Amount out of range: {value!r}") from exc
        # Carries into major units ("1.999" -> 2, 0) instead of flooring the
        # major part and rounding the fraction on its own ("1.999" -> 1, 100).
        major = int(rounded)
        minor = int((rounded - major) * 100)
        return cls(major_units=major, minor_units=minor)


# ─── Form Data ──────────────────────────────────────────────────────


class FormData(BaseModel):
    """Everything printed on the primary receipt page.

    amount_in_words is derived from (amount, currency, language) by the
    caller, but stays a plain field so a manual edit survives until the
    next dependency change.
    """

    model_config = ConfigDict(validate_assignment=True)

    date: str = ""
    amount: str = ""
    currency: Currency = Currency.PLN
    issued_to: str = ""
    account_info: str = ""
    department_name: str = ""
    based_on: str = ""
    amount_in_words: str = ""
    recipient_signature: Optional[bytes] = None  # PNG/JPEG bytes, may be empty


# ─── Attachments ────────────────────────────────────────────────────


class Attachment(BaseModel):
    """A user-supplied file. Use classify_attachment() to build one."""

    model_config = ConfigDict(frozen=True)

    filename: str
    media_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


class RasterImage(Attachment):
    """A photo or scan; rendered as one fitted page."""

    kind: Literal["image"] = "image"


class PdfDocument(Attachment):
    """An existing PDF; contributes one output page per source page."""

    kind: Literal["pdf"] = "pdf"
