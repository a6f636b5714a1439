"""
Form controller — the state behind one receipt being filled in.

Keeps the derived "amount in words" field in sync with its inputs:

    type_amount("1234,5")   → amount "1234.5",  words re-derived
    commit_amount()         → amount "1234.50", words re-derived
    set_language("uk")      → words re-derived (only if an amount exists)
    set_field("amount_in_words", "...")  → manual override, kept until the
                                           amount, language or currency
                                           changes again

Generation runs off the event loop. Only the newest request delivers:
starting a new one cancels any still pending.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .amount_words import amount_to_words
from .assembler import ReceiptAssembler
from .attachments import classify_attachment
from .exceptions import IncompleteFormError
from .models import Attachment, Currency, FormData, Language
from .money import format_amount, sanitize_live

logger = logging.getLogger(__name__)

REQUIRED_FIELDS: tuple[str, ...] = (
    "date",
    "amount",
    "issued_to",
    "account_info",
    "department_name",
    "based_on",
    "amount_in_words",
)


class ReceiptForm:
    """Mutable form state plus the attachments queued for the receipt."""

    def __init__(
        self,
        language: Language | str = Language.PL,
        currency: Currency | str = Currency.PLN,
        assembler: Optional[ReceiptAssembler] = None,
    ):
        self.language = Language(language)
        self.form = FormData(currency=Currency(currency))
        self.attachments: list[Attachment] = []
        self._assembler = assembler or ReceiptAssembler()
        self._pending: Optional[asyncio.Task] = None

    @property
    def currency(self) -> Currency:
        return self.form.currency

    # ─── Amount ──────────────────────────────────────────────────────

    def _rederive_words(self) -> None:
        self.form.amount_in_words = amount_to_words(self.form.amount, self.language, self.form.currency)

    def type_amount(self, raw: str) -> str:
        """Keystroke: keep only what is typeable and refresh the words."""
        self.form.amount = sanitize_live(raw)
        self._rederive_words()
        return self.form.amount

    def commit_amount(self) -> str:
        """Blur: round to two decimals. An empty amount is left alone."""
        if self.form.amount:
            self.form.amount = format_amount(self.form.amount)
            self._rederive_words()
        return self.form.amount

    def set_language(self, language: Language | str) -> None:
        self.language = Language(language)
        if self.form.amount:
            self._rederive_words()

    def set_currency(self, currency: Currency | str) -> None:
        self.form.currency = Currency(currency)
        if self.form.amount:
            self._rederive_words()

    # ─── Plain Fields ────────────────────────────────────────────────

    def set_field(self, name: str, value) -> None:
        """Assign one field. amount and currency re-derive the words."""
        if name not in FormData.model_fields:
            raise AttributeError(f"Unknown form field: {name}")
        if name == "amount":
            self.form.amount = value
            self._rederive_words()
        elif name == "currency":
            self.set_currency(value)
        else:
            setattr(self.form, name, value)

    def missing_fields(self) -> list[str]:
        return [name for name in REQUIRED_FIELDS if not str(getattr(self.form, name)).strip()]

    # ─── Attachments ─────────────────────────────────────────────────

    def add_attachment(self, filename: str, media_type: str | None, content: bytes) -> Attachment:
        """Queue an upload. Raises UnsupportedAttachmentError for other files."""
        attachment = classify_attachment(filename, media_type, content)
        self.attachments.append(attachment)
        logger.debug("Queued %s '%s' (%d bytes)", attachment.kind, filename, attachment.size)
        return attachment

    def remove_attachment(self, index: int) -> Attachment:
        return self.attachments.pop(index)

    # ─── Generation ──────────────────────────────────────────────────

    async def generate(self) -> bytes:
        """Build the receipt PDF in a worker thread.

        Raises:
            IncompleteFormError: If a required field is empty.
            asyncio.CancelledError: If a newer generate() superseded this one.
            DocumentAssemblyError: If the document cannot be serialized.
        """
        missing = self.missing_fields()
        if missing:
            raise IncompleteFormError(
                f"Missing required fields: {', '.join(missing)}",
                details={"missing": missing},
            )

        if self._pending is not None and not self._pending.done():
            logger.info("Cancelling superseded receipt generation")
            self._pending.cancel()

        task = asyncio.ensure_future(
            asyncio.to_thread(
                self._assembler.assemble,
                self.form.model_copy(),
                list(self.attachments),
                self.language,
            )
        )
        self._pending = task
        try:
            return await task
        finally:
            if self._pending is task:
                self._pending = None
