"""
Tests for the form controller: derived amount-in-words, attachment queue,
required fields and superseding generation requests.

Run: pytest tests/ -v
"""

from __future__ import annotations

import asyncio

import pytest
from reportlab.lib.pagesizes import A4

from conftest import make_pdf, make_png
from payout_receipt.exceptions import IncompleteFormError, UnsupportedAttachmentError
from payout_receipt.form import REQUIRED_FIELDS, ReceiptForm
from payout_receipt.models import Currency, Language, PdfDocument, RasterImage


def _filled_form() -> ReceiptForm:
    form = ReceiptForm()
    form.set_field("date", "2024-05-17")
    form.type_amount("100")
    form.commit_amount()
    form.set_field("issued_to", "Jan Kowalski")
    form.set_field("account_info", "+48 600 000 000")
    form.set_field("department_name", "Administracja")
    form.set_field("based_on", "Faktura 12/2024")
    return form


# ═══════════════════════════════════════════════════════════════════════
# DERIVED AMOUNT IN WORDS
# ═══════════════════════════════════════════════════════════════════════


class TestAmountField:
    def test_typing_caps_fraction_and_derives_words(self):
        form = ReceiptForm()
        assert form.type_amount("12,345") == "12.34"
        assert form.form.amount_in_words == "dwanaście złotych trzydzieści cztery grosze"

    def test_commit_formats(self):
        form = ReceiptForm()
        form.type_amount("5")
        assert form.commit_amount() == "5.00"
        assert form.form.amount_in_words == "pięć złotych"

    def test_commit_on_empty_amount_is_noop(self):
        form = ReceiptForm()
        assert form.commit_amount() == ""
        assert form.form.amount_in_words == ""

    def test_typing_garbage_clears_words(self):
        form = ReceiptForm()
        form.type_amount("5")
        form.type_amount("abc")
        assert form.form.amount == ""
        assert form.form.amount_in_words == ""


class TestDependencyChanges:
    def test_language_change_rederives(self):
        form = ReceiptForm()
        form.type_amount("5")
        form.set_language(Language.EN)
        assert form.form.amount_in_words == "five zloty"

    def test_currency_change_rederives(self):
        form = ReceiptForm()
        form.type_amount("5")
        form.set_currency("USD")
        assert form.currency is Currency.USD
        assert form.form.amount_in_words == "pięć dolarów"

    def test_no_amount_no_words(self):
        form = ReceiptForm()
        form.set_language("uk")
        form.set_currency(Currency.UAH)
        assert form.form.amount_in_words == ""

    def test_manual_override_kept_until_next_change(self):
        form = ReceiptForm()
        form.type_amount("5")
        form.set_field("amount_in_words", "pięć złotych zero groszy")
        assert form.form.amount_in_words == "pięć złotych zero groszy"

        form.set_currency(Currency.EUR)
        assert form.form.amount_in_words == "pięć euro"

    def test_generic_setter_on_amount_rederives(self):
        form = ReceiptForm()
        form.type_amount("1")
        form.set_field("amount", "5")
        assert form.form.amount_in_words == "pięć złotych"

    def test_generic_setter_on_currency_rederives(self):
        form = ReceiptForm()
        form.type_amount("2")
        form.set_field("currency", "UAH")
        assert form.currency is Currency.UAH
        assert form.form.amount_in_words == "dwie hrywny"

    def test_generic_setter_leaves_other_fields_plain(self):
        form = ReceiptForm()
        form.type_amount("2")
        form.set_field("issued_to", "Jan Kowalski")
        assert form.form.amount_in_words == "dwa złote"

    def test_unknown_field_rejected(self):
        with pytest.raises(AttributeError):
            ReceiptForm().set_field("nickname", "x")


# ═══════════════════════════════════════════════════════════════════════
# ATTACHMENTS
# ═══════════════════════════════════════════════════════════════════════


class TestAttachmentQueue:
    def test_add_and_remove(self):
        form = ReceiptForm()
        image = form.add_attachment("a.png", "image/png", make_png(10, 10))
        pdf = form.add_attachment("d.pdf", "application/pdf", make_pdf(A4))
        assert isinstance(image, RasterImage)
        assert isinstance(pdf, PdfDocument)

        assert form.remove_attachment(0) is image
        assert form.attachments == [pdf]

    def test_unsupported_rejected(self):
        form = ReceiptForm()
        with pytest.raises(UnsupportedAttachmentError):
            form.add_attachment("notes.txt", "text/plain", b"hello")
        assert form.attachments == []


# ═══════════════════════════════════════════════════════════════════════
# GENERATION
# ═══════════════════════════════════════════════════════════════════════


class TestGenerate:
    def test_missing_fields(self):
        assert ReceiptForm().missing_fields() == list(REQUIRED_FIELDS)
        assert _filled_form().missing_fields() == []

    def test_incomplete_form_refused(self):
        form = ReceiptForm()
        form.set_field("date", "2024-05-17")
        with pytest.raises(IncompleteFormError) as exc_info:
            asyncio.run(form.generate())
        assert "amount" in exc_info.value.details["missing"]
        assert "date" not in exc_info.value.details["missing"]

    def test_generates_pdf(self):
        form = _filled_form()
        form.add_attachment("a.png", "image/png", make_png(40, 20))
        pdf_bytes = asyncio.run(form.generate())
        assert pdf_bytes.startswith(b"%PDF")

    def test_newer_request_cancels_pending_one(self):
        form = _filled_form()

        async def scenario():
            first = asyncio.ensure_future(form.generate())
            await asyncio.sleep(0)  # first is now awaiting its worker
            second = await form.generate()
            with pytest.raises(asyncio.CancelledError):
                await first
            return second

        assert asyncio.run(scenario()).startswith(b"%PDF")
