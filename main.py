#!/usr/bin/env python3
"""
Payout Receipt Builder — Entry Point
====================================

Demonstrates the pipeline: spells a few amounts in every language and
currency, then writes a sample receipt PDF to the current directory.

Usage:
    python main.py
"""

from __future__ import annotations

import asyncio
import io
import logging
from pathlib import Path

from PIL import Image, ImageDraw

from payout_receipt.amount_words import amount_to_words
from payout_receipt.assembler import ReceiptAssembler, save_receipt
from payout_receipt.form import ReceiptForm
from payout_receipt.models import Currency, Language

SAMPLE_AMOUNTS = ("0", "1.01", "21", "1234.56", "1000000")


# ─── ANSI Color Constants ───────────────────────────────────────────

_CYAN = "\033[96m"
_GREEN = "\033[92m"
_DIM = "\033[2m"
_BOLD = "\033[1m"
_RESET = "\033[0m"
_WIDTH = 72


# ─── Pretty Printer ─────────────────────────────────────────────────


def print_words_table() -> None:
    """Print every sample amount in every language/currency pair."""
    print(f"\n{'=' * _WIDTH}")
    print(f"{_BOLD}{_CYAN}  AMOUNT IN WORDS{_RESET}")
    print(f"{'=' * _WIDTH}")
    for currency in Currency:
        print(f"\n  {_BOLD}{currency.value} ({currency.symbol}){_RESET}")
        for language in Language:
            print(f"    {_DIM}{language.value}{_RESET}")
            for amount in SAMPLE_AMOUNTS:
                print(f"      {amount:>10}  {amount_to_words(amount, language, currency)}")
    print(f"{'=' * _WIDTH}\n")


# ─── Sample Receipt ─────────────────────────────────────────────────


def _sample_scan() -> bytes:
    """A landscape 'photo of a receipt' so the image page has something to fit."""
    image = Image.new("RGB", (1600, 900), "white")
    draw = ImageDraw.Draw(image)
    draw.rectangle((40, 40, 1560, 860), outline="black", width=6)
    for y in range(120, 820, 70):
        draw.line((100, y, 1500, y), fill="grey", width=3)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def build_sample_receipt(directory: Path) -> Path:
    assembler = ReceiptAssembler(organization="Fundacja Przykładowa")
    form = ReceiptForm(language=Language.PL, currency=Currency.PLN, assembler=assembler)
    form.set_field("date", "2024-05-17")
    form.type_amount("1234,5")
    form.commit_amount()
    form.set_field("issued_to", "Jan Kowalski")
    form.set_field("account_info", "+48 600 000 000")
    form.set_field("department_name", "Administracja")
    form.set_field("based_on", "Zwrot kosztów zakupu materiałów biurowych według załączonego paragonu")
    form.add_attachment("paragon.png", "image/png", _sample_scan())

    pdf_bytes = asyncio.run(form.generate())
    return save_receipt(pdf_bytes, directory, form.form.date)


# ─── Main ────────────────────────────────────────────────────────────


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    print_words_table()
    path = build_sample_receipt(Path.cwd())
    print(f"  {_GREEN}{_BOLD}Sample receipt written to {path}{_RESET}\n")


if __name__ == "__main__":
    main()
