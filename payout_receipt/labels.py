"""
Captions printed on the receipt, per language.

Polish is the document's legal language and the default; the other
tables let the same form be issued for Ukrainian, Russian or English
speaking recipients.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from .models import Language


class ReceiptLabels(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    date: str
    amount: str
    issued_to: str
    account_info: str
    department_name: str
    based_on: str
    amount_in_words: str
    cashier_signature: str
    cashier_name: str
    recipient_signature: str
    attachment_error: str  # formatted with {filename}


RECEIPT_LABELS: dict[Language, ReceiptLabels] = {
    Language.PL: ReceiptLabels(
        title="Dowód wypłaty",
        date="Data",
        amount="Kwota",
        issued_to="Wydano (imię i nazwisko)",
        account_info="Konto do wypłaty (telefon lub rachunek)",
        department_name="Nazwa działu",
        based_on="Na podstawie",
        amount_in_words="Kwota słownie",
        cashier_signature="Podpis kasjera",
        cashier_name="Imię i nazwisko kasjera",
        recipient_signature="Podpis odbiorcy",
        attachment_error="Błąd wczytywania załącznika: {filename}",
    ),
    Language.EN: ReceiptLabels(
        title="Payout receipt",
        date="Date",
        amount="Amount",
        issued_to="Issued to (full name)",
        account_info="Payout account (phone or bank)",
        department_name="Department",
        based_on="Based on",
        amount_in_words="Amount in words",
        cashier_signature="Cashier signature",
        cashier_name="Cashier name",
        recipient_signature="Recipient signature",
        attachment_error="Error loading receipt: {filename}",
    ),
    Language.RU: ReceiptLabels(
        title="Расходный ордер",
        date="Дата",
        amount="Сумма",
        issued_to="Выдано (имя, фамилия)",
        account_info="Счёт для выплаты (телефон или банк)",
        department_name="Название отдела",
        based_on="Основание",
        amount_in_words="Сумма прописью",
        cashier_signature="Подпись кассира",
        cashier_name="Имя кассира",
        recipient_signature="Подпись получателя",
        attachment_error="Ошибка загрузки чека: {filename}",
    ),
    Language.UK: ReceiptLabels(
        title="Видатковий ордер",
        date="Дата",
        amount="Сума",
        issued_to="Видано (ім'я, прізвище)",
        account_info="Рахунок для виплати (телефон або банк)",
        department_name="Назва відділу",
        based_on="Підстава",
        amount_in_words="Сума прописом",
        cashier_signature="Підпис касира",
        cashier_name="Ім'я касира",
        recipient_signature="Підпис одержувача",
        attachment_error="Помилка завантаження чека: {filename}",
    ),
}


def labels_for(language: Language | str) -> ReceiptLabels:
    return RECEIPT_LABELS[Language(language)]
