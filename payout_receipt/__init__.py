"""
Payout Receipt Builder — "Dowód wypłaty" documents from form data and scans.

Architecture: Form page → Image pages → PDF pages (reopened and appended)
Side channel: Amount → words in pl / en / ru / uk for USD / PLN / UAH / EUR.
"""

__version__ = "1.0.0"
