"""
Custom exception hierarchy for receipt assembly.

Each exception type maps to one failure class of the pipeline, so callers
can tell recoverable per-attachment problems apart from fatal ones.
"""

from __future__ import annotations


class ReceiptError(Exception):
    """Base exception for all receipt builder failures."""

    def __init__(self, code: str, message: str, details: dict | None = None):
        self.code = code
        self.details = details or {}
        super().__init__(message)


class UnsupportedAttachmentError(ReceiptError):
    """The uploaded file is neither a raster image nor a PDF."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("UNSUPPORTED_ATTACHMENT", message, details)


class AttachmentDecodeError(ReceiptError):
    """An attachment could not be decoded. Recovered per attachment."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("ATTACHMENT_DECODE_FAILED", message, details)


class LexiconLookupError(ReceiptError):
    """Currency or language outside the fixed table — a programming error."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("LEXICON_LOOKUP_FAILED", message, details)


class DocumentAssemblyError(ReceiptError):
    """The final PDF could not be serialized. Never recovered locally."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("DOCUMENT_ASSEMBLY_FAILED", message, details)


class IncompleteFormError(ReceiptError):
    """Required form fields are empty (raised by the caller layer only)."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__("INCOMPLETE_FORM", message, details)
