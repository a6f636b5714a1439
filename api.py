"""
Payout Receipt Builder — FastAPI Server
=======================================

HTTP surface over the receipt pipeline: live amount helpers for the form
and a one-shot endpoint that turns form fields plus uploads into a PDF.

Endpoints:
    POST /amount/format     Sanitize / round a typed amount
    POST /amount/words      Spell an amount in words
    POST /receipts          Build the receipt PDF (multipart form)
    GET  /health            Health check / readiness probe

Run:
    uvicorn api:app --reload              # Dev (http://localhost:8000)
    uvicorn api:app --host 0.0.0.0        # Production

Docs:
    http://localhost:8000/docs             # Swagger UI (auto-generated)
    http://localhost:8000/redoc            # ReDoc (alternative)
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, File, Form, HTTPException, Response, UploadFile
from pydantic import BaseModel, Field

from payout_receipt import __version__
from payout_receipt.amount_words import amount_to_words
from payout_receipt.assembler import PDF_MEDIA_TYPE, ReceiptAssembler, receipt_filename
from payout_receipt.attachments import classify_attachment
from payout_receipt.exceptions import DocumentAssemblyError, ReceiptError, UnsupportedAttachmentError
from payout_receipt.models import Attachment, Currency, FormData, Language
from payout_receipt.money import format_amount, sanitize_amount, sanitize_live

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 15 * 1024 * 1024  # per file


# ─── Application Lifespan (pre-warm assembler) ──────────────────────

_assembler: ReceiptAssembler | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register fonts once on startup."""
    global _assembler  # noqa: PLW0603
    _assembler = ReceiptAssembler()
    yield
    _assembler = None


# ─── FastAPI App ─────────────────────────────────────────────────────

app = FastAPI(
    title="Payout Receipt Builder API",
    description=(
        "Builds 'Dowód wypłaty' payout receipts: a form page, one page per "
        "photographed receipt, and the pages of any attached PDFs, with the "
        "amount spelled out in Polish, English, Russian or Ukrainian."
    ),
    version=__version__,
    lifespan=lifespan,
)


# ─── Request / Response Schemas ─────────────────────────────────────


class FormatRequest(BaseModel):
    """Request body for the /amount/format endpoint."""

    raw: str = Field(..., description="Amount exactly as typed.", json_schema_extra={"example": "1 234,567"})


class FormatResponse(BaseModel):
    sanitized: str = Field(description="Digits and a single '.' only")
    live: str = Field(description="Keystroke value: fraction capped at 2 digits")
    formatted: str = Field(description="Blur value: rounded half-up to 2 decimals")


class WordsRequest(BaseModel):
    """Request body for the /amount/words endpoint."""

    amount: str = Field(..., json_schema_extra={"example": "1234.56"})
    language: Language = Language.PL
    currency: Currency = Currency.PLN


class WordsResponse(BaseModel):
    amount: str
    language: Language
    currency: Currency
    amount_in_words: str

    model_config = {"json_schema_extra": {"example": {
        "amount": "1234.56",
        "language": "pl",
        "currency": "PLN",
        "amount_in_words": "tysiąc dwieście trzydzieści cztery złote pięćdziesiąt sześć groszy",
    }}}


class HealthResponse(BaseModel):
    status: str
    version: str
    languages: list[Language]
    currencies: list[Currency]


# ─── Helpers ─────────────────────────────────────────────────────────


def _get_assembler() -> ReceiptAssembler:
    if _assembler is None:
        raise HTTPException(status_code=503, detail="Assembler not initialised")
    return _assembler


def _error_detail(exc: ReceiptError) -> dict:
    return {"code": exc.code, "message": str(exc), "details": exc.details}


async def _read_upload(upload: UploadFile) -> bytes:
    """Read one upload fully, enforcing the per-file size cap."""
    if upload.size and upload.size > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"'{upload.filename}' is too large")
    content = await upload.read()
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail=f"'{upload.filename}' is too large")
    return content


# ─── Endpoints ───────────────────────────────────────────────────────


@app.post(
    "/amount/format",
    summary="Normalize a typed amount",
    tags=["Amount"],
)
def format_amount_endpoint(request: FormatRequest) -> FormatResponse:
    """Return the keystroke (live) and blur (formatted) forms of an amount.

    Never fails: unparseable input yields empty strings.
    """
    return FormatResponse(
        sanitized=sanitize_amount(request.raw),
        live=sanitize_live(request.raw),
        formatted=format_amount(request.raw),
    )


@app.post(
    "/amount/words",
    summary="Spell an amount in words",
    tags=["Amount"],
)
def amount_words_endpoint(request: WordsRequest) -> WordsResponse:
    """Spell the amount in the requested language and currency.

    - **amount_in_words** is empty while the amount is not a valid number
    """
    return WordsResponse(
        amount=request.amount,
        language=request.language,
        currency=request.currency,
        amount_in_words=amount_to_words(request.amount, request.language, request.currency),
    )


@app.post(
    "/receipts",
    summary="Build a payout receipt PDF",
    tags=["Receipts"],
    response_class=Response,
    responses={
        200: {"content": {PDF_MEDIA_TYPE: {}}, "description": "The assembled receipt"},
        413: {"description": f"An upload exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)} MB"},
        415: {"description": "An attachment is neither an image nor a PDF"},
        422: {"description": "A required form field is missing"},
        500: {"description": "The PDF could not be assembled"},
        503: {"description": "Assembler not yet initialised"},
    },
)
async def create_receipt(
    date: str = Form(..., min_length=1),
    amount: str = Form(..., min_length=1),
    issued_to: str = Form(..., min_length=1),
    account_info: str = Form(..., min_length=1),
    department_name: str = Form(..., min_length=1),
    based_on: str = Form(..., min_length=1),
    amount_in_words: str = Form(""),
    language: Language = Form(Language.PL),
    currency: Currency = Form(Currency.PLN),
    signature: Optional[UploadFile] = File(None),
    attachments: Optional[list[UploadFile]] = File(None),
) -> Response:
    """Assemble the receipt: form page, image pages, then PDF pages.

    Images always come before PDFs, each group in upload order. When
    **amount_in_words** is omitted it is derived from the amount.
    """
    assembler = _get_assembler()

    amount = format_amount(amount)
    if not amount:
        raise HTTPException(status_code=422, detail="Amount is not a number")

    # Uploads are read one at a time, in request order
    signature_bytes = await _read_upload(signature) if signature is not None else None
    queued: list[Attachment] = []
    for upload in attachments or []:
        content = await _read_upload(upload)
        try:
            queued.append(classify_attachment(upload.filename or "attachment", upload.content_type, content))
        except UnsupportedAttachmentError as e:
            raise HTTPException(status_code=415, detail=_error_detail(e))

    form = FormData(
        date=date,
        amount=amount,
        currency=currency,
        issued_to=issued_to,
        account_info=account_info,
        department_name=department_name,
        based_on=based_on,
        amount_in_words=amount_in_words.strip() or amount_to_words(amount, language, currency),
        recipient_signature=signature_bytes or None,
    )

    try:
        pdf_bytes = await asyncio.to_thread(assembler.assemble, form, queued, language)
    except DocumentAssemblyError as e:
        raise HTTPException(status_code=500, detail=_error_detail(e))

    filename = receipt_filename(date)
    logger.info("Receipt %s built (%d bytes, %d attachment(s))", filename, len(pdf_bytes), len(queued))
    return Response(
        content=pdf_bytes,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.get(
    "/health",
    summary="Health check",
    tags=["System"],
    responses={503: {"description": "Assembler not yet initialised"}},
)
def health_check() -> HealthResponse:
    """Returns service status and the supported languages and currencies."""
    _get_assembler()
    return HealthResponse(
        status="healthy",
        version=__version__,
        languages=list(Language),
        currencies=list(Currency),
    )
