"""Pure formatting helpers shared by the layout engine and the generators."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, getcontext

# Control characters that the PDF text encoder cannot represent
_CONTROL_RE = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F-\u009F]")
# BOM and zero-width characters
_ZERO_WIDTH_RE = re.compile(r"[\u200B-\u200D\uFEFF]")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")

_CENTS = Decimal("0.01")
# Significant digits of the default decimal context
_MAX_DIGITS = getcontext().prec

NOT_SPECIFIED = "Not Specified"
NOT_AVAILABLE = "N/A"


def round_money(amount: float | int | Decimal) -> Decimal:
    """Round half-up to two decimals.

    Goes through ``str`` so that binary float noise (``38.746`` stored as
    ``38.74599...``) does not change the result.

    Raises ``ValueError`` for NaN, infinities and amounts too large to
    carry cents at the default decimal precision.
    """
    value = Decimal(str(amount))
    if not value.is_finite() or value.adjusted() >= _MAX_DIGITS - 2:
        raise ValueError(f"Cannot round money amount {amount!r}")
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def format_currency(amount: float | int | Decimal, currency_code: str = "OMR") -> str:
    """Render ``amount`` with exactly two decimals and a currency prefix.

    >>> format_currency(1200, "OMR")
    'OMR 1200.00'
    """
    return f"{currency_code} {round_money(amount)}"


def _parse_date(value: str | date | datetime) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date(value: str | date | datetime | None) -> str:
    """Long-form date in day-month-year order, e.g. ``15 March 2024``.

    Empty input gives ``"N/A"``; unparseable input is returned as-is.
    """
    if value is None or value == "":
        return NOT_AVAILABLE
    parsed = _parse_date(value)
    if parsed is None:
        return sanitize_text(str(value))
    return f"{parsed.day} {parsed.strftime('%B')} {parsed.year}"


def format_short_date(value: str | date | datetime | None) -> str:
    """``dd/mm/yyyy``, the short en-GB form used on cover pages."""
    if value is None or value == "":
        return NOT_AVAILABLE
    parsed = _parse_date(value)
    if parsed is None:
        return sanitize_text(str(value))
    return parsed.strftime("%d/%m/%Y")


def sanitize_text(text: str | None) -> str:
    """Drop control and zero-width characters and trim whitespace."""
    if not text:
        return ""
    cleaned = _CONTROL_RE.sub("", text)
    cleaned = _ZERO_WIDTH_RE.sub("", cleaned)
    return cleaned.strip()


def or_fallback(value: str | None, fallback: str = NOT_SPECIFIED) -> str:
    """Return the sanitized value, or ``fallback`` when it is blank."""
    cleaned = sanitize_text(value)
    return cleaned or fallback


def sanitize_filename_part(name: str) -> str:
    """Strip every character outside ``[A-Za-z0-9]``."""
    return _NON_ALNUM_RE.sub("", name or "")


def document_filename(kind: str, client_name: str | None, on: date | None = None) -> str:
    """``<Kind>_<SanitizedClient>_<ISODate>.pdf``."""
    on = on or date.today()
    client = sanitize_filename_part(client_name or "") or "Client"
    return f"{sanitize_filename_part(kind) or 'Document'}_{client}_{on.isoformat()}.pdf"
