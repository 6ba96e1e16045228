"""Canonicalization helpers for Brazilian identifiers and contact fields.

Every function here is total: it accepts ``None`` or arbitrary text and
never raises. Formatters only add punctuation for display; callers must
send ``digits_only`` values to the backend.

Usage::

    format_cnpj("12345678000199")   # '12.345.678/0001-99'
    format_phone("11999998888")     # '+55 (11) 99999-8888'
    digits_only("(11) 4002-8922")   # '1140028922'
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

CPF_DIGITS = 11
CNPJ_DIGITS = 14
PHONE_DIGITS = 11
POSTAL_CODE_MAX_LENGTH = 10
DEFAULT_COUNTRY_CODE = "55"

_NON_DIGITS = re.compile(r"[^0-9]+")
_BR_DATE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


def digits_only(value: object) -> str:
    """Remove every non-digit character."""
    if value is None:
        return ""
    return _NON_DIGITS.sub("", str(value))


def format_cpf(value: object) -> str:
    """Format up to 11 digits as ``000.000.000-00``, progressively."""
    d = digits_only(value)[:CPF_DIGITS]
    if len(d) <= 3:
        return d
    if len(d) <= 6:
        return f"{d[:3]}.{d[3:]}"
    if len(d) <= 9:
        return f"{d[:3]}.{d[3:6]}.{d[6:]}"
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def format_cnpj(value: object) -> str:
    """Format up to 14 digits as ``00.000.000/0000-00``, progressively."""
    d = digits_only(value)[:CNPJ_DIGITS]
    if len(d) <= 2:
        return d
    if len(d) <= 5:
        return f"{d[:2]}.{d[2:]}"
    if len(d) <= 8:
        return f"{d[:2]}.{d[2:5]}.{d[5:]}"
    if len(d) <= 12:
        return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:]}"
    return f"{d[:2]}.{d[2:5]}.{d[5:8]}/{d[8:12]}-{d[12:]}"


def split_country_code(value: object, default: str = DEFAULT_COUNTRY_CODE) -> tuple[str, str]:
    """Split a phone value into ``(country_code, national_digits)``.

    A leading ``+CC`` token (as produced by :func:`format_phone`) or any
    digits beyond the 11-digit national budget are taken as the country
    code.
    """
    text = "" if value is None else str(value).strip()
    if text.startswith("+"):
        head, _, tail = text.partition(" ")
        country = digits_only(head)
        if country and tail:
            return country, digits_only(tail)[:PHONE_DIGITS]
    digits = digits_only(text)[: PHONE_DIGITS + 2]
    if len(digits) > PHONE_DIGITS:
        extra = len(digits) - PHONE_DIGITS
        return digits[:extra], digits[extra:]
    return default, digits


def format_phone(value: object, country_code: str = DEFAULT_COUNTRY_CODE) -> str:
    """Render up to 11 national digits as ``+55 (AA) NNNNN-NNNN``.

    When four or fewer digits follow the area code the dash segment is
    omitted: ``"1199"`` becomes ``"+55 (11) 99"``.
    """
    country, digits = split_country_code(value, country_code)
    if not digits:
        return ""
    area = digits[:2]
    rest = digits[2:]
    if not rest:
        return f"+{country} ({area})"
    first, last = rest[:-4], rest[-4:]
    if first:
        return f"+{country} ({area}) {first}-{last}"
    return f"+{country} ({area}) {last}"


def sanitize_postal_code(value: object) -> str:
    """Keep digits and a single hyphen, capped at 10 characters."""
    if value is None:
        return ""
    kept: list[str] = []
    hyphen_seen = False
    for char in str(value):
        if char.isdigit() and char.isascii():
            kept.append(char)
        elif char == "-" and not hyphen_seen:
            kept.append(char)
            hyphen_seen = True
    return "".join(kept)[:POSTAL_CODE_MAX_LENGTH]


def format_postal_code(value: object) -> str:
    """Display up to 8 digits as ``00000-000``."""
    d = digits_only(value)[:8]
    if len(d) <= 5:
        return d
    return f"{d[:5]}-{d[5:]}"


def normalize_optional_string(value: object) -> str | None:
    """Return stripped text, or None when blank."""
    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def normalize_id(value: object) -> int | None:
    """Coerce a reference to ``int``; blank or non-numeric values become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if math.isfinite(number) else None


def normalize_decimal(value: object) -> Decimal | None:
    """Coerce a money-like value to Decimal; accepts ``,`` as decimal mark."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    text = str(value).strip().replace(" ", "")
    if not text:
        return None
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def normalize_date(value: object) -> date | None:
    """Parse ``dd/mm/yyyy``, ISO dates or ISO datetimes; otherwise None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    match = _BR_DATE.match(text)
    try:
        if match:
            day, month, year = (int(part) for part in match.groups())
            return date(year, month, day)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None
