"""Usage: parse amounts written with Chilean or international separators."""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

_NUMERIC_CLEAN_RE = re.compile(r"[^\d\.,]")
_NUMBER_TOKEN_RE = re.compile(r"\d+(?:[.,]\d+)*")


def parse_chilean_number(value: str | None) -> int:
    """Convert a numeric-looking string into a non-negative integer amount.

    Returns 0 when nothing can be recovered. Callers treat 0 as "no evidence",
    not as a declared zero amount.

    - ``1.234.567,89`` and ``1,234,567.89``: the separator appearing last is the
      decimal point, every occurrence of the other one is a thousands separator.
    - A lone separator kind is a thousands separator when it repeats or when a
      single occurrence is followed by exactly three digits (``1.234`` -> 1234).
      Otherwise it is the decimal point (``12.34`` -> 12).
    """

    if not value:
        return 0
    cleaned = _NUMERIC_CLEAN_RE.sub("", str(value))
    if not cleaned:
        return 0

    if "." in cleaned and "," in cleaned:
        if cleaned.rfind(",") > cleaned.rfind("."):
            cleaned = cleaned.replace(".", "").replace(",", ".")
        else:
            cleaned = cleaned.replace(",", "")
    elif "." in cleaned:
        cleaned = _resolve_single_separator(cleaned, ".")
    elif "," in cleaned:
        cleaned = _resolve_single_separator(cleaned, ",").replace(",", ".")

    # Decimal keeps long digit runs exact
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        return 0
    if not number.is_finite():
        return 0
    return int(number)


def find_number_tokens(text: str) -> list[str]:
    """Return every numeric-looking token in ``text`` in reading order."""

    if not text:
        return []
    return _NUMBER_TOKEN_RE.findall(text)


def _resolve_single_separator(value: str, separator: str) -> str:
    parts = value.split(separator)
    if len(parts) > 2 or (len(parts) == 2 and len(parts[1]) == 3):
        return value.replace(separator, "")
    return value
