"""Usage: single-pass extraction of F29 header fields (RUT, period, folio, name, total)."""

from __future__ import annotations

import logging
import re
from typing import Any

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.candidates import Candidate, StrategyName
from f29_engine.services.extraction.numbers import find_number_tokens, parse_chilean_number
from f29_engine.services.extraction.text_normalize import NormalizeConfig, normalize_text

logger = logging.getLogger(__name__)

# Optional "[03]"-style box number printed next to header labels.
_BOX = r"\s*(?:\[\s*\d*\s*\])?\s*:?\s*"
_RUT_VALUE = r"(\d{1,2}\.\d{3}\.\d{3}-[\dkK])(?![\dkK])"
_UPPER_WORD = r"[A-ZÁÉÍÓÚÑÜ&][A-ZÁÉÍÓÚÑÜ&.\-]*"

_RUT_LABELED_RE = re.compile(rf"(?i:RUT){_BOX}{_RUT_VALUE}")
_RUT_BARE_RE = re.compile(rf"(?<![\d.]){_RUT_VALUE}")
_PERIOD_LABELED_RE = re.compile(rf"(?i:PER[IÍ]ODO){_BOX}(\d{{6}})(?!\d)")
_PERIOD_BARE_RE = re.compile(r"(?<![\d.,])((?:19|20)\d{2}(?:0[1-9]|1[0-2]))(?![\d.,])")
_FOLIO_RE = re.compile(rf"(?i:FOLIO){_BOX}(\d+)")
_NAME_LABELED_RE = re.compile(
    rf"(?i:RAZ[ÓO]N\s+SOCIAL){_BOX}({_UPPER_WORD}(?:[ \t]+{_UPPER_WORD})*)"
)
_NAME_SUFFIX_RE = re.compile(
    rf"(?<![A-Za-z])((?:{_UPPER_WORD}[ \t]+){{1,8}}(?:SPA|LTDA\.?|S\.A\.|SA|EIRL))(?![A-Za-z])"
)
_TOTAL_PAYABLE_RE = re.compile(r"(?i:TOTAL\s+A\s+PAGAR)([^\n]*)")

_NAME_NORMALIZE = NormalizeConfig(collapse_whitespace=True)


def extract_basic_info(text: str, *, anchored_only: bool = False) -> dict[str, Any]:
    """Locate RUT, period, folio, taxpayer name and total payable.

    Missing fields are left out of the result. ``anchored_only`` restricts the
    search to label-anchored patterns, for noisy input such as raw PDF bytes.
    """

    info: dict[str, Any] = {}
    if not text:
        return info

    rut = _find_rut(text, anchored_only=anchored_only)
    if rut:
        info["rut"] = rut

    period = _find_period(text, anchored_only=anchored_only)
    if period:
        info["period"] = period

    folio_match = _FOLIO_RE.search(text)
    if folio_match:
        info["folio"] = folio_match.group(1)

    name = _find_taxpayer_name(text, anchored_only=anchored_only)
    if name:
        info["taxpayer_name"] = name

    total = _find_total_payable(text)
    if total > 0:
        info["total_payable"] = total

    logger.debug("Basic info fields found: %s", sorted(info))
    return info


def basic_info_strategy(document: DocumentInput) -> list[Candidate]:
    info = extract_basic_info(document.text)
    return [
        Candidate(field_id=field_id, value=value, strategy=StrategyName.BASIC_INFO)
        for field_id, value in info.items()
    ]


def is_valid_rut(rut: str) -> bool:
    """Check the modulo-11 verification digit of a Chilean RUT."""

    cleaned = re.sub(r"[^\dkK]", "", rut)
    if len(cleaned) < 2:
        return False
    body, check = cleaned[:-1], cleaned[-1].upper()
    if not body.isdigit():
        return False
    total = 0
    factor = 2
    for digit in reversed(body):
        total += int(digit) * factor
        factor = 2 if factor == 7 else factor + 1
    remainder = 11 - total % 11
    expected = {11: "0", 10: "K"}.get(remainder, str(remainder))
    return check == expected


def _find_rut(text: str, *, anchored_only: bool) -> str | None:
    patterns = [_RUT_LABELED_RE] if anchored_only else [_RUT_LABELED_RE, _RUT_BARE_RE]
    matches: list[str] = []
    for pattern in patterns:
        matches.extend(match.group(1) for match in pattern.finditer(text))
    if not matches:
        return None
    for rut in matches:
        if is_valid_rut(rut):
            return rut.upper()
    logger.debug("RUT check digit mismatch, keeping first match: %s", matches[0])
    return matches[0].upper()


def _find_period(text: str, *, anchored_only: bool) -> str | None:
    for match in _PERIOD_LABELED_RE.finditer(text):
        if _is_valid_period(match.group(1)):
            return match.group(1)
    if anchored_only:
        return None
    match = _PERIOD_BARE_RE.search(text)
    return match.group(1) if match else None


def _is_valid_period(value: str) -> bool:
    return len(value) == 6 and 1 <= int(value[4:]) <= 12


def _find_taxpayer_name(text: str, *, anchored_only: bool) -> str | None:
    match = _NAME_LABELED_RE.search(text)
    if match is None and not anchored_only:
        match = _NAME_SUFFIX_RE.search(text)
    if match is None:
        return None
    name = normalize_text(match.group(1), _NAME_NORMALIZE).strip(" .,-")
    return name or None


def _find_total_payable(text: str) -> int:
    best = 0
    for match in _TOTAL_PAYABLE_RE.finditer(text):
        for token in find_number_tokens(match.group(1)):
            best = max(best, parse_chilean_number(token))
    return best
