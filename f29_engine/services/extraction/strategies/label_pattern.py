"""Usage: whole-text pattern matching of form codes and label phrases followed by an amount."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.candidates import Candidate, StrategyName
from f29_engine.services.extraction.catalog import FIELD_CATALOG, FieldSpec
from f29_engine.services.extraction.numbers import parse_chilean_number
from f29_engine.services.extraction.text_normalize import (
    code_pattern,
    normalize_text,
    strip_visual_tables,
)

logger = logging.getLogger(__name__)

NUMBER_CAPTURE = r"(\d+(?:[.,]\d+)*)"
CODE_GAP = 50
LABEL_GAP = 100
# stands in for digits printed as part of a label ("LEY 21.133", "1RA.")
LABEL_DIGIT_MASK = "#"

_DIGIT_RE = re.compile(r"\d")


@lru_cache(maxsize=None)
def build_field_patterns(spec: FieldSpec, include_line_anchor: bool = True) -> tuple[re.Pattern[str], ...]:
    """Compile the matchers for one catalog entry, against masked normalized text.

    Shapes: code + up to 50 non-digits + number; label + up to 100 non-digits
    + number; and optionally ``code ... number`` spanning a whole line.
    The text must go through ``mask_label_numbers`` first.
    """

    code = code_pattern(spec.numeric_code)
    patterns = [re.compile(rf"{code}[^\d]{{0,{CODE_GAP}}}{NUMBER_CAPTURE}")]
    for label in spec.label_synonyms:
        masked = label_pattern(_mask_digits(label))
        patterns.append(re.compile(rf"{masked}[^\d]{{0,{LABEL_GAP}}}{NUMBER_CAPTURE}"))
    if include_line_anchor:
        patterns.append(re.compile(rf"^[ \t]*{code}.*?{NUMBER_CAPTURE}[ \t]*$", re.MULTILINE))
    return tuple(patterns)


def label_pattern(label: str) -> str:
    """Regex for a label phrase, tolerant to repeated whitespace between words."""

    return r"\s+".join(re.escape(word) for word in normalize_text(label).split())


def mask_label_numbers(text: str, catalog: Iterable[FieldSpec] = FIELD_CATALOG) -> str:
    """Replace the digits of every label synonym found in normalized ``text``.

    Law numbers and ordinals inside a label are never amounts, so they must
    not be picked up by the number captures.
    """

    for pattern in _numbered_label_patterns(tuple(catalog)):
        text = pattern.sub(lambda match: _mask_digits(match.group(0)), text)
    return text


@lru_cache(maxsize=None)
def _numbered_label_patterns(catalog: tuple[FieldSpec, ...]) -> tuple[re.Pattern[str], ...]:
    return tuple(
        re.compile(label_pattern(label))
        for spec in catalog
        for label in spec.label_synonyms
        if _DIGIT_RE.search(label)
    )


def _mask_digits(value: str) -> str:
    return _DIGIT_RE.sub(LABEL_DIGIT_MASK, value)


def best_pattern_value(
    text: str,
    patterns: Iterable[re.Pattern[str]],
    spec: FieldSpec,
    amount_floor: int,
) -> int:
    """Largest plausible value captured by any of ``patterns``; 0 when none."""

    best = 0
    for pattern in patterns:
        for match in pattern.finditer(text):
            value = parse_chilean_number(match.group(1))
            if value > best and spec.accepts(value, amount_floor):
                best = value
    return best


def label_pattern_strategy(
    document: DocumentInput,
    *,
    catalog: Iterable[FieldSpec] = FIELD_CATALOG,
    amount_floor: int = 1000,
) -> list[Candidate]:
    # code tables are parsed column-wise by the visual-table strategy
    specs = tuple(catalog)
    text = mask_label_numbers(normalize_text(strip_visual_tables(document.text)), specs)
    if not text.strip():
        return []

    candidates: list[Candidate] = []
    for spec in specs:
        value = best_pattern_value(text, build_field_patterns(spec), spec, amount_floor)
        if value:
            logger.debug("Label pattern hit: %s=%d", spec.field_id, value)
            candidates.append(
                Candidate(field_id=spec.field_id, value=value, strategy=StrategyName.LABEL_PATTERN)
            )
    return candidates
