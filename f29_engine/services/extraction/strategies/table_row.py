"""Usage: line-by-line scan taking the largest plausible amount on lines naming a field."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.candidates import Candidate, StrategyName
from f29_engine.services.extraction.catalog import FIELD_CATALOG, FieldSpec
from f29_engine.services.extraction.numbers import find_number_tokens, parse_chilean_number
from f29_engine.services.extraction.strategies.label_pattern import mask_label_numbers
from f29_engine.services.extraction.text_normalize import (
    NormalizeConfig,
    code_pattern,
    normalize_text,
    split_lines,
    strip_visual_tables,
)

logger = logging.getLogger(__name__)

_LINE_NORMALIZE = NormalizeConfig(fold_accents=True, lowercase=True, collapse_whitespace=True)


@lru_cache(maxsize=None)
def _code_re(code: str) -> re.Pattern[str]:
    return re.compile(code_pattern(code))


@lru_cache(maxsize=None)
def _normalized_labels(spec: FieldSpec) -> tuple[str, ...]:
    return tuple(normalize_text(label, _LINE_NORMALIZE) for label in spec.label_synonyms)


def line_mentions_field(line: str, normalized_line: str, spec: FieldSpec) -> bool:
    """``line`` is searched for the code, ``normalized_line`` for the labels."""

    if _code_re(spec.numeric_code).search(line):
        return True
    return any(label in normalized_line for label in _normalized_labels(spec))


def table_row_strategy(
    document: DocumentInput,
    *,
    catalog: Iterable[FieldSpec] = FIELD_CATALOG,
    amount_floor: int = 1000,
) -> list[Candidate]:
    specs = tuple(catalog)
    candidates: list[Candidate] = []
    for line in split_lines(strip_visual_tables(document.text)):
        if not line.strip():
            continue
        normalized_line = normalize_text(line, _LINE_NORMALIZE)
        # "LEY 21.133" names the field, it is not its amount
        masked_line = mask_label_numbers(normalized_line, specs)
        # amounts below the floor also rule out the form code itself
        amounts = [
            value
            for value in (parse_chilean_number(token) for token in find_number_tokens(masked_line))
            if value >= amount_floor
        ]
        if not amounts:
            continue
        for spec in specs:
            if not line_mentions_field(masked_line, normalized_line, spec):
                continue
            value = max(amounts)
            logger.debug("Table row hit: %s=%d line=%r", spec.field_id, value, line.strip())
            candidates.append(
                Candidate(field_id=spec.field_id, value=value, strategy=StrategyName.TABLE_ROW)
            )
    return candidates
