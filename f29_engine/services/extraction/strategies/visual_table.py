"""Usage: parse rendered "Código / Glosa / Valor" tables by splitting rows into columns."""

from __future__ import annotations

import logging
from typing import Iterable

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.candidates import Candidate, StrategyName
from f29_engine.services.extraction.catalog import FIELD_CATALOG, FieldSpec
from f29_engine.services.extraction.numbers import parse_chilean_number
from f29_engine.services.extraction.text_normalize import (
    normalize_text,
    split_columns,
    split_lines,
    visual_table_blocks,
)

logger = logging.getLogger(__name__)


def visual_table_strategy(
    document: DocumentInput,
    *,
    catalog: Iterable[FieldSpec] = FIELD_CATALOG,
) -> list[Candidate]:
    specs = tuple(catalog)
    by_code = {spec.numeric_code: spec for spec in specs}
    candidates: list[Candidate] = []

    for block in visual_table_blocks(document.text):
        for line in split_lines(block):
            columns = split_columns(line)
            if len(columns) < 3:
                continue
            code, label, raw_value = columns[0], columns[1], columns[2]
            value = parse_chilean_number(raw_value)
            if value <= 0:
                continue
            for spec in _match_row(code, label, specs, by_code):
                logger.debug("Visual table hit: %s=%d row=%r", spec.field_id, value, line.strip())
                candidates.append(
                    Candidate(field_id=spec.field_id, value=value, strategy=StrategyName.VISUAL_TABLE)
                )
    return candidates


def _match_row(
    code: str,
    label: str,
    specs: tuple[FieldSpec, ...],
    by_code: dict[str, FieldSpec],
) -> list[FieldSpec]:
    # a printed code is authoritative; labels are only a fallback for rows without one
    if code in by_code:
        return [by_code[code]]
    label_norm = " ".join(normalize_text(label).split())
    return [
        spec
        for spec in specs
        if any(" ".join(normalize_text(syn).split()) in label_norm for syn in spec.label_synonyms)
    ]
