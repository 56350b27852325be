"""Usage: fallback scan of the raw document bytes for documents without a usable text layer."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.basic_info import extract_basic_info
from f29_engine.services.extraction.candidates import Candidate, StrategyName
from f29_engine.services.extraction.catalog import FIELD_CATALOG, FieldSpec
from f29_engine.services.extraction.numbers import parse_chilean_number
from f29_engine.services.extraction.strategies.label_pattern import (
    best_pattern_value,
    build_field_patterns,
    mask_label_numbers,
)
from f29_engine.services.extraction.text_normalize import normalize_text

logger = logging.getLogger(__name__)


def decode_permissive(content: bytes) -> str:
    """Latin-1 maps every byte to a character, so decoding cannot fail."""

    return content.decode("latin-1")


def binary_strategy(
    document: DocumentInput,
    *,
    catalog: Iterable[FieldSpec] = FIELD_CATALOG,
    known_values: Mapping[str, Sequence[str]] | None = None,
    amount_floor: int = 1000,
) -> list[Candidate]:
    if not document.content:
        return []

    specs = tuple(catalog)
    decoded = decode_permissive(document.content)
    text = mask_label_numbers(normalize_text(decoded), specs)
    candidates: list[Candidate] = []

    for spec in specs:
        if not spec.core:
            continue
        patterns = build_field_patterns(spec, include_line_anchor=False)
        value = best_pattern_value(text, patterns, spec, amount_floor)
        if value:
            logger.debug("Binary pattern hit: %s=%d", spec.field_id, value)
            candidates.append(Candidate(field_id=spec.field_id, value=value, strategy=StrategyName.BINARY))

    for field_id, value in extract_basic_info(decoded, anchored_only=True).items():
        candidates.append(Candidate(field_id=field_id, value=value, strategy=StrategyName.BINARY))

    candidates.extend(_known_value_candidates(decoded, specs, known_values or {}, candidates))
    return candidates


def _known_value_candidates(
    decoded: str,
    specs: tuple[FieldSpec, ...],
    known_values: Mapping[str, Sequence[str]],
    found: list[Candidate],
) -> list[Candidate]:
    """Accept configured canonical amount strings found verbatim in the bytes."""

    allowed = {spec.field_id for spec in specs}
    pattern_values = {candidate.field_id: candidate.value for candidate in found}
    candidates: list[Candidate] = []
    for field_id, samples in known_values.items():
        if field_id not in allowed:
            continue
        for sample in samples:
            if not sample or sample not in decoded:
                continue
            value = parse_chilean_number(sample)
            if value <= 0:
                continue
            if pattern_values.get(field_id) == value:
                logger.debug("Known value corroborates binary pattern: %s=%d", field_id, value)
            else:
                logger.debug("Known value found in bytes: %s=%d", field_id, value)
            candidates.append(Candidate(field_id=field_id, value=value, strategy=StrategyName.BINARY))
            break
    return candidates
