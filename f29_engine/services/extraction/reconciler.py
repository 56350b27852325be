"""Usage: merge strategy candidates into one value per field by fixed strategy ranking."""

from __future__ import annotations

import logging
from typing import Iterable

from f29_engine.services.extraction.candidates import Candidate, FieldResult
from f29_engine.services.extraction.catalog import BASIC_FIELDS, FIELD_CATALOG

logger = logging.getLogger(__name__)

_FIELD_ORDER: dict[str, int] = {
    field_id: idx
    for idx, field_id in enumerate([*BASIC_FIELDS, *(spec.field_id for spec in FIELD_CATALOG)])
}


def reconcile(candidates: Iterable[Candidate]) -> dict[str, FieldResult]:
    """Pick, per field, the first non-empty candidate of the best-ranked strategy.

    ``sorted`` is stable, so candidates of the same strategy keep the order in
    which they were emitted. The outcome never depends on the order in which
    strategies finished.
    """

    merged: dict[str, FieldResult] = {}
    for candidate in sorted(candidates, key=lambda c: c.strategy.rank):
        if candidate.field_id in merged or candidate.is_empty():
            continue
        merged[candidate.field_id] = FieldResult(
            value=candidate.value,
            strategy=candidate.strategy.value,
        )
        logger.debug(
            "Reconciled %s=%s strategy=%s",
            candidate.field_id,
            candidate.value,
            candidate.strategy.value,
        )
    return order_fields(merged)


def order_fields(fields: dict[str, FieldResult]) -> dict[str, FieldResult]:
    """Header fields first, then catalog order, then anything else by name."""

    fallback = len(_FIELD_ORDER)
    return dict(
        sorted(fields.items(), key=lambda item: (_FIELD_ORDER.get(item[0], fallback), item[0]))
    )
