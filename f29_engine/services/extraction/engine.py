"""Usage: run every F29 extraction strategy, reconcile the candidates and validate the result."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Iterable, Mapping, Sequence

from f29_engine.core.config import Settings, settings
from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.basic_info import basic_info_strategy
from f29_engine.services.extraction.candidates import Candidate, FieldResult, StrategyName
from f29_engine.services.extraction.catalog import CATALOG_BY_ID, FIELD_CATALOG, FieldSpec
from f29_engine.services.extraction.errors import NoExtractionPossibleError
from f29_engine.services.extraction.reconciler import reconcile
from f29_engine.services.extraction.strategies.binary import binary_strategy
from f29_engine.services.extraction.strategies.label_pattern import label_pattern_strategy
from f29_engine.services.extraction.strategies.table_row import table_row_strategy
from f29_engine.services.extraction.strategies.visual_table import visual_table_strategy
from f29_engine.services.extraction.validator import ValidationWarning, validate_fields

logger = logging.getLogger(__name__)

Strategy = Callable[[DocumentInput], list[Candidate]]


@dataclass(frozen=True)
class ExtractionConfig:
    amount_floor: int = 1000
    tolerance: int = 1000
    vat_rate: float = 0.19
    debit_rate_tolerance: float = 0.15
    known_values: Mapping[str, Sequence[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = sorted(set(self.known_values) - set(CATALOG_BY_ID))
        if unknown:
            raise ValueError(f"Known values reference unknown fields: {unknown}")

    @classmethod
    def from_settings(cls, config: Settings) -> "ExtractionConfig":
        return cls(
            amount_floor=config.amount_floor,
            tolerance=config.consistency_tolerance,
            vat_rate=config.vat_rate,
            debit_rate_tolerance=config.debit_rate_tolerance,
            known_values=config.known_values,
        )


@dataclass(frozen=True)
class F29ExtractionResult:
    fields: dict[str, FieldResult]
    warnings: list[ValidationWarning]

    def values(self) -> dict[str, Any]:
        return {field_id: result.value for field_id, result in self.fields.items()}

    def sources(self) -> dict[str, str]:
        return {field_id: result.strategy for field_id, result in self.fields.items()}


class F29Extractor:
    """Multi-strategy F29 field extractor.

    Strategies are pure functions over the same read-only document, so
    ``collect`` may be replaced by a concurrent fan-out as long as the
    per-strategy lists are handed to ``finalize``.
    """

    def __init__(
        self,
        catalog: Iterable[FieldSpec] = FIELD_CATALOG,
        *,
        config: ExtractionConfig | None = None,
    ) -> None:
        self.catalog = tuple(catalog)
        self.config = config or ExtractionConfig.from_settings(settings)

    def strategies(self) -> list[tuple[StrategyName, Strategy]]:
        cfg = self.config
        return [
            (StrategyName.BASIC_INFO, basic_info_strategy),
            (
                StrategyName.LABEL_PATTERN,
                partial(label_pattern_strategy, catalog=self.catalog, amount_floor=cfg.amount_floor),
            ),
            (
                StrategyName.TABLE_ROW,
                partial(table_row_strategy, catalog=self.catalog, amount_floor=cfg.amount_floor),
            ),
            (StrategyName.VISUAL_TABLE, partial(visual_table_strategy, catalog=self.catalog)),
            (
                StrategyName.BINARY,
                partial(
                    binary_strategy,
                    catalog=self.catalog,
                    known_values=cfg.known_values,
                    amount_floor=cfg.amount_floor,
                ),
            ),
        ]

    def extract(self, document: DocumentInput) -> F29ExtractionResult:
        return self.finalize(document, self.collect(document))

    def collect(self, document: DocumentInput) -> list[list[Candidate]]:
        return [run_strategy(name, strategy, document) for name, strategy in self.strategies()]

    def finalize(
        self,
        document: DocumentInput,
        candidate_lists: Iterable[list[Candidate]],
    ) -> F29ExtractionResult:
        candidates = [candidate for batch in candidate_lists for candidate in batch]
        merged = reconcile(candidates)
        if not merged:
            logger.warning(
                "F29 extraction failed: no_extraction_possible text_len=%d bytes=%d",
                len(document.text),
                len(document.content),
            )
            raise NoExtractionPossibleError()

        outcome = validate_fields(
            merged,
            tolerance=self.config.tolerance,
            vat_rate=self.config.vat_rate,
            debit_rate_tolerance=self.config.debit_rate_tolerance,
        )
        result = F29ExtractionResult(fields=outcome.fields, warnings=outcome.warnings)
        logger.info(
            "F29 extraction finished: fields=%d candidates=%d warnings=%d sources=%s",
            len(result.fields),
            len(candidates),
            len(result.warnings),
            result.sources(),
        )
        return result


def run_strategy(name: StrategyName, strategy: Strategy, document: DocumentInput) -> list[Candidate]:
    candidates = strategy(document)
    logger.debug("Strategy %s produced %d candidates", name.value, len(candidates))
    return candidates
