"""Usage: extraction candidates and the fixed strategy ranking used to merge them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class StrategyName(str, Enum):
    BASIC_INFO = "basic-info"
    LABEL_PATTERN = "label-pattern"
    TABLE_ROW = "table-row"
    VISUAL_TABLE = "visual-table"
    BINARY = "binary"

    @property
    def rank(self) -> int:
        """Lower rank wins when two strategies claim the same field."""

        return STRATEGY_RANKING.index(self)

    @property
    def confidence(self) -> float:
        return 1.0 - self.rank / len(STRATEGY_RANKING)


STRATEGY_RANKING: tuple[StrategyName, ...] = (
    StrategyName.BASIC_INFO,
    StrategyName.LABEL_PATTERN,
    StrategyName.TABLE_ROW,
    StrategyName.VISUAL_TABLE,
    StrategyName.BINARY,
)

DERIVED_SOURCE = "derived"


@dataclass(frozen=True)
class Candidate:
    field_id: str
    value: int | str
    strategy: StrategyName

    @property
    def strategy_confidence(self) -> float:
        return self.strategy.confidence

    def is_empty(self) -> bool:
        if isinstance(self.value, str):
            return not self.value.strip()
        return self.value <= 0


@dataclass(frozen=True)
class FieldResult:
    value: int | str
    strategy: str
