from __future__ import annotations

from f29_engine.services.extraction.candidates import Candidate, FieldResult, StrategyName
from f29_engine.services.extraction.reconciler import order_fields, reconcile


def _candidates() -> list[Candidate]:
    return [
        Candidate("code538", 3410000, StrategyName.BINARY),
        Candidate("code538", 3410651, StrategyName.TABLE_ROW),
        Candidate("code538", 3410652, StrategyName.LABEL_PATTERN),
        Candidate("code511", 4188643, StrategyName.VISUAL_TABLE),
        Candidate("rut", "77.754.241-9", StrategyName.BASIC_INFO),
    ]


def test_best_ranked_strategy_wins() -> None:
    merged = reconcile(_candidates())

    assert merged["code538"] == FieldResult(3410652, "label-pattern")
    assert merged["code511"] == FieldResult(4188643, "visual-table")
    assert merged["rut"] == FieldResult("77.754.241-9", "basic-info")


def test_result_does_not_depend_on_candidate_order() -> None:
    assert reconcile(_candidates()) == reconcile(list(reversed(_candidates())))


def test_first_candidate_wins_within_a_strategy() -> None:
    merged = reconcile(
        [
            Candidate("code537", 2410651, StrategyName.TABLE_ROW),
            Candidate("code537", 9999999, StrategyName.TABLE_ROW),
        ]
    )

    assert merged["code537"].value == 2410651


def test_empty_candidates_never_win() -> None:
    merged = reconcile(
        [
            Candidate("code538", 0, StrategyName.LABEL_PATTERN),
            Candidate("taxpayer_name", "  ", StrategyName.BASIC_INFO),
            Candidate("code538", 3410651, StrategyName.BINARY),
        ]
    )

    assert merged == {"code538": FieldResult(3410651, "binary")}


def test_header_fields_come_first() -> None:
    merged = reconcile(_candidates())

    assert list(merged) == ["rut", "code511", "code538"]
    assert list(order_fields({"zeta": FieldResult(1, "derived"), "period": FieldResult("202505", "basic-info")})) == [
        "period",
        "zeta",
    ]


def test_strategy_ranking_order() -> None:
    ranks = [strategy.rank for strategy in StrategyName]

    assert ranks == sorted(ranks)
    assert StrategyName.BASIC_INFO.confidence > StrategyName.BINARY.confidence
    assert Candidate("code538", 1, StrategyName.TABLE_ROW).strategy_confidence == StrategyName.TABLE_ROW.confidence
