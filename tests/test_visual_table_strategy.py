from __future__ import annotations

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.candidates import StrategyName
from f29_engine.services.extraction.strategies.visual_table import visual_table_strategy

TABLE = "\n".join(
    [
        "Código Glosa Valor",
        "511   CRÉD. IVA   4.188.643",
        "062   PPM NETO DETERMINADO   250.000",
        "-   TOTAL DÉBITOS   3.410.651",
    ]
)


def test_rows_are_matched_by_code_then_label() -> None:
    candidates = visual_table_strategy(DocumentInput(text=TABLE))

    assert all(c.strategy is StrategyName.VISUAL_TABLE for c in candidates)
    assert {c.field_id: c.value for c in candidates} == {
        "code511": 4188643,
        "code062": 250000,
        "code538": 3410651,
    }


def test_printed_code_wins_over_label_substrings() -> None:
    text = "Código Glosa Valor\n115   TASA PPM 1RA. CATEGORÍA   0,125"

    candidates = visual_table_strategy(DocumentInput(text=text))

    assert [c.field_id for c in candidates] == ["code115"]


def test_text_without_table_header_is_ignored() -> None:
    text = "511   CRÉD. IVA   4.188.643"

    assert visual_table_strategy(DocumentInput(text=text)) == []


def test_rows_with_zero_value_are_skipped() -> None:
    text = "Código Glosa Valor\n538   TOTAL DÉBITOS   0"

    assert visual_table_strategy(DocumentInput(text=text)) == []
