from __future__ import annotations

import pytest

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction import ExtractionConfig, F29Extractor, NoExtractionPossibleError
from f29_engine.services.extraction.candidates import StrategyName


def _extractor(**config) -> F29Extractor:
    return F29Extractor(config=ExtractionConfig(**config))


def test_code_label_amount_line() -> None:
    result = _extractor().extract(DocumentInput(text="538 TOTAL DÉBITOS 3.410.651"))

    assert result.values() == {"code538": 3410651}
    assert result.sources() == {"code538": "label-pattern"}
    assert result.warnings == []


def test_visual_table_row_is_attributed_to_column_parser() -> None:
    text = "Código Glosa Valor\n511   CRÉD. IVA   4.188.643"

    result = _extractor().extract(DocumentInput(text=text))

    assert result.values()["code511"] == 4188643
    assert result.sources()["code511"] == "visual-table"


def test_vat_determined_is_derived() -> None:
    text = "538 TOTAL DÉBITOS 3.410.651\n537 TOTAL CRÉDITOS 2.410.651"

    result = _extractor().extract(DocumentInput(text=text))

    assert result.values() == {"code537": 2410651, "code538": 3410651, "code089": 1000000}
    assert result.sources()["code089"] == "derived"


def test_partial_header_only_result() -> None:
    result = _extractor().extract(DocumentInput(text="RUT 77.754.241-9\nPERIODO 202505"))

    assert result.values() == {"rut": "77.754.241-9", "period": "202505"}
    assert set(result.sources().values()) == {"basic-info"}


def test_raw_bytes_fallback_without_text() -> None:
    document = DocumentInput(content=b"%PDF-1.4 (538 TOTAL DEBITOS 3.410.651) Tj")

    result = _extractor().extract(document)

    assert result.values() == {"code538": 3410651}
    assert result.sources() == {"code538": "binary"}


def test_empty_document_signals_failure() -> None:
    with pytest.raises(NoExtractionPossibleError):
        _extractor().extract(DocumentInput())


def test_unreadable_document_signals_failure() -> None:
    with pytest.raises(NoExtractionPossibleError):
        _extractor().extract(DocumentInput(text="hola mundo", content=b"\x00\x01\x02"))


def test_collect_returns_one_list_per_strategy_in_rank_order() -> None:
    extractor = _extractor()

    lists = extractor.collect(DocumentInput(text="538 TOTAL DÉBITOS 3.410.651"))

    assert [name for name, _ in extractor.strategies()] == list(StrategyName)
    assert len(lists) == len(StrategyName)
    assert [len(batch) for batch in lists] == [0, 1, 1, 0, 0]


def test_configured_floor_reaches_strategies() -> None:
    document = DocumentInput(text="538 TOTAL DÉBITOS 950")

    with pytest.raises(NoExtractionPossibleError):
        _extractor().extract(document)
    assert _extractor(amount_floor=100).extract(document).values() == {"code538": 950}


def test_known_values_must_name_catalog_fields() -> None:
    with pytest.raises(ValueError):
        ExtractionConfig(known_values={"code999": ["1.000"]})


def test_withholding_is_not_read_from_law_number() -> None:
    result = _extractor().extract(DocumentInput(text="151 RETENCIÓN TASA LEY 21.133 12.500"))

    assert result.values() == {"code151": 12500}


def test_rate_row_without_rate_value_is_absent() -> None:
    result = _extractor().extract(DocumentInput(text="PERIODO 202505\n115 TASA PPM 1RA. CATEGORÍA 0,25"))

    assert result.values() == {"period": "202505"}


def test_rate_written_with_comma_and_three_digits() -> None:
    result = _extractor().extract(DocumentInput(text="115 TASA PPM 1RA. CATEGORÍA 0,125"))

    assert result.values() == {"code115": 125}
    assert result.sources() == {"code115": "label-pattern"}
