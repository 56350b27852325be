from __future__ import annotations

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction.basic_info import (
    basic_info_strategy,
    extract_basic_info,
    is_valid_rut,
)
from f29_engine.services.extraction.candidates import StrategyName


def test_rut_and_period_only() -> None:
    info = extract_basic_info("RUT 77.754.241-9\nPERIODO 202505")

    assert info == {"rut": "77.754.241-9", "period": "202505"}


def test_full_header() -> None:
    text = "\n".join(
        [
            "FOLIO [07] 123456789",
            "RAZÓN SOCIAL: COMERCIAL ANDES SPA",
            "RUT [03]: 77.754.241-9",
            "PERÍODO [15] 202412",
            "TOTAL A PAGAR DENTRO DEL PLAZO 1.250.000",
        ]
    )

    info = extract_basic_info(text)

    assert info == {
        "rut": "77.754.241-9",
        "period": "202412",
        "folio": "123456789",
        "taxpayer_name": "COMERCIAL ANDES SPA",
        "total_payable": 1250000,
    }


def test_taxpayer_name_falls_back_to_company_suffix() -> None:
    info = extract_basic_info("Contribuyente\nINVERSIONES DEL SUR LTDA\n")

    assert info["taxpayer_name"] == "INVERSIONES DEL SUR LTDA"


def test_period_requires_valid_month() -> None:
    assert "period" not in extract_basic_info("PERIODO 202513")


def test_rut_prefers_valid_check_digit() -> None:
    info = extract_basic_info("12.345.678-9 77.754.241-9")

    assert info["rut"] == "77.754.241-9"
    assert is_valid_rut("77.754.241-9") is True
    assert is_valid_rut("77.754.241-8") is False


def test_anchored_only_ignores_bare_values() -> None:
    assert extract_basic_info("77.754.241-9 202505", anchored_only=True) == {}


def test_strategy_emits_basic_info_candidates() -> None:
    candidates = basic_info_strategy(DocumentInput(text="PERIODO 202505"))

    assert [(c.field_id, c.value, c.strategy) for c in candidates] == [
        ("period", "202505", StrategyName.BASIC_INFO)
    ]
    assert basic_info_strategy(DocumentInput()) == []
