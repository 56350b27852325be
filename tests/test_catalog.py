from __future__ import annotations

import pytest

from f29_engine.services.extraction.catalog import (
    BASIC_FIELDS,
    CATALOG_BY_CODE,
    CATALOG_BY_ID,
    FIELD_CATALOG,
    get_field,
)


def test_catalog_codes_and_ids_are_unique() -> None:
    assert len(FIELD_CATALOG) == 23
    assert len(CATALOG_BY_CODE) == len(FIELD_CATALOG)
    assert len(CATALOG_BY_ID) == len(FIELD_CATALOG)
    assert not set(BASIC_FIELDS) & set(CATALOG_BY_ID)


def test_field_ids_keep_leading_zeros() -> None:
    assert CATALOG_BY_CODE["062"].field_id == "code062"
    assert get_field("code077").numeric_code == "077"


def test_get_field_rejects_unknown_ids() -> None:
    with pytest.raises(KeyError):
        get_field("code999")


def test_accepts_applies_floor_only_to_amounts() -> None:
    assert get_field("code503").accepts(12, amount_floor=1000) is True
    assert get_field("code115").accepts(1, amount_floor=1000) is True
    assert get_field("code538").accepts(999, amount_floor=1000) is False
    assert get_field("code538").accepts(1000, amount_floor=1000) is True
    assert get_field("code503").accepts(0, amount_floor=1000) is False
