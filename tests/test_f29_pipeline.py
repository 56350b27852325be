from __future__ import annotations

import pytest

from f29_engine.services.extraction import ExtractionConfig, F29Extractor, NoExtractionPossibleError
from f29_engine.services.pipelines.f29 import F29ExtractionPipeline


class FakeTextExtractor:
    def __init__(self, text: str) -> None:
        self._text = text
        self.calls = 0

    async def extract_text(self, *_args, **_kwargs) -> str:
        self.calls += 1
        return self._text


def _pipeline(text_extractor: FakeTextExtractor) -> F29ExtractionPipeline:
    return F29ExtractionPipeline(
        text_extractor=text_extractor,
        extractor=F29Extractor(config=ExtractionConfig()),
    )


@pytest.mark.asyncio
async def test_pipeline_merges_concurrent_strategies() -> None:
    text = "\n\n".join(
        [
            "RUT 77.754.241-9\nPERIODO 202505",
            "538 TOTAL DÉBITOS 3.410.651\n537 TOTAL CRÉDITOS 2.410.651",
            "Código Glosa Valor\n511   CRÉD. IVA   4.188.643",
        ]
    )
    text_extractor = FakeTextExtractor(text)

    result = await _pipeline(text_extractor).run(b"dummy", filename="f29.pdf")

    assert text_extractor.calls == 1
    assert result.sources() == {
        "rut": "basic-info",
        "period": "basic-info",
        "code511": "visual-table",
        "code537": "label-pattern",
        "code538": "label-pattern",
        "code089": "derived",
        "net_purchases": "derived",
    }
    assert result.values()["code089"] == 1000000


@pytest.mark.asyncio
async def test_explicit_text_skips_text_extractor() -> None:
    text_extractor = FakeTextExtractor("")

    result = await _pipeline(text_extractor).run(b"dummy", text="538 TOTAL DÉBITOS 3.410.651")

    assert text_extractor.calls == 0
    assert result.values() == {"code538": 3410651}


@pytest.mark.asyncio
async def test_pipeline_reports_total_failure() -> None:
    with pytest.raises(NoExtractionPossibleError):
        await _pipeline(FakeTextExtractor("")).run(b"\x00\x01")
