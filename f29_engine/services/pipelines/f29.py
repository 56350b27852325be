"""Usage: F29 extraction pipeline (text view -> strategies -> reconcile/validate)."""

from __future__ import annotations

import asyncio
import logging
import time

from f29_engine.schemas.document import DocumentInput
from f29_engine.services.extraction import F29ExtractionResult, F29Extractor
from f29_engine.services.extraction.candidates import Candidate
from f29_engine.services.extraction.engine import run_strategy
from f29_engine.services.text.base import BaseTextExtractor

logger = logging.getLogger(__name__)


class F29ExtractionPipeline:
    """Pipeline orchestrating text extraction and the multi-strategy F29 engine."""

    def __init__(
        self,
        text_extractor: BaseTextExtractor,
        *,
        extractor: F29Extractor | None = None,
    ) -> None:
        self.text_extractor = text_extractor
        self.extractor = extractor or F29Extractor()

    async def run(
        self,
        source: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
        text: str | None = None,
    ) -> F29ExtractionResult:
        """Build the document view, run every strategy concurrently and merge."""

        start_time = time.perf_counter()
        logger.info("[TIMER] Pipeline started for file: %s", filename)

        t0 = time.perf_counter()
        if text is None:
            text = await self.text_extractor.extract_text(
                source,
                filename=filename,
                content_type=content_type,
            )
        text_duration = time.perf_counter() - t0
        logger.info(
            "[TIMER] Step 1: text view ready (%d chars). Duration: %.4fs",
            len(text),
            text_duration,
        )

        document = DocumentInput(text=text, content=source)

        t1 = time.perf_counter()
        candidate_lists = await self._collect(document)
        strategies_duration = time.perf_counter() - t1
        logger.info("[TIMER] Step 2: strategies finished. Duration: %.4fs", strategies_duration)

        try:
            return self.extractor.finalize(document, candidate_lists)
        finally:
            logger.info(
                "[TIMER] Pipeline completed. Total: %.4fs (text: %.2fs, strategies: %.2fs)",
                time.perf_counter() - start_time,
                text_duration,
                strategies_duration,
            )

    async def _collect(self, document: DocumentInput) -> list[list[Candidate]]:
        # gather keeps the strategy order regardless of completion order
        return list(
            await asyncio.gather(
                *(
                    asyncio.to_thread(run_strategy, name, strategy, document)
                    for name, strategy in self.extractor.strategies()
                )
            )
        )
