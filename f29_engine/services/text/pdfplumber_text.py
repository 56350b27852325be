"""Usage: text view of an uploaded F29 file, pdfplumber for PDFs and UTF-8 for the rest."""

from __future__ import annotations

import asyncio
import io
import logging

import pdfplumber

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
PDF_CONTENT_TYPE = "application/pdf"


class PdfPlumberTextExtractor:
    """Text extractor backed by pdfplumber.

    Failures never propagate: the caller still holds the raw bytes, so an
    unreadable PDF degrades to an empty text view.
    """

    def __init__(self, *, page_separator: str = "\n\n") -> None:
        self.page_separator = page_separator

    async def extract_text(
        self,
        source: bytes,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> str:
        if not source:
            return ""
        if not is_pdf(source, content_type):
            return source.decode("utf-8", errors="replace")
        return await asyncio.to_thread(self._extract_pdf_text, source, filename)

    def _extract_pdf_text(self, source: bytes, filename: str | None) -> str:
        try:
            with pdfplumber.open(io.BytesIO(source)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            logger.warning("pdfplumber could not read %s: %s", filename or "<upload>", exc)
            return ""

        logger.info("pdfplumber extracted %d pages from %s", len(pages), filename or "<upload>")
        return self.page_separator.join(page.strip() for page in pages if page.strip())


def is_pdf(source: bytes, content_type: str | None = None) -> bool:
    if (content_type or "").lower() == PDF_CONTENT_TYPE:
        return True
    return source.lstrip()[:4] == PDF_MAGIC
