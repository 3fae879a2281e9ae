# src/extraction/pdf_extractor.py — v2
"""PDF extractor using PyMuPDF (fitz).

Extracts the text layer of every page, discarding layout.
Requires the 'pymupdf' package.
"""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from bankchat.core.models import DocumentFormat, ExtractionResult
from bankchat.extraction.base_extractor import BaseExtractor

logger = logging.getLogger(__name__)

_PAGE_BREAK = "\f"


class PdfExtractor(BaseExtractor):
    """Extractor for PDF files using PyMuPDF."""

    @property
    def format(self) -> DocumentFormat:
        return DocumentFormat.PDF

    async def extract(self, content: bytes | str | Path) -> ExtractionResult:
        """Extract text across all pages of a PDF document."""
        try:
            import fitz  # PyMuPDF
        except ImportError as e:
            raise ImportError(
                "pymupdf package required for PDF extraction: pip install pymupdf"
            ) from e

        pages = await asyncio.to_thread(self._read_pages, content, fitz)

        warnings: list[str] = []
        if pages and not any(p.strip() for p in pages):
            warnings.append("PDF has no text layer (scanned document?)")
            logger.warning("PDF with %d page(s) has no extractable text", len(pages))

        return ExtractionResult(text=clean_pdf_text(_PAGE_BREAK.join(pages)), warnings=warnings)

    @classmethod
    def _read_pages(cls, content: bytes | str | Path, fitz_module: object) -> list[str]:
        doc = cls._open_document(content, fitz_module)
        try:
            return [page.get_text("text") for page in doc]  # type: ignore[attr-defined]
        finally:
            doc.close()  # type: ignore[attr-defined]

    @staticmethod
    def _open_document(content: bytes | str | Path, fitz_module: object) -> object:
        """Open PDF from various input types."""
        fitz_mod = fitz_module  # type: ignore[assignment]
        if isinstance(content, Path):
            return fitz_mod.open(str(content))
        if isinstance(content, str):
            return fitz_mod.open(content)
        return fitz_mod.open(stream=content, filetype="pdf")


def clean_pdf_text(text: str) -> str:
    """Tidy raw PDF text.

    Form-feed page breaks become paragraph breaks, runs of spaces/tabs
    collapse to one space, trailing whitespace is stripped from every line
    and runs of blank lines collapse to a single blank line.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace(_PAGE_BREAK, "\n\n")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"[ \t]+$", "", text, flags=re.MULTILINE)
    text = re.sub(r"\n\s*\n+", "\n\n", text)
    return text.strip()
