# src/extraction/docx_extractor.py — v2
"""DOCX extractor using python-docx.

Extracts paragraphs and table rows from Word documents in body order,
discarding formatting. Requires the 'python-docx' package.
"""

from __future__ import annotations

import asyncio
import io
import logging
import warnings
from pathlib import Path

from bankchat.core.models import DocumentFormat, ExtractionResult
from bankchat.extraction.base_extractor import BaseExtractor

logger = logging.getLogger(__name__)


class DocxExtractor(BaseExtractor):
    """Extractor for Word documents (.docx)."""

    @property
    def format(self) -> DocumentFormat:
        return DocumentFormat.DOCX

    async def extract(self, content: bytes | str | Path) -> ExtractionResult:
        """Extract raw text from a DOCX document in body order."""
        try:
            import docx
        except ImportError as e:
            raise ImportError(
                "python-docx package required for DOCX extraction: "
                "pip install python-docx"
            ) from e

        # Blocking parse runs in a worker thread
        text_parts, messages = await asyncio.to_thread(self._parse, content, docx)
        if messages:
            logger.warning("DOCX extraction warnings: %s", messages)

        return ExtractionResult(text="\n\n".join(text_parts).strip(), warnings=messages)

    @classmethod
    def _parse(cls, content: bytes | str | Path, docx_module: object) -> tuple[list[str], list[str]]:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            doc = cls._open_document(content, docx_module)
            text_parts = cls._collect_text(doc)
        return text_parts, [str(w.message) for w in caught]

    @classmethod
    def _collect_text(cls, doc: object) -> list[str]:
        """Paragraphs and table rows in body order (cells tab-separated)."""
        from docx.table import Table

        parts: list[str] = []
        for block in doc.iter_inner_content():  # type: ignore[attr-defined]
            if isinstance(block, Table):
                for row in block.rows:
                    line = cls._row_text(row)
                    if line:
                        parts.append(line)
            elif block.text.strip():
                parts.append(block.text)
        return parts

    @staticmethod
    def _row_text(row: object) -> str:
        cells: list[str] = []
        for cell in row.cells:  # type: ignore[attr-defined]
            value = cell.text.strip()
            # Merged cells repeat across the row
            if value and (not cells or cells[-1] != value):
                cells.append(value)
        return "\t".join(cells)

    @staticmethod
    def _open_document(content: bytes | str | Path, docx_module: object) -> object:
        """Open DOCX from various input types."""
        docx_mod = docx_module  # type: ignore[assignment]
        if isinstance(content, Path):
            return docx_mod.Document(str(content))
        if isinstance(content, str):
            p = Path(content)
            if p.is_file():
                return docx_mod.Document(content)
            raise FileNotFoundError(f"DOCX file not found: {content}")
        return docx_mod.Document(io.BytesIO(content))
