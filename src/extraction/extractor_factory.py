# src/extraction/extractor_factory.py — v1
"""Factory: instantiate extractor from document format/extension.

The format set is closed: every ``DocumentFormat`` member has exactly one
extractor, and an unknown extension fails at lookup time.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bankchat.core.models import DocumentFormat, FileExtraction, UnsupportedFormatError
from bankchat.extraction.base_extractor import BaseExtractor
from bankchat.extraction.docx_extractor import DocxExtractor
from bankchat.extraction.pdf_extractor import PdfExtractor

logger = logging.getLogger(__name__)

_EXTRACTOR_REGISTRY: dict[DocumentFormat, type[BaseExtractor]] = {
    DocumentFormat.DOCX: DocxExtractor,
    DocumentFormat.PDF: PdfExtractor,
}


def create_extractor(fmt: DocumentFormat) -> BaseExtractor:
    """Create the extractor for a document format."""
    return _EXTRACTOR_REGISTRY[fmt]()


def format_for_path(path: str | Path) -> DocumentFormat:
    """Resolve the document format of a file from its extension.

    Raises:
        UnsupportedFormatError: If the extension has no extractor.
    """
    return DocumentFormat.from_extension(Path(path).suffix)


def supported_extensions() -> list[str]:
    """Return list of supported file extensions."""
    return sorted(fmt.extension for fmt in _EXTRACTOR_REGISTRY)


def is_supported(path: str | Path) -> bool:
    """Whether a file name carries a supported extension."""
    try:
        format_for_path(path)
    except UnsupportedFormatError:
        return False
    return True


async def extract_document(
    content: bytes | str | Path,
    fmt: DocumentFormat,
    name: str,
    extractor: BaseExtractor | None = None,
) -> FileExtraction:
    """Extract one document without raising.

    Malformed or unreadable input yields an empty-text ``FileExtraction``
    carrying the failure reason; the failure is logged, not escalated.

    Args:
        content: File path or in-memory bytes (uploads are never persisted).
        fmt: Document format of ``content``.
        name: Display name / relative path used in logs and reports.
        extractor: Extractor override; defaults to the registered one.
    """
    extractor = extractor or create_extractor(fmt)
    try:
        result = await extractor.extract(content)
    except Exception as e:
        reason = f"{type(e).__name__}: {e}"
        logger.error("Error extracting %s text from %s: %s", fmt.label, name, reason)
        return FileExtraction(relative_path=name, format=fmt, error=reason)

    return FileExtraction(
        relative_path=name,
        format=fmt,
        text=result.text.strip(),
        warnings=result.warnings,
    )
