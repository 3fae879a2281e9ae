# tests/unit/extraction/test_extractor_factory.py — v1
"""Tests for extraction/extractor_factory.py."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from bankchat.core.models import DocumentFormat, ExtractionResult, UnsupportedFormatError
from bankchat.extraction.docx_extractor import DocxExtractor
from bankchat.extraction.extractor_factory import (
    create_extractor,
    extract_document,
    format_for_path,
    is_supported,
    supported_extensions,
)
from bankchat.extraction.pdf_extractor import PdfExtractor


class TestCreateExtractor:
    def test_pdf(self):
        assert isinstance(create_extractor(DocumentFormat.PDF), PdfExtractor)

    def test_docx(self):
        assert isinstance(create_extractor(DocumentFormat.DOCX), DocxExtractor)


class TestFormatForPath:
    def test_known(self):
        assert format_for_path("dir/Report.PDF") is DocumentFormat.PDF

    def test_unknown(self):
        with pytest.raises(UnsupportedFormatError):
            format_for_path("notes.txt")

    def test_is_supported(self):
        assert is_supported("a.docx") is True
        assert is_supported("a.doc") is False

    def test_supported_extensions(self):
        assert supported_extensions() == [".docx", ".pdf"]


class TestExtractDocument:
    @pytest.mark.asyncio
    async def test_success_strips_text(self):
        extractor = AsyncMock()
        extractor.extract = AsyncMock(
            return_value=ExtractionResult(text="  body  \n", warnings=["w"])
        )
        result = await extract_document(b"x", DocumentFormat.PDF, "a.pdf", extractor=extractor)
        assert result.ok
        assert result.text == "body"
        assert result.warnings == ["w"]
        assert result.relative_path == "a.pdf"

    @pytest.mark.asyncio
    async def test_failure_never_raises(self):
        extractor = AsyncMock()
        extractor.extract = AsyncMock(side_effect=ValueError("corrupt"))
        result = await extract_document(b"x", DocumentFormat.DOCX, "bad.docx", extractor=extractor)
        assert not result.ok
        assert result.text == ""
        assert result.error == "ValueError: corrupt"

    @pytest.mark.asyncio
    async def test_real_corrupt_docx(self):
        result = await extract_document(b"garbage", DocumentFormat.DOCX, "bad.docx")
        assert not result.ok
        assert result.text == ""
