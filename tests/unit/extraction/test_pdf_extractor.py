# tests/unit/extraction/test_pdf_extractor.py — v1
"""Tests for extraction/pdf_extractor.py."""

from __future__ import annotations

import sys

import pytest

from bankchat.core.models import DocumentFormat
from bankchat.extraction.pdf_extractor import PdfExtractor, clean_pdf_text


class TestPdfExtractor:
    def test_format(self):
        assert PdfExtractor().format is DocumentFormat.PDF
        assert PdfExtractor().supported_extensions == [".pdf"]

    @pytest.mark.asyncio
    async def test_import_error_message(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "fitz", None)
        with pytest.raises(ImportError, match="pymupdf"):
            await PdfExtractor().extract(b"%PDF-1.4")

    @pytest.mark.asyncio
    async def test_extract_pages(self, tmp_path, make_pdf):
        path = make_pdf(tmp_path / "alm.pdf", ["Asset liability management", "Gap analysis"])
        result = await PdfExtractor().extract(path)
        assert "Asset liability management" in result.text
        assert "Gap analysis" in result.text
        assert result.text.index("Asset") < result.text.index("Gap")
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_extract_from_bytes(self, tmp_path, make_pdf):
        path = make_pdf(tmp_path / "a.pdf", ["Bytes page"])
        result = await PdfExtractor().extract(path.read_bytes())
        assert result.text == "Bytes page"

    @pytest.mark.asyncio
    async def test_no_text_layer_warning(self, tmp_path):
        import fitz

        path = tmp_path / "blank.pdf"
        doc = fitz.open()
        doc.new_page()
        doc.save(str(path))
        doc.close()

        result = await PdfExtractor().extract(path)
        assert result.text == ""
        assert any("no text layer" in w for w in result.warnings)

    @pytest.mark.asyncio
    async def test_corrupt_bytes_raise(self):
        with pytest.raises(Exception):
            await PdfExtractor().extract(b"not a pdf at all")


class TestCleanPdfText:
    def test_page_break_becomes_paragraph(self):
        assert clean_pdf_text("one\ftwo") == "one\n\ntwo"

    def test_collapses_spaces_and_tabs(self):
        assert clean_pdf_text("a  \t b") == "a b"

    def test_strips_trailing_whitespace(self):
        assert clean_pdf_text("line   \nnext") == "line\nnext"

    def test_collapses_blank_lines(self):
        assert clean_pdf_text("a\n\n\n \n\nb") == "a\n\nb"

    def test_crlf(self):
        assert clean_pdf_text("a\r\nb\rc") == "a\nb\nc"


class TestOffEventLoop:
    @pytest.mark.asyncio
    async def test_pages_read_in_worker_thread(self, tmp_path, make_pdf, monkeypatch):
        import threading

        path = make_pdf(tmp_path / "a.pdf", ["Threaded"])
        seen: list[int] = []
        original = PdfExtractor._read_pages

        def recording(content, fitz_module):
            seen.append(threading.get_ident())
            return original(content, fitz_module)

        monkeypatch.setattr(PdfExtractor, "_read_pages", staticmethod(recording))
        result = await PdfExtractor().extract(path)

        assert result.text == "Threaded"
        assert seen and seen[0] != threading.get_ident()
