# tests/conftest.py — v1
"""Shared test fixtures for all unit tests.

Provides mock LLM clients, settings, sample DOCX/PDF files and a
controllable clock. No network access; documents are generated on disk
under ``tmp_path``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from bankchat.config.settings import Settings
from bankchat.llm.models import LLMResponse


def write_docx(path: Path, paragraphs: list[str], table: list[list[str]] | None = None) -> Path:
    """Write a small Word document with paragraphs and an optional table."""
    import docx

    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table:
        t = document.add_table(rows=len(table), cols=len(table[0]))
        for r, row in enumerate(table):
            for c, value in enumerate(row):
                t.cell(r, c).text = value
    path.parent.mkdir(parents=True, exist_ok=True)
    document.save(str(path))
    return path


def write_pdf(path: Path, pages: list[str]) -> Path:
    """Write a PDF with one text line per page."""
    import fitz

    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(str(path))
    doc.close()
    return path


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# === FIXTURES: Settings ===


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at an empty temp documents folder, no .env."""
    docs = tmp_path / "documents"
    docs.mkdir()
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        documents_folder=docs,
    )


@pytest.fixture
def documents_dir(settings: Settings) -> Path:
    return settings.documents_folder


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# === FIXTURES: Mock LLM ===


@pytest.fixture
def mock_llm_response() -> LLMResponse:
    """Standard mock completion response."""
    return LLMResponse(
        content="Net interest margin is net interest income over earning assets.",
        input_tokens=1200,
        output_tokens=80,
        cache_read_tokens=1024,
        model="gpt-4.1-mini",
        provider="openai",
        latency_ms=420,
    )


@pytest.fixture
def mock_llm_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseLLMClient with default response."""
    client = AsyncMock()
    client.complete = AsyncMock(return_value=mock_llm_response)
    client.provider_name = "mock"
    client.default_model = "gpt-4.1-mini"
    return client


# === FIXTURES: Document factories ===


@pytest.fixture
def make_docx():
    """Factory writing a DOCX file: ``make_docx(path, paragraphs, table=None)``."""
    return write_docx


@pytest.fixture
def make_pdf():
    """Factory writing a PDF file: ``make_pdf(path, pages)``."""
    return write_pdf
