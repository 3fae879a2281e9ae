# src/core/models.py — v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class UnsupportedFormatError(ValueError):
    """Raised when no extractor is available for a format."""


# === DOCUMENT FORMATS ===


class DocumentFormat(str, Enum):
    """Office document formats the context cache understands."""

    DOCX = "docx"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return f".{self.value}"

    @property
    def label(self) -> str:
        """Upper-case label used in prompts (e.g. 'PDF')."""
        return self.value.upper()

    @classmethod
    def from_extension(cls, extension: str) -> DocumentFormat:
        """Resolve a format from a file extension ('.pdf', 'PDF', 'docx').

        Raises:
            UnsupportedFormatError: If the extension is not a supported format.
        """
        ext = extension.lower().lstrip(".")
        for fmt in cls:
            if fmt.value == ext:
                return fmt
        raise UnsupportedFormatError(
            f"No extractor for format '.{ext}'. "
            f"Supported: {', '.join(f.extension for f in cls)}"
        )


# === ANALYSIS KINDS ===


class AnalysisKind(str, Enum):
    """Banking analysis categories that select an extra prompt context."""

    RATE_RISK = "rate-risk"
    NET_INTEREST = "net-interest"

    @classmethod
    def parse(cls, tag: str | AnalysisKind | None) -> AnalysisKind | None:
        """Parse an optional tag; blank means generic.

        Raises:
            ValueError: If the tag is not a known analysis kind.
        """
        if tag is None or isinstance(tag, AnalysisKind):
            return tag
        tag = tag.strip()
        if not tag:
            return None
        try:
            return cls(tag.lower())
        except ValueError:
            known = ", ".join(k.value for k in cls)
            raise ValueError(
                f"Unknown analysis type {tag!r}. Known: {known}"
            ) from None


# === EXTRACTION ===


class ExtractionResult(BaseModel):
    """Plain text extracted from a single document."""

    text: str
    warnings: list[str] = Field(default_factory=list)


class FileExtraction(BaseModel):
    """Outcome of extracting one file: text on success, reason on failure."""

    relative_path: str
    format: DocumentFormat
    text: str = ""
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None


class ReloadReport(BaseModel):
    """Batch result of one document-folder reload."""

    started_at: datetime
    files_found: int = 0
    files_processed: int = 0
    failures: list[FileExtraction] = Field(default_factory=list)
    content_changed: bool = False
    fingerprint: str | None = None
    content_length: int = 0
    directory_missing: bool = False
    duration_ms: int = 0

    @property
    def failure_count(self) -> int:
        return len(self.failures)
