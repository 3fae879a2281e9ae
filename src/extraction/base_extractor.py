# src/extraction/base_extractor.py — v1
"""Abstract extractor interface for document formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from bankchat.core.models import DocumentFormat, ExtractionResult


class BaseExtractor(ABC):
    """Unified interface for document format extractors.

    ``extract`` may raise on malformed input; callers that must not fail
    go through ``extractor_factory.extract_document``.
    """

    @property
    @abstractmethod
    def format(self) -> DocumentFormat:
        """Document format handled by this extractor."""

    @property
    def supported_extensions(self) -> list[str]:
        """File extensions this extractor handles (e.g., ['.pdf'])."""
        return [self.format.extension]

    @abstractmethod
    async def extract(self, content: bytes | str | Path) -> ExtractionResult:
        """Extract plain text from a file path or an in-memory buffer."""
