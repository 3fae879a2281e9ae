# src/cache/models.py — v1
"""Cache domain models: ContextSnapshot, DocumentCacheStats."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel

from bankchat.core.models import ReloadReport


@dataclass(frozen=True)
class ContextSnapshot:
    """Cached context text and its fingerprint, always replaced together."""

    text: str
    fingerprint: str


class DocumentCacheStats(BaseModel):
    """Diagnostics for the document context cache."""

    documents_folder: Path
    ttl_seconds: int
    last_loaded: datetime | None = None
    content_length: int = 0
    content_fingerprint: str | None = None
    has_content: bool = False
    cache_age_seconds: float | None = None
    reload_count: int = 0
    last_report: ReloadReport | None = None
